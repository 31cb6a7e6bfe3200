"""neoimpact Quickstart — assess one hypothetical impact offline."""

from neoimpact import ConsequenceOrchestrator, ObjectParameters, TectonicZoneLookup, TrajectoryPredictor

# A 100 m stony object approaching at 20 km/s
params = ObjectParameters(diameter_m=100, velocity_km_s=20, miss_distance_km=100_000, name="2024 XQ")

orchestrator = ConsequenceOrchestrator(
    predictor=TrajectoryPredictor(seed=42),
    seismic=TectonicZoneLookup(),
)
a = orchestrator.assess(params)

g = a.geometry
print(f"Object:     {params.name}")
print(f"Impact at:  {g.latitude:.2f}°, {g.longitude:.2f}° ({g.terrain.value})")
print(f"Nearest:    {g.nearest_city} ({g.nearest_city_distance_km:.0f} km)")
print(f"Energy:     {a.energy.megatons_tnt:.1f} MT ({a.energy_comparison})")
print(f"Crater:     {a.effects.crater_diameter_km:.2f} km")
print(f"Quake:      M{a.effects.earthquake_magnitude:.1f}")
print(f"Tsunami:    {a.effects.tsunami_height_m:.1f} m")
print(f"Casualties: {a.casualties.total:,}")
print(f"Threat:     {a.threat_level.value} ({a.threat_level.scope})")
print(f"Zone:       {a.seismic_zone.zone_name}")
print()
print(a.quick_analysis)
print()
print(a.mitigation)
