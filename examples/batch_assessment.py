"""neoimpact Batch Assessment — assess a list of objects with live enrichments.

Uses Nominatim for place names, the USGS catalog for seismic history and,
when GROQ_API_KEY is set, an LLM narrative. Any enrichment that fails or
times out is listed under "degraded"; the physics is always reported.
"""

import logging
import os

from neoimpact import (
    ConsequenceOrchestrator,
    GroqNarrator,
    NominatimGeocoder,
    ObjectParameters,
    TrajectoryPredictor,
    USGSSeismicClient,
)

logging.basicConfig(level=logging.INFO)

objects = [
    ObjectParameters(diameter_m=20, velocity_km_s=19, name="Chelyabinsk-like"),
    ObjectParameters(diameter_m=50, velocity_km_s=15, name="Tunguska-like"),
    ObjectParameters(diameter_m=370, velocity_km_s=7.4, miss_distance_km=38_000, name="Apophis-like"),
    ObjectParameters(diameter_m=1000, velocity_km_s=25, latitude=35.7, longitude=139.7, name="Tokyo 1 km"),
]

narrator = GroqNarrator.from_env() if os.environ.get("GROQ_API_KEY") else None

orchestrator = ConsequenceOrchestrator(
    predictor=TrajectoryPredictor(seed=2029),
    seismic=USGSSeismicClient(),
    geocoder=NominatimGeocoder(user_agent="neoimpact-example/0.1"),
    narrator=narrator,
    enrichment_timeout_s=15.0,
)

for a in orchestrator.assess_many(objects, max_workers=2):
    g = a.geometry
    print(f"{a.params.name:<18} {a.threat_level.value:<12} {a.energy.megatons_tnt:>12.3g} MT  "
          f"{g.terrain.value:<8} {a.casualties.total:>12,} deaths  ${a.economic_damage_billion_usd:.1f}B")
    if g.place_name:
        print(f"    {g.place_name}")
    if a.degraded:
        print(f"    degraded: {', '.join(a.degraded)}")
    if a.narrative:
        print(f"    {a.narrative}")
