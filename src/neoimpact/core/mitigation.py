"""Threat levels and the offline summary and mitigation text."""

from __future__ import annotations

import math
from enum import Enum


class ThreatLevel(Enum):
    """Overall threat category from impact energy.

    LOW corresponds to a minimal or local event, MODERATE to a local one,
    HIGH to a regional one and CATASTROPHIC to a global one.
    """

    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CATASTROPHIC = "CATASTROPHIC"

    @property
    def scope(self) -> str:
        return _SCOPES[self]


_SCOPES = {
    ThreatLevel.LOW: "MINIMAL",
    ThreatLevel.MODERATE: "LOCAL",
    ThreatLevel.HIGH: "REGIONAL",
    ThreatLevel.CATASTROPHIC: "GLOBAL",
}


def size_word(diameter_m: float) -> str:
    if diameter_m > 1000:
        return "massive"
    if diameter_m > 500:
        return "large"
    if diameter_m > 100:
        return "medium"
    return "small"


def quick_analysis(
    threat: ThreatLevel,
    diameter_m: float,
    megatons: float,
    population_at_risk: int,
) -> str:
    """One-sentence plain-language summary of the threat."""
    size = size_word(diameter_m)
    people = f"{population_at_risk:,}"
    if threat is ThreatLevel.CATASTROPHIC:
        return (
            f"This {size} asteroid ({megatons:.1f} MT) could cause global devastation "
            f"affecting {people} people in the immediate impact zone."
        )
    if threat is ThreatLevel.HIGH:
        return f"This {size} asteroid ({megatons:.1f} MT) poses significant regional threat to {people} people."
    if threat is ThreatLevel.MODERATE:
        return f"This {size} asteroid ({megatons:.1f} MT) could cause localized damage affecting {people} people."
    return f"This {size} asteroid ({megatons:.1f} MT) presents minimal threat with limited impact."


def mitigation_strategies(
    threat: ThreatLevel,
    *,
    megatons: float,
    affected_radius_km: float,
    latitude: float,
    longitude: float,
    terrain: str,
    hours_to_impact: float,
    earthquake_magnitude: float,
    tsunami_height_m: float,
    population_at_risk: int,
) -> str:
    """Physics-based mitigation paragraph for a threat level.

    Args:
        threat: Threat category.
        megatons: Impact energy in MT.
        affected_radius_km: Radius of significant damage.
        latitude: Impact latitude.
        longitude: Impact longitude.
        terrain: Terrain label at ground zero.
        hours_to_impact: Warning time in hours.
        earthquake_magnitude: Impact quake magnitude.
        tsunami_height_m: Wave height, 0.0 on land.
        population_at_risk: People in the affected area.

    Returns:
        A single paragraph of recommended actions.
    """
    site = f"{latitude:.2f}°, {longitude:.2f}°"
    hours = math.ceil(hours_to_impact)
    tsunami = tsunami_height_m > 0.0
    people = f"{population_at_risk:,}"

    if threat is ThreatLevel.CATASTROPHIC:
        days = max(1, math.ceil(hours_to_impact / 24.0))
        text = (
            f"For this catastrophic {megatons:.0f} MT impact scenario, immediate global coordination is essential: "
            f"evacuate all populations within {round(affected_radius_km * 2)} km of the predicted impact zone at {site} "
            f"with at least {days} days notice, deploy kinetic impactors or gravity tractors for deflection if "
            f"sufficient warning time exists, establish underground shelters and hardened infrastructure in major "
            f"population centers globally, stockpile food and medical supplies for extended climate disruption, "
            f"coordinate international emergency response teams for M{earthquake_magnitude:.1f} equivalent seismic "
            f"rescue operations"
        )
        if tsunami:
            text += (
                f", implement ocean-wide tsunami warning systems with mandatory coastal evacuations for "
                f"{tsunami_height_m:.0f}m wave heights"
            )
        return text + (
            ", and prepare for long-term agricultural disruption from atmospheric dust causing potential "
            "global cooling effects."
        )

    if threat is ThreatLevel.HIGH:
        text = (
            f"To mitigate this high-threat {megatons:.1f} MT impact affecting {people} people, establish mandatory "
            f"evacuation zones within {round(affected_radius_km)} km of impact coordinates ({site}), reinforce "
            f"critical infrastructure and hospitals in the surrounding {round(affected_radius_km * 3)} km region to "
            f"withstand M{earthquake_magnitude:.1f} seismic activity, deploy early-warning systems for the {hours} "
            f"hour approach window, pre-position emergency response teams and medical supplies outside the damage "
            f"radius"
        )
        if tsunami:
            text += (
                f", activate coastal tsunami evacuation protocols for {tsunami_height_m:.0f}m waves with safe zones "
                f"above 30m elevation"
            )
        return text + (
            ", consider last-resort deflection attempts if lead time permits, establish emergency communication "
            "networks and backup power systems, and coordinate regional disaster response across national "
            "boundaries."
        )

    if threat is ThreatLevel.MODERATE:
        text = (
            f"For this moderate {megatons:.2f} MT threat affecting an estimated {people} people, implement "
            f"precautionary evacuations within {round(affected_radius_km * 0.5)} km of the predicted {terrain} impact "
            f"site at {site}, strengthen and retrofit structures within {round(affected_radius_km * 1.5)} km to "
            f"handle M{earthquake_magnitude:.1f} ground shaking, establish emergency shelters and evacuation routes, "
            f"deploy rapid response medical and search-and-rescue teams to staging areas, maintain real-time "
            f"tracking during the {hours} hour final approach"
        )
        if tsunami:
            text += ", issue tsunami advisories for coastal regions with evacuation recommendations for low-lying areas"
        return text + (
            ", stockpile water, food and first aid equipment, and coordinate with local authorities on public "
            "awareness and preparedness."
        )

    return (
        f"Despite the relatively low {megatons:.3f} MT energy of this impact, prudent preparedness measures should "
        f"include monitoring the final trajectory during the {hours} hour approach, advising residents within "
        f"{round(affected_radius_km)} km of the expected {terrain} impact zone at {site} to stay indoors and away "
        f"from windows, preparing for minor M{earthquake_magnitude:.1f} seismic activity and localized power "
        f"outages, keeping emergency services on standby, and documenting the event for scientific research."
    )
