"""LLM narrative client.

Turns the numeric assessment into a mitigation paragraph through an
OpenAI-compatible chat-completions endpoint (Groq by default). The
client is an ordinary object handed to the orchestrator; nothing here is
created at import time.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

import requests

logger = logging.getLogger(__name__)

_DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"

SYSTEM_PROMPT = (
    "You are a planetary defense expert specializing in disaster mitigation. "
    "Provide a single comprehensive paragraph with actionable strategies."
)


def build_prompt(summary: dict[str, Any]) -> str:
    """Render an assessment summary into the user prompt."""
    lines = [
        "Generate a single comprehensive paragraph of mitigation strategies for an asteroid impact "
        "scenario with these parameters:",
        "",
        f"THREAT LEVEL: {summary.get('threat_level')}",
        f"IMPACT ENERGY: {summary.get('megatons_tnt', 0.0):.2e} MT TNT equivalent",
        f"CRATER DIAMETER: {summary.get('crater_diameter_km', 0.0):.2f} km",
        f"EARTHQUAKE MAGNITUDE: M{summary.get('earthquake_magnitude', 0.0):.1f}",
        f"AFFECTED RADIUS: {summary.get('affected_radius_km', 0.0):.1f} km",
        f"POPULATION AT RISK: {summary.get('affected_population', 0):,}",
        f"IMPACT LOCATION: {summary.get('terrain')} at "
        f"{summary.get('latitude', 0.0):.2f}°, {summary.get('longitude', 0.0):.2f}°",
    ]
    if summary.get("tsunami_height_m", 0.0) > 5.0:
        lines.append(f"TSUNAMI HEIGHT: {summary['tsunami_height_m']:.1f} meters")
    if summary.get("energy_comparison"):
        lines.append(f"HISTORICAL COMPARISON: {summary['energy_comparison']}")
    lines += [
        "",
        "Provide ONLY a single paragraph (no lists, no formatting) with actionable mitigation strategies "
        "prioritized by effectiveness. Be specific and realistic based on the threat level.",
    ]
    return "\n".join(lines)


@dataclass
class GroqNarrator:
    """Chat-completions narrator.

    Args:
        api_key: API key for the endpoint.
        model: Model identifier.
        base_url: API root. Any OpenAI-compatible endpoint works.
        temperature: Sampling temperature.
        max_tokens: Response token cap.
        timeout: Per-request timeout in seconds.
        min_length: Shorter replies are rejected.

    Example::

        narrator = GroqNarrator.from_env()
        orchestrator = ConsequenceOrchestrator(narrator=narrator)
    """

    api_key: str
    model: str = "openai/gpt-oss-120b"
    base_url: str = _DEFAULT_BASE_URL
    temperature: float = 0.3
    max_tokens: int = 500
    timeout: float = 30.0
    min_length: int = 50
    _session: requests.Session = field(default_factory=requests.Session, repr=False)

    @classmethod
    def from_env(cls, var: str = "GROQ_API_KEY", **kwargs: Any) -> GroqNarrator:
        """Build a narrator from an API key in the environment.

        Raises:
            ValueError: If the variable is unset or empty.
        """
        api_key = os.environ.get(var)
        if not api_key:
            logger.error("%s is not set", var)
            raise ValueError(f"Environment variable {var} is not set")
        return cls(api_key=api_key, **kwargs)

    def narrate(self, summary: dict[str, Any]) -> str:
        """Generate a mitigation paragraph for an assessment summary.

        Args:
            summary: Flat numeric summary of the assessment.

        Returns:
            The model's paragraph.

        Raises:
            requests.HTTPError: If the request fails.
            ValueError: If the reply is missing or too short.
        """
        response = self._session.post(
            f"{self.base_url}/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(summary)},
                ],
                "temperature": self.temperature,
                "max_tokens": self.max_tokens,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()

        try:
            content = response.json()["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as exc:
            logger.error("Malformed chat-completions response")
            raise ValueError("Malformed chat-completions response") from exc

        text = content.strip()
        if len(text) <= self.min_length:
            logger.error("Narrative too short (%d chars)", len(text))
            raise ValueError(f"Narrative too short ({len(text)} chars)")
        return text
