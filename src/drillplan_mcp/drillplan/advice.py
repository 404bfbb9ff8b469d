"""Advisory text from Gemini. Nothing here feeds back into the plan."""

import json
import logging

from google import genai
from google.genai import types as genai_types

from drillplan_mcp.drillplan.config import DEFAULT_ADVICE_MODEL

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = "You are a world-class high performance coach and sport scientist."
FALLBACK_ADVICE = "Keep pushing the limits of science and performance."


def _advice_prompt(team_name: str, drill_summary: str) -> str:
    return (
        "As an elite sport scientist, provide a brief (2-3 sentences) analysis and advice "
        f'for a training plan named "{team_name}" with the following drills: {drill_summary}.'
    )


def _suggestions_prompt(category: str) -> str:
    return (
        "Suggest 5 advanced drills for high performance athletes in the category: "
        f"{category}. Return the result as a JSON array of strings."
    )


class AdviceService:
    """Wraps the google-genai async client. Without an API key every call returns its fallback."""

    def __init__(self, api_key: str = "", model: str = DEFAULT_ADVICE_MODEL, client=None):
        if client is None and api_key:
            client = genai.Client(api_key=api_key)
        self.client = client
        self.model = model

    async def training_advice(self, team_name: str, drill_summary: str) -> str:
        if self.client is None:
            return FALLBACK_ADVICE
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=_advice_prompt(team_name, drill_summary),
                config=genai_types.GenerateContentConfig(system_instruction=SYSTEM_INSTRUCTION),
            )
        except Exception:
            logger.exception("Training advice request failed")
            return FALLBACK_ADVICE
        return response.text or ""

    async def drill_suggestions(self, category: str) -> list[str]:
        if self.client is None:
            return []
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=_suggestions_prompt(category),
                config=genai_types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=list[str],
                ),
            )
            suggestions = json.loads(response.text or "[]")
        except Exception:
            logger.exception("Drill suggestion request failed")
            return []
        if not isinstance(suggestions, list):
            return []
        return [str(s) for s in suggestions]
