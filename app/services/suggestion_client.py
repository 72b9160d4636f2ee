"""
Packing suggestion client backed by Google Gemini.

Builds prompts from trip attributes, calls the text-generation provider and
turns its free-form reply into a validated packing-list payload.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

from google import genai
from pydantic import ValidationError

from app.core.exceptions import ExternalServiceError, ServiceNotConfiguredError, SuggestionFormatError
from app.models.trip import Trip
from app.schemas.packing import SuggestedPackingList

logger = logging.getLogger(__name__)


PACKING_PROMPT_TEMPLATE = """Create a detailed packing list for a {trip_type} trip to {city}, {country} from {start_date} to {end_date} ({duration} days).

Return the response in this exact JSON format:
{{
  "categories": [
    {{
      "name": "Clothing",
      "items": [
        {{
          "name": "T-shirts",
          "quantity": 3,
          "priority": "essential",
          "aiSuggested": true
        }}
      ]
    }}
  ]
}}

Include categories like: Clothing, Electronics, Toiletries, Documents, Accessories, Shoes, Weather Gear, Medications, Entertainment, Food & Snacks.
Set priority as: essential, important, or optional.
Consider the weather, trip duration, and trip type."""


def build_packing_prompt(trip: Trip) -> str:
    """Prompt asking for categories/items/priority/aiSuggested as JSON."""
    return PACKING_PROMPT_TEMPLATE.format(
        trip_type=trip.trip_type.value,
        city=trip.city,
        country=trip.country,
        start_date=trip.start_date.isoformat(),
        end_date=trip.end_date.isoformat(),
        duration=trip.duration,
    )


def build_insight_prompts(trip: Trip) -> Dict[str, str]:
    place = f"{trip.city}, {trip.country}"
    trip_type = trip.trip_type.value
    return {
        "packing_recommendations": (
            f"Generate packing recommendations for a {trip_type} trip to {place} "
            f"from {trip.start_date.isoformat()} to {trip.end_date.isoformat()}. "
            "Consider the weather and trip duration."
        ),
        "travel_tips": (
            f"Provide helpful travel tips for visiting {place} for a {trip_type} trip. "
            "Include local customs, transportation, and safety tips."
        ),
        "local_attractions": (
            f"Suggest top attractions and activities in {place} for a {trip_type} trip. "
            "Include brief descriptions and ratings."
        ),
    }


def extract_json_object(text: str) -> str:
    """
    Return the first balanced ``{...}`` substring of ``text``.

    Braces inside JSON strings are ignored, so commentary or markdown fences
    around the object do not matter.

    Raises:
        SuggestionFormatError: no balanced object in the text
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
            elif char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start:index + 1]
        # Unbalanced from this brace; an unterminated string swallowed the rest
        start = text.find("{", start + 1)
    raise SuggestionFormatError("No JSON object found in AI response")


def parse_packing_suggestions(text: str) -> SuggestedPackingList:
    """
    Extract, decode and validate the provider's packing-list payload.

    Raises:
        SuggestionFormatError: no object, undecodable JSON, or wrong shape
    """
    raw = extract_json_object(text)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SuggestionFormatError(f"AI response is not valid JSON: {e.msg}") from e

    try:
        return SuggestedPackingList.model_validate(data)
    except ValidationError as e:
        errors = [
            {"field": ".".join(str(loc) for loc in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise SuggestionFormatError(
            "AI response does not match the packing list format",
            details={"validation_errors": errors},
        ) from e


class PackingSuggestionClient:
    """Text-generation adapter for packing lists and trip insights."""

    def __init__(self, api_key: Optional[str], model: str, client: Optional[Any] = None):
        self.model = model
        self.client = client or (genai.Client(api_key=api_key) if api_key else None)

        if not self.client:
            logger.warning("Gemini API key not configured. Set GEMINI_API_KEY in .env file.")

    async def generate_text(self, prompt: str) -> str:
        """Run one prompt through the provider and return the reply text."""
        if not self.client:
            raise ServiceNotConfiguredError("gemini")

        try:
            # The SDK call is blocking; keep it off the event loop
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=prompt,
            )
        except Exception as e:
            logger.error(f"Gemini request failed: {e}", exc_info=True)
            raise ExternalServiceError("gemini", f"Text generation failed: {e}") from e

        text = response.text
        if not text:
            raise ExternalServiceError("gemini", "Text generation returned an empty response")

        logger.debug(f"Gemini response: {text[:500]}...")
        return text

    async def suggest_packing_list(self, trip: Trip) -> SuggestedPackingList:
        text = await self.generate_text(build_packing_prompt(trip))
        suggestions = parse_packing_suggestions(text)
        logger.info(
            f"Parsed {len(suggestions.categories)} suggested categories for trip {trip.id}"
        )
        return suggestions

    async def suggest_trip_insights(self, trip: Trip) -> Dict[str, str]:
        """Packing recommendations, travel tips and attractions as free text."""
        prompts = build_insight_prompts(trip)
        replies = await asyncio.gather(*(self.generate_text(p) for p in prompts.values()))
        return dict(zip(prompts.keys(), replies))
