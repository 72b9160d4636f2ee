"""
Unit tests for extracting and validating packing suggestions from provider text
"""
from datetime import date
from types import SimpleNamespace

import pytest

from app.core.exceptions import (
    ErrorCode,
    ExternalServiceError,
    ServiceNotConfiguredError,
    SuggestionFormatError,
)
from app.models.packing_list import ItemPriority
from app.models.trip import TripType
from app.services.suggestion_client import (
    PackingSuggestionClient,
    build_insight_prompts,
    build_packing_prompt,
    extract_json_object,
    parse_packing_suggestions,
)


def _trip():
    return SimpleNamespace(
        id=7,
        city="Reykjavik",
        country="Iceland",
        start_date=date(2026, 2, 1),
        end_date=date(2026, 2, 6),
        duration=5,
        trip_type=TripType.ADVENTURE,
    )


def test_extract_ignores_surrounding_prose_and_fences():
    text = 'Sure!\n```json\n{"categories": []}\n```\nEnjoy.'
    assert extract_json_object(text) == '{"categories": []}'


def test_extract_handles_nested_objects_and_braces_in_strings():
    text = 'prefix {"a": {"b": "curly } and { inside"}, "c": "esc \\" }"} trailing }'
    assert extract_json_object(text) == '{"a": {"b": "curly } and { inside"}, "c": "esc \\" }"}'


def test_extract_returns_first_object_only():
    assert extract_json_object('{"a": 1} {"b": 2}') == '{"a": 1}'


def test_extract_without_object_raises():
    with pytest.raises(SuggestionFormatError) as exc:
        extract_json_object("I cannot help with that.")
    assert exc.value.error_code == ErrorCode.AI_RESPONSE_INVALID
    assert exc.value.status_code == 502


def test_extract_unbalanced_raises():
    with pytest.raises(SuggestionFormatError):
        extract_json_object('{"categories": [')


def test_parse_fills_defaults_and_normalizes_priority():
    result = parse_packing_suggestions(
        '{"categories": [{"name": "Gear", "items": ['
        '{"name": "Headlamp", "priority": "ESSENTIAL", "aiSuggested": true},'
        '{"name": "Map"}]}]}'
    )
    headlamp, map_item = result.categories[0].items

    assert headlamp.priority == ItemPriority.ESSENTIAL
    assert headlamp.quantity == 1
    assert map_item.priority == ItemPriority.IMPORTANT


def test_parse_rejects_invalid_json():
    with pytest.raises(SuggestionFormatError) as exc:
        parse_packing_suggestions("{'categories': []}")
    assert "not valid JSON" in exc.value.message


@pytest.mark.parametrize(
    "payload",
    [
        '{"items": []}',
        '{"categories": [{"items": []}]}',
        '{"categories": [{"name": "Gear", "items": [{"name": "Tent", "priority": "urgent"}]}]}',
        '{"categories": [{"name": "Gear", "items": [{"name": "Tent", "quantity": 0}]}]}',
    ],
)
def test_parse_rejects_wrong_shape(payload):
    with pytest.raises(SuggestionFormatError) as exc:
        parse_packing_suggestions(payload)
    assert exc.value.details["validation_errors"]


def test_packing_prompt_mentions_trip_details():
    prompt = build_packing_prompt(_trip())
    assert "adventure trip to Reykjavik, Iceland" in prompt
    assert "2026-02-01 to 2026-02-06 (5 days)" in prompt
    assert '"categories"' in prompt


def test_insight_prompts_cover_three_topics():
    prompts = build_insight_prompts(_trip())
    assert list(prompts) == ["packing_recommendations", "travel_tips", "local_attractions"]
    assert all("Reykjavik, Iceland" in p for p in prompts.values())


@pytest.mark.asyncio
async def test_suggest_packing_list_uses_configured_model(suggestion_factory):
    client = suggestion_factory()
    result = await client.suggest_packing_list(_trip())

    assert [c.name for c in result.categories] == ["Clothing", "Documents"]
    call = client.client.calls[0]
    assert call["model"] == "gemini-2.0-flash-lite"
    assert "Reykjavik" in call["contents"]


@pytest.mark.asyncio
async def test_provider_failure_is_wrapped(suggestion_factory):
    client = suggestion_factory(error=RuntimeError("quota exceeded"))
    with pytest.raises(ExternalServiceError) as exc:
        await client.suggest_packing_list(_trip())
    assert exc.value.error_code == ErrorCode.AI_PROVIDER_ERROR
    assert exc.value.details["service_name"] == "gemini"


@pytest.mark.asyncio
async def test_empty_reply_is_provider_error(suggestion_factory):
    client = suggestion_factory(reply="")
    with pytest.raises(ExternalServiceError) as exc:
        await client.generate_text("hello")
    assert exc.value.error_code == ErrorCode.AI_PROVIDER_ERROR


@pytest.mark.asyncio
async def test_missing_api_key_is_not_configured():
    client = PackingSuggestionClient(api_key=None, model="gemini-2.0-flash-lite")
    with pytest.raises(ServiceNotConfiguredError) as exc:
        await client.generate_text("hello")
    assert exc.value.status_code == 503


@pytest.mark.asyncio
async def test_trip_insights_keys_map_to_replies(suggestion_factory):
    client = suggestion_factory(reply="Bring layers.")
    insights = await client.suggest_trip_insights(_trip())

    assert insights == {
        "packing_recommendations": "Bring layers.",
        "travel_tips": "Bring layers.",
        "local_attractions": "Bring layers.",
    }
    assert len(client.client.calls) == 3
