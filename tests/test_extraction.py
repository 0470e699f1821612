import json

import pytest

from app.errors import InvalidShape, MalformedJson, NoJsonFound
from app.services.extraction import (
    decode_json,
    extract_json_span,
    parse_agent_response,
    validate_shape,
)

EMPTY_REPLY = (
    'Here you go: {"recommendations":[],"searchSummary":"none",'
    '"nextSteps":[],"additionalQuestions":[]} thanks'
)


def test_extracts_outermost_object_from_prose():
    span = extract_json_span('Sure! {"a": {"b": 1}} Let me know.')
    assert span == '{"a": {"b": 1}}'


def test_extracts_object_inside_code_fence(agent_reply, agent_payload):
    span = extract_json_span(agent_reply)
    assert json.loads(span) == agent_payload


@pytest.mark.parametrize("text", ["no json here", "", "closing } before opening {"])
def test_no_braces_raises_no_json_found(text):
    with pytest.raises(NoJsonFound):
        extract_json_span(text)


def test_unbalanced_braces_raise_no_json_found():
    with pytest.raises(NoJsonFound):
        parse_agent_response('Result: {"recommendations": [')


def test_no_json_found_carries_truncated_excerpt():
    text = "x" * 500
    with pytest.raises(NoJsonFound) as exc_info:
        extract_json_span(text, excerpt_length=50)

    assert exc_info.value.raw_excerpt == "x" * 50 + "..."
    assert len(str(exc_info.value)) < 150


def test_malformed_json_carries_excerpt():
    with pytest.raises(MalformedJson) as exc_info:
        decode_json("{'recommendations': []}")

    assert "recommendations" in exc_info.value.raw_excerpt
    assert exc_info.value.reason


def test_prose_braces_around_object_are_malformed():
    text = 'Note {draft} then {"recommendations": []} end'
    with pytest.raises(MalformedJson):
        parse_agent_response(text)


def test_empty_recommendation_reply_decodes():
    response = parse_agent_response(EMPTY_REPLY)

    assert response.recommendations == []
    assert response.search_summary == "none"
    assert response.next_steps == []
    assert response.additional_questions == []


def test_full_reply_decodes(agent_reply):
    response = parse_agent_response(agent_reply)

    [rec] = response.recommendations
    assert rec.id == "prop-1"
    assert rec.square_feet == 1640
    assert rec.match_score == 92
    assert rec.reasons_for_match[1] == "Two-car garage"
    assert response.next_steps == ["Schedule a viewing", "Get pre-approved"]


@pytest.mark.parametrize(
    "data",
    [
        {"searchSummary": "missing list"},
        {"recommendations": None},
        {"recommendations": "three houses"},
        {"recommendations": {"id": "1"}},
    ],
)
def test_recommendations_must_be_a_list(data):
    with pytest.raises(InvalidShape, match="recommendations"):
        validate_shape(data)


def test_non_object_is_invalid_shape():
    with pytest.raises(InvalidShape, match="expected an object"):
        validate_shape([{"recommendations": []}])


def test_non_object_record_is_invalid_shape(agent_payload):
    agent_payload["recommendations"].append("a lovely loft downtown")
    with pytest.raises(InvalidShape, match="recommendations.1"):
        validate_shape(agent_payload, json.dumps(agent_payload))


@pytest.mark.parametrize(
    "field, value",
    [
        ("matchScore", 87.5),
        ("squareFeet", 1850.5),
        ("yearBuilt", None),
        ("bedrooms", 2.5),
        ("price", None),
    ],
)
def test_fractional_or_null_numbers_are_accepted(agent_payload, field, value):
    agent_payload["recommendations"][0][field] = value

    [rec] = parse_agent_response(json.dumps(agent_payload)).recommendations

    assert rec.model_dump(by_alias=True)[field] == value
    assert rec.title == "Craftsman Bungalow in Mueller"


def test_land_listing_without_building_fields_decodes():
    reply = json.dumps(
        {
            "recommendations": [
                {"id": 7, "title": "Five acres near Dripping Springs", "price": 185000, "matchScore": 64}
            ]
        }
    )

    [rec] = parse_agent_response(reply).recommendations

    assert rec.id == "7"
    assert rec.square_feet is None
    assert rec.year_built is None
    assert rec.features == []


def test_many_unclosed_braces_raise_no_json_found():
    with pytest.raises(NoJsonFound):
        extract_json_span("{" * 100_000)
