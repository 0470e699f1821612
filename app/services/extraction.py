"""
Turning the model's free-form reply into an AIAgentResponse.

The reply is expected to contain one JSON object, possibly wrapped in prose
or a markdown code fence. The candidate payload is the greedy span from the
first "{" to the last "}", matching how replies have always been read; prose
containing its own braces before or after the object will therefore produce
MalformedJson rather than being skipped.
"""

import json
import logging
from typing import Any, Dict

from pydantic import ValidationError

from app.errors import InvalidShape, MalformedJson, NoJsonFound, excerpt
from app.models.property import AIAgentResponse

logger = logging.getLogger(__name__)


def extract_json_span(text: str, excerpt_length: int = 200) -> str:
    """
    Return the outermost brace-delimited span of the text.

    Raises:
        NoJsonFound: If there is no "{" followed later by a "}".
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise NoJsonFound(excerpt(text, excerpt_length))
    return text[start : end + 1]


def decode_json(span: str, excerpt_length: int = 200) -> Any:
    try:
        return json.loads(span)
    except json.JSONDecodeError as e:
        raise MalformedJson(excerpt(span, excerpt_length), reason=e.msg) from e


def validate_shape(data: Any, span: str = "", excerpt_length: int = 200) -> AIAgentResponse:
    """
    Check the decoded value and build the typed response.

    Raises:
        InvalidShape: If the value is not an object, has no list under
            "recommendations", or a record is not an object.
    """
    snippet = excerpt(span, excerpt_length)
    if not isinstance(data, dict):
        raise InvalidShape(f"expected an object, got {type(data).__name__}", snippet)
    if not isinstance(data.get("recommendations"), list):
        raise InvalidShape("'recommendations' is missing or not a list", snippet)

    try:
        return AIAgentResponse.model_validate(data)
    except ValidationError as e:
        raise InvalidShape(_describe(e), snippet) from e


def _describe(error: ValidationError) -> str:
    first: Dict[str, Any] = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']} ({error.error_count()} error(s))"


def parse_agent_response(text: str, excerpt_length: int = 200) -> AIAgentResponse:
    """Extract, decode and validate the agent reply in one go."""
    span = extract_json_span(text, excerpt_length)
    data = decode_json(span, excerpt_length)
    response = validate_shape(data, span, excerpt_length)
    logger.debug("Decoded %d recommendations", len(response.recommendations))
    return response
