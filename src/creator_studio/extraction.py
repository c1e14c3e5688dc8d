"""
Turn raw model text into decoded JSON values.

Models asked for JSON by instruction alone tend to wrap it in markdown
fences or conversational prose. The helpers here recover the JSON payload
and never raise: any failure degrades to a caller-supplied default.
"""

import json
import logging
import re
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json[ \t]*\r?\n(.*?)```", re.DOTALL | re.IGNORECASE)
# A language tag only counts as one when the fence line ends after it
_ANY_FENCE = re.compile(r"```(?:[\w+.-]+[ \t]*\r?\n)?(.*?)```", re.DOTALL)

_MISSING = object()


class ParseOutcome(str, Enum):
    """How much of a model response survived decoding and normalization"""
    VALID = "valid"
    PARTIAL = "partial"
    UNPARSABLE = "unparsable"


class ParsedResponse(BaseModel):
    """Decoded response data plus whether decoding succeeded"""
    data: Any = None
    outcome: ParseOutcome = ParseOutcome.UNPARSABLE


def extract_fenced_block(text: str) -> Optional[str]:
    """Return the interior of the first JSON fence, else of the first fence"""
    match = _JSON_FENCE.search(text) or _ANY_FENCE.search(text)
    if match:
        return match.group(1)
    return None


def find_json_span(text: str) -> Optional[str]:
    """
    Slice from the first opening brace/bracket to the last closing one.

    Handles both object and array roots: the start is whichever of ``{`` or
    ``[`` occurs first, the end whichever of ``}`` or ``]`` occurs last.
    """
    openings = [i for i in (text.find("{"), text.find("[")) if i != -1]
    closings = [i for i in (text.rfind("}"), text.rfind("]")) if i != -1]
    if not openings or not closings:
        return None

    start, end = min(openings), max(closings)
    if end < start:
        return None
    return text[start:end + 1]


def candidate_text(text: str) -> str:
    """Best guess at the JSON payload inside a model response"""
    clean = text.strip()

    fenced = extract_fenced_block(clean)
    if fenced is not None:
        return fenced

    span = find_json_span(clean)
    if span is not None:
        return span

    return clean


def _log_failure(exc: Exception, text: str):
    logger.warning("Failed to parse AI response JSON: %s. Raw text: %.500s", exc, text)


def extract_json(text: Optional[str], default: Any) -> Any:
    """
    Decode JSON from a model response, tolerating fences and prose.

    Returns ``default`` unchanged when the text is empty or nothing decodes.
    """
    if not text or not text.strip():
        return default

    try:
        return json.loads(candidate_text(text))
    except (ValueError, TypeError, RecursionError) as e:
        _log_failure(e, text)
        return default


def decode_json(text: Optional[str], default: Any) -> Any:
    """
    Decode a schema-constrained response.

    A markdown fence is still unwrapped, but there is no brace scanning
    through surrounding prose.
    """
    if not text or not text.strip():
        return default

    clean = text.strip()
    fenced = extract_fenced_block(clean)
    try:
        return json.loads(fenced if fenced is not None else clean)
    except (ValueError, TypeError, RecursionError) as e:
        _log_failure(e, text)
        return default


def parse_response(text: Optional[str], strict: bool = False) -> ParsedResponse:
    """Decode a response and record whether it decoded at all"""
    decoder = decode_json if strict else extract_json
    data = decoder(text, _MISSING)

    if data is _MISSING:
        return ParsedResponse(data=None, outcome=ParseOutcome.UNPARSABLE)
    return ParsedResponse(data=data, outcome=ParseOutcome.VALID)
