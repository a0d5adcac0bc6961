"""
Echo Server Backend: Request Body Parsers
===========================================

What:  Turns a raw request body into structured data based on its Content-Type.
How:   A fixed table maps each supported media type to a parser function.
       parse_body() looks the media type up and reports one of three outcomes:

           ABSENT       no Content-Type header, or an empty body
           PARSED       supported media type, body replaced by parsed data
           UNSUPPORTED  any other media type, body left as received

Supported media types:
    application/json                    → any JSON value
    application/x-www-form-urlencoded   → dict; repeated keys become lists,
                                          bracket keys become nested objects

Malformed input raises BodyParseError. Nothing here recovers from it; the
error handler turns it into a 500 response.
"""

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from starlette.datastructures import QueryParams

from app.exceptions import BodyParseError

logger = logging.getLogger(__name__)

RawBody = Union[bytes, str]


class BodyFormat(str, Enum):
    """Media types the body parser understands."""

    JSON = "application/json"
    URLENCODED = "application/x-www-form-urlencoded"


class ParseOutcome(str, Enum):
    ABSENT = "absent"
    PARSED = "parsed"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class ParsedBody:
    """Result of running a request body through parse_body()."""

    outcome: ParseOutcome
    data: Any
    format: Optional[BodyFormat] = None
    media_type: Optional[str] = None


def media_type_of(content_type: Optional[str]) -> Optional[str]:
    """
    Extract the bare media type from a Content-Type header value.

    "Application/JSON; charset=utf-8" → "application/json"
    Returns None for a missing or blank header.
    """
    if not content_type:
        return None
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type or None


def _decode(raw: RawBody, media_type: str) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BodyParseError(
            message=f"Request body is not valid UTF-8: {e}",
            content_type=media_type,
        ) from e


def parse_json(text: str) -> Any:
    """Parse a JSON document into the matching Python value."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise BodyParseError(
            message=f"Malformed JSON body: {e.msg} at line {e.lineno} column {e.colno}",
            content_type=BodyFormat.JSON.value,
        ) from e


# "user[address][city]" → head "user", brackets "[address][city]"
_BRACKET_KEY = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])+)$")
_BRACKET_SEGMENT = re.compile(r"\[([^\[\]]*)\]")

# Index-keyed objects up to this index become lists: "a[1]=x&a[0]=y" → ["y", "x"]
ARRAY_INDEX_LIMIT = 20


def _key_path(key: str) -> List[str]:
    match = _BRACKET_KEY.match(key)
    if not match:
        return [key]
    return [match.group(1)] + _BRACKET_SEGMENT.findall(match.group(2))


def _subtree(path: List[str], value: str) -> Any:
    """Build {"a": {"b": value}} for ["a", "b"]; an empty segment means "append"."""
    node: Any = value
    for segment in reversed(path[1:]):
        node = [node] if segment == "" else {segment: node}
    return node


def _combine(existing: Any, incoming: Any) -> Any:
    if isinstance(existing, dict) and isinstance(incoming, dict):
        _merge(existing, incoming)
        return existing
    left = existing if isinstance(existing, list) else [existing]
    right = incoming if isinstance(incoming, list) else [incoming]
    return left + right


def _merge(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    for key, value in source.items():
        target[key] = _combine(target[key], value) if key in target else value


def _compact(node: Any) -> Any:
    if isinstance(node, list):
        return [_compact(item) for item in node]
    if not isinstance(node, dict):
        return node
    compacted = {key: _compact(value) for key, value in node.items()}
    if compacted and all(key.isdigit() and int(key) <= ARRAY_INDEX_LIMIT for key in compacted):
        return [compacted[key] for key in sorted(compacted, key=int)]
    return compacted


def parse_urlencoded(text: str) -> Dict[str, Any]:
    """
    Parse url-encoded text into nested data.

        "a=1&b=two"          → {"a": "1", "b": "two"}
        "k=1&k=2"            → {"k": ["1", "2"]}
        "user[name]=ada"     → {"user": {"name": "ada"}}
        "tags[]=x&tags[]=y"  → {"tags": ["x", "y"]}

    Blank values are kept as "".
    """
    result: Dict[str, Any] = {}
    for key, value in QueryParams(text).multi_items():
        path = _key_path(key)
        _merge(result, {path[0]: _subtree(path, value)})
    return {key: _compact(value) for key, value in result.items()}


PARSERS: Dict[BodyFormat, Callable[[str], Any]] = {
    BodyFormat.JSON: parse_json,
    BodyFormat.URLENCODED: parse_urlencoded,
}


def parse_body(content_type: Optional[str], raw: RawBody) -> ParsedBody:
    """
    Parse a raw request body according to its Content-Type header.

    Args:
        content_type: Value of the Content-Type header, or None if absent.
        raw:          The body exactly as received (bytes or text).

    Returns:
        ParsedBody describing the outcome and carrying the resulting data.

    Raises:
        BodyParseError: The body is malformed for its declared type, or it is
                        not raw text/bytes at all.
    """
    if not isinstance(raw, (bytes, str)):
        raise BodyParseError(
            message=f"Expected a raw request body, got {type(raw).__name__}",
            content_type=content_type,
        )

    media_type = media_type_of(content_type)
    if media_type is None or not raw:
        return ParsedBody(outcome=ParseOutcome.ABSENT, data=raw, media_type=media_type)

    try:
        body_format = BodyFormat(media_type)
    except ValueError:
        logger.debug("Leaving body with unsupported content type %s unparsed", media_type)
        return ParsedBody(
            outcome=ParseOutcome.UNSUPPORTED, data=raw, media_type=media_type
        )

    data = PARSERS[body_format](_decode(raw, media_type))
    return ParsedBody(
        outcome=ParseOutcome.PARSED,
        data=data,
        format=body_format,
        media_type=media_type,
    )
