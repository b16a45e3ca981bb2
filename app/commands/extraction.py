import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")

_PHONE_RE = re.compile(r"(\+?1[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})")
_URL_RE = re.compile(r"https?://[^\s]+")
_CALL_MESSAGE_RES = (
    re.compile(r"say\s+[\"'](.+?)[\"']", re.IGNORECASE),
    re.compile(r"message\s+[\"'](.+?)[\"']", re.IGNORECASE),
    re.compile(r"tell\s+them\s+(.+?)(?:\s+|$)", re.IGNORECASE),
)
_METHOD_RES = tuple((method, re.compile(rf"\b{method}\b", re.IGNORECASE)) for method in HTTP_METHODS)
_HEADERS_RE = re.compile(r"headers?\s*[:=]\s*({.+?})", re.IGNORECASE)
_DATA_RE = re.compile(r"data\s*[:=]\s*({.+?})", re.IGNORECASE)


def extract_phone_number(text: str) -> str | None:
    match = _PHONE_RE.search(text)
    return match.group(0) if match else None


def extract_call_message(text: str) -> str | None:
    for pattern in _CALL_MESSAGE_RES:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def extract_url(text: str) -> str | None:
    match = _URL_RE.search(text)
    return match.group(0) if match else None


def extract_http_method(text: str) -> str | None:
    for method, pattern in _METHOD_RES:
        if pattern.search(text):
            return method
    return None


def extract_headers(text: str) -> dict[str, Any]:
    parsed = _parse_inline_json(_HEADERS_RE, text, "headers")
    return parsed if isinstance(parsed, dict) else {}


def extract_data(text: str) -> Any:
    return _parse_inline_json(_DATA_RE, text, "data")


def _parse_inline_json(pattern: re.Pattern[str], text: str, label: str) -> Any:
    match = pattern.search(text)
    if not match:
        return None
    try:
        return json.loads(match.group(1))
    except ValueError:
        logger.warning("failed to parse inline %s: %s", label, match.group(1))
        return None
