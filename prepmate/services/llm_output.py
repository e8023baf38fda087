# prepmate/services/llm_output.py
"""
Turn raw generative-API text into JSON values.

- strip_fences(text) -> str
  Removes ``` / ```json fence markers. Idempotent, never raises.
- parse_lenient(text, expect="object") -> Ok(value) | Err(MalformedResponse)
  Direct parse, then quote/trailing-comma cleanup, then slice of the first
  balanced-looking object/array. The first successful parse decides; a wrong
  top-level type is a MalformedResponse as well.
"""

import json
import re
from typing import Any, Iterator

from prepmate.services.llm_result import Err, MalformedResponse, Ok, Result

FENCE_RE = re.compile(r"```(?:json\b)?[ \t]*", re.IGNORECASE)
SMART_QUOTES_RE = re.compile("[\u2018\u2019\u201c\u201d]")
TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")

_BRACKETS = {
    "object": ("{", "}"),
    "array": ("[", "]"),
}


def strip_fences(text: Any) -> str:
    if not isinstance(text, str):
        return ""
    out = text
    # removing one marker can splice stray backticks into a new one
    while "```" in out:
        out = FENCE_RE.sub("", out)
        out = out.replace("```", "")
    return out.strip()


def _cleanup(text: str) -> str:
    text = SMART_QUOTES_RE.sub('"', text)
    return TRAILING_COMMA_RE.sub(r"\1", text)


def _candidates(text: str, expect: str) -> Iterator[str]:
    yield text
    cleaned = _cleanup(text)
    yield cleaned
    opener, closer = _BRACKETS[expect]
    start = text.find(opener)
    end = text.rfind(closer)
    if start != -1 and end > start:
        yield _cleanup(text[start:end + 1])


def _matches(value: Any, expect: str) -> bool:
    if expect == "array":
        return isinstance(value, list)
    return isinstance(value, dict)


def parse_lenient(text: Any, expect: str = "object") -> Result:
    if expect not in _BRACKETS:
        raise ValueError(f"unknown expected shape {expect!r}")
    if not isinstance(text, str) or not text.strip():
        return Err(MalformedResponse.from_raw("empty response", text or ""))

    for candidate in _candidates(text, expect):
        try:
            value = json.loads(candidate)
        except ValueError:
            continue
        if not _matches(value, expect):
            return Err(MalformedResponse.from_raw(
                f"expected {expect}, got {type(value).__name__}", text))
        return Ok(value)

    return Err(MalformedResponse.from_raw("no parseable JSON " + expect, text))


def extract_and_parse(raw: Any, expect: str = "object") -> Result:
    """Response Extractor followed by the Lenient JSON Parser."""
    return parse_lenient(strip_fences(raw), expect)
