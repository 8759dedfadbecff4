import json
import re
from typing import Any

from repo_composer.llm import MalformedOutputError

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```\s*$")
# Leftmost '{' or '[' through the last closer of the same kind; greedy so nested values survive
_JSON_SUBSTRING = re.compile(r"\{.*\}|\[.*\]", re.DOTALL)


def strip_code_fences(text: str) -> str:
    text = text.strip()
    text = _FENCE_OPEN.sub("", text)
    return _FENCE_CLOSE.sub("", text).strip()


def parse_lenient_json(text: str) -> Any:
    """Parse JSON that a model may have wrapped in fences or surrounded with prose."""
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        match = _JSON_SUBSTRING.search(cleaned)
        if not match:
            raise MalformedOutputError(f"No valid JSON found in response: {exc}") from exc
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as inner:
            raise MalformedOutputError(f"Failed to parse JSON: {inner}. Original error: {exc}") from inner
