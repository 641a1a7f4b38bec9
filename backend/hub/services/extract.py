"""
Best-effort JSON extraction from model completions.

The model is asked for a single JSON object but may wrap it in prose or
markdown fences. The span from the first ``{`` to the last ``}`` is parsed;
anything that does not yield an object goes to the caller's fallback.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict

log = logging.getLogger(__name__)

# Greedy on purpose: first "{" through the last "}".
_JSON_SPAN = re.compile(r"\{[\s\S]*\}")

Fallback = Callable[[str], Dict[str, Any]]


def find_json_span(text: str) -> str | None:
    m = _JSON_SPAN.search(text or "")
    return m.group(0) if m else None


def extract_json(text: str, fallback: Fallback) -> Dict[str, Any]:
    """
    Return the parsed object, or ``fallback(text)`` when there is no span
    or the span is not valid JSON. Never raises on malformed input.
    """
    text = text or ""
    span = find_json_span(text)
    if span is None:
        return fallback(text)
    try:
        data = json.loads(span)
    except (ValueError, RecursionError):
        log.info("Completion is not valid JSON; using fallback (%d chars)", len(text))
        return fallback(text)
    return data
