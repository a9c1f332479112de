"""
Extract the recommendation JSON object from a free-text model reply.

Models wrap the object in prose ("Here is your plan: {...} Thanks!") or code
fences. The contract is "first top-level object, or failure":

1. take the greedy span from the first "{" to the last "}";
2. if that span is not valid JSON (e.g. a second unrelated brace pair follows
   the object), decode the first balanced object starting at the first "{";
3. otherwise fail.

NaN, Infinity and numbers that overflow to infinity are rejected: they are not
JSON, and the HTTP layer cannot serialise them back out.

Nothing about the decoded object is checked or changed.
"""

from __future__ import annotations
import json
import math
import re
from typing import Any, Dict

from smart_advisor.errors import DecodeError, ParseError

_OBJECT_SPAN = re.compile(r"\{[\s\S]*\}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if math.isinf(value):
        raise ValueError(f"{literal} is out of range")
    return value


_decoder = json.JSONDecoder(parse_constant=_reject_constant, parse_float=_finite_float)


def parse_recommendation(text: str) -> Dict[str, Any]:
    """
    Decode the first JSON object found in text.

    raises:
    - ParseError – no brace-delimited span at all.
    - DecodeError – a span exists but is not valid JSON.
    """
    match = _OBJECT_SPAN.search(text or "")
    if match is None:
        raise ParseError("No JSON object found in model response")

    span = match.group(0)
    try:
        return _decoder.decode(span)
    # JSONDecodeError is a ValueError; the hooks above raise plain ValueError.
    except ValueError as greedy_err:
        try:
            obj, _end = _decoder.raw_decode(span)
        except ValueError:
            raise DecodeError(f"Model response is not valid JSON: {greedy_err}") from greedy_err
        return obj
