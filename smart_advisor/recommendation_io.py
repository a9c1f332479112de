"""
I/O helpers for the Recommendation schema.

PURPOSE: Central place for JSON schema loading/validation and the small helpers
         the service, exporter and UIs share.
CONTEXT: Validation here is advisory. The service accepts any decoded AI reply
         and only logs schema mismatches; the exporter uses it to reject files
         that are not recommendations at all.
"""

from __future__ import annotations

import json
import pathlib
from functools import lru_cache
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator, ValidationError as SchemaValidationError

SCHEMA_DIR = pathlib.Path(__file__).resolve().parent / "schemas"
RECOMMENDATION_SCHEMA = "recommendation.schema.json"


# -------------------- Schema loading utilities -------------------- #

@lru_cache(maxsize=16)
def load_schema(name: str = RECOMMENDATION_SCHEMA) -> Dict[str, Any]:
    """
    Read and parse a bundled JSON schema, cached after the first read.

    parameters:
    - name: str – file name under smart_advisor/schemas/.

    raises:
    - FileNotFoundError – if no such schema ships with the package.
    - json.JSONDecodeError – if the file is not valid JSON.
    """
    path = SCHEMA_DIR / name
    if not path.exists():
        raise FileNotFoundError(f"Schema not found at: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


# -------------------- Validation helpers -------------------- #

def validate_recommendation(instance: Dict[str, Any]) -> None:
    """
    Validate a recommendation against the bundled Draft 7 schema.

    raises:
    - jsonschema.ValidationError – on the first violation found.
    """
    Draft7Validator(load_schema()).validate(instance)


def schema_errors(instance: Any) -> List[str]:
    """Every schema violation as a readable string; empty when the shape is valid."""
    validator = Draft7Validator(load_schema())
    return [error_to_string(e) for e in sorted(validator.iter_errors(instance), key=str)]


def allocation_total(portfolio: Any) -> Optional[float]:
    """
    Sum the numeric allocations of a portfolio mapping.

    returns:
    - float – the total, or None when the value is not a mapping of numbers
      (AI replies are not guaranteed to have that shape).
    """
    if not isinstance(portfolio, dict):
        return None
    total = 0.0
    for value in portfolio.values():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        total += value
    return total


def error_to_string(err: Exception) -> str:
    """
    Convert exceptions into readable one-line strings for logs and API details.

    notes:
    - Schema ValidationErrors include a JSON pointer such as $.portfolio.stocks.
    """
    if isinstance(err, SchemaValidationError):
        path = "$" + "".join(f"[{repr(p)}]" if isinstance(p, int) else f".{p}" for p in err.path)
        return f"{err.message} at {path}"
    return f"{type(err).__name__}: {err}"


__all__ = [
    "load_schema",
    "validate_recommendation",
    "schema_errors",
    "allocation_total",
    "error_to_string",
]
