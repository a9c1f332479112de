import pytest
from jsonschema import ValidationError, validate

from smart_advisor.mock_model import generate_mock_recommendation
from smart_advisor.recommendation_io import (
    allocation_total,
    error_to_string,
    load_schema,
    schema_errors,
    validate_recommendation,
)

def test_load_schema_reads_recommendation():
    schema = load_schema()
    assert schema.get("title") == "Recommendation"

def test_load_schema_missing_file():
    with pytest.raises(FileNotFoundError):
        load_schema("nope.schema.json")

def test_validate_rejects_missing_core_asset():
    rec = generate_mock_recommendation()
    del rec["portfolio"]["stocks"]
    with pytest.raises(ValidationError):
        validate_recommendation(rec)

def test_schema_errors_lists_paths():
    rec = generate_mock_recommendation()
    rec["riskScore"] = "high"
    errors = schema_errors(rec)
    assert errors and any("$.riskScore" in e for e in errors)
    assert schema_errors(generate_mock_recommendation()) == []

def test_allocation_total():
    assert allocation_total({"stocks": 60, "bonds": 40.5}) == 100.5
    assert allocation_total({"stocks": "60"}) is None
    assert allocation_total(None) is None

def test_error_to_string_validationerror_path():
    schema = {"type": "object", "properties": {"x": {"type": "number"}}, "required": ["x"]}
    with pytest.raises(ValidationError) as e:
        validate({"x": "nope"}, schema)
    msg = error_to_string(e.value)
    assert "at $.x" in msg

def test_error_to_string_plain_exception():
    assert error_to_string(RuntimeError("boom")) == "RuntimeError: boom"
