import pytest

from smart_advisor.errors import DecodeError, ParseError
from smart_advisor.response_parser import parse_recommendation

SCENARIO_D = (
    'Here is your plan: {"portfolio":{"stocks":100,"bonds":0,"etfs":0},"rationale":{},'
    '"riskScore":9,"diversificationScore":3,"projections":{},'
    '"riskAssessment":{"marketVolatility":"x","liquidityRisk":"y","inflationProtection":"z"}} Thanks!'
)

def test_extracts_object_from_surrounding_prose():
    out = parse_recommendation(SCENARIO_D)
    assert out["portfolio"] == {"stocks": 100, "bonds": 0, "etfs": 0}
    assert out["riskScore"] == 9
    assert out["riskAssessment"]["liquidityRisk"] == "y"

def test_no_transformation_of_out_of_range_values():
    out = parse_recommendation('{"portfolio": {"stocks": 150, "bonds": -20}, "riskScore": 42}')
    assert out == {"portfolio": {"stocks": 150, "bonds": -20}, "riskScore": 42}

def test_code_fenced_reply():
    text = 'Sure!\n```json\n{"riskScore": 4, "rationale": {"bonds": "steady"}}\n```'
    assert parse_recommendation(text) == {"riskScore": 4, "rationale": {"bonds": "steady"}}

def test_trailing_brace_span_falls_back_to_first_object():
    text = 'Plan: {"riskScore": 5} note: use {curly} braces carefully'
    assert parse_recommendation(text) == {"riskScore": 5}

@pytest.mark.parametrize("text", ["", "no json here at all", "only an opening { brace", "closing } first {"])
def test_missing_object_is_parse_error(text):
    with pytest.raises(ParseError) as e:
        parse_recommendation(text)
    assert not isinstance(e.value, DecodeError)

def test_invalid_json_is_decode_error():
    with pytest.raises(DecodeError):
        parse_recommendation("Result: {portfolio: stocks=60, bonds=40}")

@pytest.mark.parametrize("text", [
    '{"riskScore": NaN, "portfolio": {"stocks": 100}}',
    '{"riskScore": 5, "projections": {"1year": {"expected": Infinity}}}',
    'Plan: {"riskScore": -Infinity} extra }',
    '{"riskScore": 1e999}',
])
def test_non_finite_numbers_are_decode_errors(text):
    with pytest.raises(DecodeError):
        parse_recommendation(text)
