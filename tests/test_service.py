import pytest

from smart_advisor.config import Settings
from smart_advisor.errors import ProviderError, ValidationError
from smart_advisor.mock_model import generate_mock_recommendation
from smart_advisor.service import RecommendationService, build_service, recommend_response

GOOD_INPUT = "I'm 25, want aggressive growth for retirement in 40 years"
AI_REPLY = (
    'Here is your plan: {"portfolio":{"stocks":100,"bonds":0,"etfs":0},"rationale":{},'
    '"riskScore":9,"diversificationScore":3,"projections":{},'
    '"riskAssessment":{"marketVolatility":"x","liquidityRisk":"y","inflationProtection":"z"}} Thanks!'
)

class FakeCompletion:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply

def _strip_stamps(rec):
    return {k: v for k, v in rec.items() if k not in {"timestamp", "userInput", "isAI"}}

@pytest.mark.parametrize("text", [None, 42, "", "          ", "hi", "  short    ", "123456789"])
def test_short_input_rejected_without_calling_ai(text):
    fake = FakeCompletion(AI_REPLY)
    svc = RecommendationService(Settings(), completion_client=fake)
    with pytest.raises(ValidationError, match="at least 10 characters"):
        svc.recommend(text)
    assert fake.prompts == []

def test_no_credentials_returns_stamped_mock():
    svc = RecommendationService(Settings())
    rec = svc.recommend(GOOD_INPUT)
    assert rec["isAI"] is False
    assert rec["portfolio"]["stocks"] == 60
    assert rec["userInput"] == GOOD_INPUT
    assert rec["timestamp"].endswith("Z")
    assert _strip_stamps(rec) == generate_mock_recommendation()

def test_user_input_stored_verbatim():
    text = "   padded request with spaces   "
    rec = RecommendationService(Settings()).recommend(text)
    assert rec["userInput"] == text

def test_ai_success_marks_provenance():
    fake = FakeCompletion(AI_REPLY)
    rec = RecommendationService(Settings(), completion_client=fake).recommend(GOOD_INPUT)
    assert rec["isAI"] is True
    assert rec["portfolio"] == {"stocks": 100, "bonds": 0, "etfs": 0}
    assert rec["riskScore"] == 9
    assert GOOD_INPUT in fake.prompts[0]

def test_ai_malformed_shape_is_accepted_as_is():
    fake = FakeCompletion('{"portfolio": {"stocks": 70, "bonds": 10}, "unexpected": true}')
    rec = RecommendationService(Settings(), completion_client=fake).recommend(GOOD_INPUT)
    assert rec["isAI"] is True
    assert rec["portfolio"] == {"stocks": 70, "bonds": 10}
    assert rec["unexpected"] is True

@pytest.mark.parametrize("fake", [
    FakeCompletion(error=ConnectionError("network down")),
    FakeCompletion(error=ProviderError("quota")),
    FakeCompletion("I cannot help with that."),
    FakeCompletion("{not: json}"),
    FakeCompletion('{"riskScore": NaN, "portfolio": {"stocks": 100}}'),
])
def test_ai_failures_fall_back_to_mock(fake):
    rec = RecommendationService(Settings(), completion_client=fake).recommend(GOOD_INPUT)
    assert rec["isAI"] is False
    assert _strip_stamps(rec) == generate_mock_recommendation()
    assert rec["userInput"] == GOOD_INPUT

def test_build_service_without_key_has_no_client():
    svc = build_service(Settings(bedrock_api_key=None))
    assert svc.ai_enabled is False
    svc = build_service(Settings(bedrock_api_key="abc", use_bedrock=False))
    assert svc.ai_enabled is False

def test_build_service_with_key_wires_bedrock(monkeypatch):
    created = {}

    class FakeClient:
        def __init__(self, model_id, region):
            created.update(model_id=model_id, region=region)

    monkeypatch.setattr("smart_advisor.bedrock_client.BedrockCompletionClient", FakeClient)
    svc = build_service(Settings(bedrock_api_key="abc", model_id="m-1", region="us-east-1"))
    assert svc.ai_enabled is True
    assert created == {"model_id": "m-1", "region": "us-east-1"}

def test_recommend_response_envelopes():
    svc = RecommendationService(Settings())
    status, body = recommend_response(svc, GOOD_INPUT)
    assert status == 200 and body["success"] is True and body["data"]["isAI"] is False

    status, body = recommend_response(svc, "hi")
    assert status == 400 and "at least 10 characters" in body["error"]

def test_recommend_response_server_fault(monkeypatch):
    svc = RecommendationService(Settings())

    def boom(user_input):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(svc, "recommend", boom)
    status, body = recommend_response(svc, GOOD_INPUT)
    assert status == 500
    assert body == {"error": "Failed to generate recommendation", "details": "disk on fire"}
