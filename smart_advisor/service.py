# PURPOSE: Recommendation service: validates input, runs prompt → Bedrock → parser,
#          and falls back to the fixed mock recommendation on any AI-path failure.
# CONTEXT: Shared by the FastAPI app and the Lambda handler. Holds no mutable
#          state, so one instance serves every concurrent request.

from __future__ import annotations
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol, Tuple

import structlog

from smart_advisor.config import Settings
from smart_advisor.errors import ValidationError
from smart_advisor.mock_model import generate_mock_recommendation
from smart_advisor.observability import xray_segment
from smart_advisor.prompt_builder import build_prompt
from smart_advisor.recommendation_io import allocation_total, error_to_string, schema_errors
from smart_advisor.response_parser import parse_recommendation

log = structlog.get_logger(__name__)

MIN_INPUT_CHARS = 10
MIN_LENGTH_MESSAGE = (
    f"Please provide a detailed investment request (at least {MIN_INPUT_CHARS} characters)"
)


class CompletionClient(Protocol):
    def complete(self, prompt: str) -> str: ...


def utc_now_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def validate_user_input(user_input: Any) -> str:
    """
    Enforce the minimum-length contract.

    returns:
    - str – the trimmed text (callers still store the untrimmed text).

    raises:
    - ValidationError – missing, non-string, blank, or under 10 trimmed chars.
    """
    if not isinstance(user_input, str) or len(user_input.strip()) < MIN_INPUT_CHARS:
        raise ValidationError(MIN_LENGTH_MESSAGE)
    return user_input.strip()


class RecommendationService:
    """
    Orchestrates one recommendation per call.

    parameters:
    - settings: Settings – frozen configuration built at startup.
    - completion_client: the AI client, or None to always use the mock. Built by
      build_service() when settings.ai_enabled.
    """

    def __init__(self, settings: Settings, completion_client: Optional[CompletionClient] = None):
        self.settings = settings
        self.completion_client = completion_client

    @property
    def ai_enabled(self) -> bool:
        return self.completion_client is not None

    def recommend(self, user_input: Any) -> Dict[str, Any]:
        """
        Produce a stamped Recommendation for user_input.

        flow:
        1) Validate input (the only error surfaced to callers).
        2) No AI client → mock with isAI=False.
        3) Otherwise prompt → complete → parse; any exception → mock with isAI=False.
        4) Stamp timestamp and the verbatim userInput.
        """
        validate_user_input(user_input)
        t0 = time.time()

        if self.completion_client is None:
            log.info("recommendation.mock", reason="ai_disabled")
            recommendation = generate_mock_recommendation()
            recommendation["isAI"] = False
        else:
            recommendation = self._recommend_with_ai(user_input)

        recommendation["timestamp"] = utc_now_iso()
        recommendation["userInput"] = user_input
        log.info(
            "recommendation.ready",
            is_ai=recommendation["isAI"],
            input_chars=len(user_input),
            latency_ms=round((time.time() - t0) * 1000, 1),
        )
        return recommendation

    def _recommend_with_ai(self, user_input: str) -> Dict[str, Any]:
        try:
            prompt = build_prompt(user_input)
            with xray_segment("bedrock.converse"):
                raw = self.completion_client.complete(prompt)
            recommendation = parse_recommendation(raw)
        except Exception as e:
            log.warning("recommendation.fallback", error=error_to_string(e))
            recommendation = generate_mock_recommendation()
            recommendation["isAI"] = False
            return recommendation

        # Trust the provider: shape problems are logged, never corrected.
        problems = schema_errors(recommendation)
        if problems:
            log.warning("recommendation.schema_mismatch", errors=problems[:5])
        total = allocation_total(recommendation.get("portfolio"))
        if total is not None and abs(total - 100) > 0.5:
            log.warning("recommendation.allocation_sum_mismatch", total=total)

        recommendation["isAI"] = True
        return recommendation


def build_service(settings: Settings) -> RecommendationService:
    """
    Wire the service for settings: a Bedrock client when AI is enabled, else none.
    """
    if not settings.ai_enabled:
        log.info("service.ai_disabled", reason="no Bedrock API key or USE_BEDROCK=0")
        return RecommendationService(settings)

    from smart_advisor.bedrock_client import BedrockCompletionClient

    client = BedrockCompletionClient(model_id=settings.model_id, region=settings.region)
    log.info("service.ai_enabled", model_id=settings.model_id, region=settings.region)
    return RecommendationService(settings, completion_client=client)


def recommend_response(service: RecommendationService, user_input: Any) -> Tuple[int, Dict[str, Any]]:
    """
    Run the service and build the HTTP envelope shared by every transport.

    returns:
    - (200, {"success": True, "data": rec})
    - (400, {"error": msg}) on ValidationError
    - (500, {"error": ..., "details": ...}) on any other exception
    """
    try:
        recommendation = service.recommend(user_input)
    except ValidationError as e:
        log.info("request.invalid", error=str(e))
        return 400, {"error": str(e)}
    except Exception as e:
        log.exception("request.failed")
        return 500, {"error": "Failed to generate recommendation", "details": str(e)}
    return 200, {"success": True, "data": recommendation}


def health_payload(service: RecommendationService) -> Dict[str, Any]:
    return {"status": "healthy", "timestamp": utc_now_iso(), "aiEnabled": service.ai_enabled}
