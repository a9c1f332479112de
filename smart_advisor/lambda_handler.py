"""
AWS Lambda handler: serves the same two routes as the FastAPI app behind API Gateway.

PURPOSE:
- Normalise REST (v1) and HTTP API (v2) proxy events into method + path + body.
- Delegate to the shared recommend_response/health_payload helpers so the JSON
  envelopes are identical to the uvicorn deployment.

CONTEXT:
- Logs are structured JSON with request_id and correlation_id so a request can
  be followed through CloudWatch Insights.
"""

from __future__ import annotations
import json
import time
import uuid
from functools import lru_cache
from typing import Any, Dict, Tuple

from smart_advisor.config import load_settings
from smart_advisor.logging_setup import configure_logging
from smart_advisor.observability import init_observability
from smart_advisor.service import RecommendationService, build_service, health_payload, recommend_response


# Configure a structured logger once per container.
log = configure_logging()
init_observability()


@lru_cache(maxsize=1)
def get_service() -> RecommendationService:
    """Build the service once per warm container."""
    return build_service(load_settings())


def _response(body: Dict[str, Any], status_code: int = 200) -> Dict[str, Any]:
    """Wrap a dict into an API Gateway compatible response."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json", "Access-Control-Allow-Origin": "*"},
        "body": json.dumps(body),
    }


def _route(event: Dict[str, Any]) -> Tuple[str, str]:
    """
    Extract (METHOD, path) from a proxy event.

    notes:
    - v1 events carry httpMethod/path; v2 events carry requestContext.http.method
      and rawPath. A stage prefix such as /prod is left to API Gateway mappings.
    """
    http = (event.get("requestContext") or {}).get("http") or {}
    method = event.get("httpMethod") or http.get("method") or "GET"
    path = event.get("path") or event.get("rawPath") or "/"
    return method.upper(), path.rstrip("/") or "/"


def _body(event: Dict[str, Any]) -> Dict[str, Any]:
    raw = event.get("body")
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        log.warning("request.body_parse_failed")
        return {}
    return parsed if isinstance(parsed, dict) else {}


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    Lambda entry point.

    flow:
    1) Bind request/correlation ids.
    2) Route POST /api/recommend and GET /api/health; anything else is a 404.
    3) Return the envelope built by the shared service helpers.
    """
    t0 = time.time()
    request_id = getattr(context, "aws_request_id", None) or str(uuid.uuid4())
    headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    correlation_id = headers.get("x-correlation-id") or str(uuid.uuid4())
    rlog = log.bind(request_id=request_id, correlation_id=correlation_id)

    method, path = _route(event)
    rlog.info("request.received", method=method, path=path)

    if method == "POST" and path == "/api/recommend":
        status, payload = recommend_response(get_service(), _body(event).get("userInput"))
    elif method == "GET" and path == "/api/health":
        status, payload = 200, health_payload(get_service())
    else:
        status, payload = 404, {"error": "Not found"}

    latency_ms = round((time.time() - t0) * 1000, 1)
    if status >= 500:
        rlog.error("response.error", status=status, latency_ms=latency_ms)
    else:
        rlog.info("response.success" if status < 400 else "response.client_error", status=status, latency_ms=latency_ms)
    return _response(payload, status)
