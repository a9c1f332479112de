# PURPOSE: HTTP client for the recommendation API, used by the Streamlit UI and CLI.
# CONTEXT: Single attempt per call, fixed timeout, no caching. Every failure is
#          mapped to a TransportError whose message is safe to show the user.

from __future__ import annotations
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests
import structlog

from smart_advisor.config import DEFAULT_TIMEOUT_S
from smart_advisor.errors import TransportError
from smart_advisor.schema import CORE_ASSET_CLASSES, OPTIONAL_ASSET_CLASSES

log = structlog.get_logger(__name__)

SERVER_ERROR_MESSAGE = "Server error occurred while generating recommendation"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


def _port_of(base_url: str) -> int:
    parsed = urlparse(base_url)
    if parsed.port:
        return parsed.port
    return 443 if parsed.scheme == "https" else 80


def convert_to_recommendation(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalise the portfolio of an API recommendation.

    behaviour:
    - stocks/bonds/etfs default to 0 when missing or null.
    - crypto/reits/commodities are kept only when the server sent them.
    - a portfolio that is not an object is treated as empty.
    """
    portfolio = data.get("portfolio")
    if not isinstance(portfolio, dict):
        portfolio = {}
    normalised = {key: portfolio.get(key) or 0 for key in CORE_ASSET_CLASSES}
    for key in OPTIONAL_ASSET_CLASSES:
        if portfolio.get(key) is not None:
            normalised[key] = portfolio[key]
    return {**data, "portfolio": normalised}


class RecommendationClient:
    """
    Client for POST /recommend and GET /health.

    parameters:
    - base_url: str – API root, e.g. http://localhost:3001/api.
    - timeout: float – seconds before the call fails as a network error.
    - session: requests.Session – injectable for tests.
    """

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT_S, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def unreachable_message(self) -> str:
        return (
            "Unable to connect to the recommendation service. "
            f"Please check if the server is running on port {_port_of(self.base_url)}."
        )

    def get_investment_recommendation(self, user_input: str) -> Dict[str, Any]:
        """
        Request one recommendation.

        returns:
        - dict – Recommendation with a normalised portfolio.

        raises:
        - TransportError – unreachable/timeout, 400 (server message), 500, or
          anything else unexpected.
        """
        url = f"{self.base_url}/recommend"
        log.info("api.request", method="POST", url=url)
        try:
            resp = self.session.post(url, json={"userInput": user_input}, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            log.error("api.unreachable", url=url, error=str(e))
            raise TransportError(self.unreachable_message) from e
        except requests.RequestException as e:
            log.error("api.request_failed", url=url, error=str(e))
            raise TransportError(UNEXPECTED_ERROR_MESSAGE) from e

        body = self._json_or_none(resp)
        if resp.status_code == 400:
            message = (body or {}).get("error") if isinstance(body, dict) else None
            raise TransportError(message or "Invalid request", status_code=400)
        if resp.status_code == 500:
            log.error("api.server_error", details=(body or {}).get("details") if isinstance(body, dict) else None)
            raise TransportError(SERVER_ERROR_MESSAGE, status_code=500)
        if resp.status_code != 200 or not isinstance(body, dict) or body.get("success") is not True:
            log.error("api.unexpected_response", status=resp.status_code)
            raise TransportError(UNEXPECTED_ERROR_MESSAGE, status_code=resp.status_code)

        data = body.get("data")
        if not isinstance(data, dict):
            raise TransportError(UNEXPECTED_ERROR_MESSAGE, status_code=resp.status_code)
        return convert_to_recommendation(data)

    def check_health(self) -> Dict[str, Any]:
        """GET /health; returns {"status", "timestamp", "aiEnabled"}."""
        try:
            resp = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            raise TransportError("API health check failed") from e

    @staticmethod
    def _json_or_none(resp) -> Any:
        try:
            return resp.json()
        except ValueError:
            return None
