# PURPOSE: Fixed recommendation used whenever the AI path is unavailable or fails.
# CONTEXT: Keeps the product usable without Bedrock. The service stamps isAI,
#          timestamp and userInput; this module never does.

from __future__ import annotations
import copy
from typing import Any, Dict

from smart_advisor.schema import Recommendation

_MOCK_RECOMMENDATION: Dict[str, Any] = {
    "portfolio": {
        "stocks": 60,
        "bonds": 25,
        "etfs": 10,
        "reits": 5,
        "crypto": 0,
        "commodities": 0,
    },
    "riskScore": 6,
    "diversificationScore": 8,
    "projections": {
        "1year": {"conservative": 5.2, "expected": 8.5, "optimistic": 12.8},
        "3year": {"conservative": 15.8, "expected": 22.1, "optimistic": 28.9},
        "5year": {"conservative": 28.3, "expected": 41.7, "optimistic": 55.2},
        "10year": {"conservative": 68.4, "expected": 95.8, "optimistic": 123.7},
    },
    "rationale": {
        "stocks": "High allocation to equities for long-term growth potential suitable for younger investors",
        "bonds": "Government and corporate bonds provide stability and regular income",
        "etfs": "Diversified ETFs offer exposure to multiple sectors with lower fees",
        "reits": "Real Estate Investment Trusts add diversification and inflation protection",
    },
    "riskAssessment": {
        "marketVolatility": "Moderate to high volatility expected due to equity-heavy allocation",
        "liquidityRisk": "High liquidity with ability to exit positions quickly",
        "inflationProtection": "Good inflation protection through real assets and growth stocks",
    },
}


def generate_mock_recommendation() -> Recommendation:
    """Return a fresh deep copy of the fixed recommendation; callers may mutate it."""
    return copy.deepcopy(_MOCK_RECOMMENDATION)
