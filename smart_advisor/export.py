"""
export.py - Text report, JSON dump and share summary for the current recommendation.

All three serialise an in-memory recommendation; the UI offers them as
downloads or copyable text. Diversification is a 1-10 score throughout.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Dict, Optional

from smart_advisor.charts import allocation_slices, as_mapping, as_number
from smart_advisor.recommendation_io import validate_recommendation

RULE = "═" * 67
DISCLAIMER = (
    "DISCLAIMER: This analysis is for informational purposes only and should\n"
    "not be considered as financial advice. Please consult with a qualified\n"
    "financial advisor before making investment decisions."
)


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

def risk_label(score: Any) -> str:
    score = as_number(score)
    if score <= 3:
        return "Conservative"
    if score <= 6:
        return "Moderate"
    if score <= 8:
        return "Aggressive"
    return "Very Aggressive"


def diversification_quality(score: Any) -> str:
    score = as_number(score)
    if score >= 8:
        return "Excellent"
    if score >= 7:
        return "Good"
    if score >= 6:
        return "Fair"
    return "Needs Improvement"


def risk_return_profile(risk: Any, expected_return: Any) -> str:
    risk = as_number(risk)
    # A missing or non-numeric 5-year projection behaves like an unbounded return.
    if isinstance(expected_return, bool) or not isinstance(expected_return, (int, float)):
        expected = float("inf")
    else:
        expected = expected_return
    if risk <= 4 and expected <= 6:
        return "Conservative Growth"
    if risk <= 6 and expected <= 9:
        return "Balanced Growth"
    if risk <= 8 and expected <= 12:
        return "Growth Focused"
    return "Aggressive Growth"


def review_period_months(risk: Any) -> int:
    risk = as_number(risk)
    if risk <= 3:
        return 12
    if risk <= 6:
        return 6
    return 3


def _five_year_expected(rec: Dict[str, Any]) -> Optional[float]:
    return as_mapping(as_mapping(rec.get("projections")).get("5year")).get("expected")


def report_filename(kind: str, day: Optional[date] = None) -> str:
    """investment-portfolio-report-YYYY-MM-DD.txt or portfolio-data-YYYY-MM-DD.json."""
    stamp = (day or date.today()).isoformat()
    if kind == "report":
        return f"investment-portfolio-report-{stamp}.txt"
    if kind == "json":
        return f"portfolio-data-{stamp}.json"
    raise ValueError(f"Unknown export kind: {kind}")


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------

def build_report(rec: Dict[str, Any], generated_on: Optional[datetime] = None) -> str:
    """Plain-text report of a recommendation."""
    generated_on = generated_on or datetime.now()
    risk = rec.get("riskScore", 0)
    diversification = rec.get("diversificationScore", 0)
    slices = allocation_slices(rec.get("portfolio"))
    assessment = as_mapping(rec.get("riskAssessment"))

    allocation_lines = [
        f"{s['key'].upper():<12} {s['value']:>3g}% {'█' * round(s['value'] / 5)}" for s in slices
    ]
    projection_lines = [
        f"{period.replace('year', ' Year'):<10} Conservative: {p.get('conservative')}%  "
        f"Expected: {p.get('expected')}%  Optimistic: {p.get('optimistic')}%"
        for period, p in as_mapping(rec.get("projections")).items()
        if isinstance(p, dict)
    ]
    rationale_lines = [f"{asset.upper()}:\n  {reason}\n" for asset, reason in as_mapping(rec.get("rationale")).items()]

    sections = [
        "INVESTMENT PORTFOLIO ANALYSIS REPORT",
        f"Generated on: {generated_on:%Y-%m-%d}",
        RULE,
        "",
        "EXECUTIVE SUMMARY",
        f"• Risk Score: {risk}/10 ({risk_label(risk)})",
        f"• Diversification Score: {diversification}/10",
        f"• Total Asset Classes: {len(slices)}",
        f"• Analysis Type: {'AI-Powered' if rec.get('isAI') else 'Expert'} Recommendation",
        "",
        "PORTFOLIO ALLOCATION",
        *allocation_lines,
        "",
        "RISK ASSESSMENT",
        f"Market Volatility:     {assessment.get('marketVolatility', 'N/A')}",
        f"Liquidity Risk:        {assessment.get('liquidityRisk', 'N/A')}",
        f"Inflation Protection:  {assessment.get('inflationProtection', 'N/A')}",
        "",
        "RETURN PROJECTIONS",
        *projection_lines,
        "",
        "INVESTMENT RATIONALE",
        *rationale_lines,
        "INVESTMENT GOALS",
        f"\"{rec.get('userInput', '')}\"",
        "",
        "PORTFOLIO METRICS",
        f"• Diversification Quality: {diversification_quality(diversification)}",
        f"• Risk-Return Profile: {risk_return_profile(risk, _five_year_expected(rec))}",
        f"• Recommended Review Period: {review_period_months(risk)} months",
        "",
        RULE,
        f"Generated: {rec.get('timestamp', generated_on.isoformat())}",
        RULE,
        "",
        DISCLAIMER,
    ]
    return "\n".join(sections) + "\n"


def recommendation_to_json(rec: Dict[str, Any]) -> str:
    return json.dumps(rec, indent=2, ensure_ascii=False)


def recommendation_from_json(text: str) -> Dict[str, Any]:
    """
    Load a previously exported recommendation.

    raises:
    - json.JSONDecodeError – not JSON.
    - jsonschema.ValidationError – JSON, but not a recommendation.
    """
    rec = json.loads(text)
    validate_recommendation(rec)
    return rec


def build_share_text(rec: Dict[str, Any]) -> str:
    """Short summary for the clipboard or a share sheet."""
    slices = allocation_slices(rec.get("portfolio"))
    top = ", ".join(f"{s['key']}: {s['value']:g}%" for s in slices[:3])
    expected = _five_year_expected(rec)
    risk = rec.get("riskScore", 0)
    assessment = as_mapping(rec.get("riskAssessment"))
    return "\n".join([
        "My AI-Generated Investment Portfolio Analysis",
        "",
        f"Asset Allocation: {top}",
        f"Risk Profile: {risk_label(risk)} ({risk}/10)",
        f"Expected 5-Year Return: {'N/A' if expected is None else f'{expected}%'}",
        f"Diversification Score: {rec.get('diversificationScore', 'N/A')}/10",
        "",
        "Key Insights:",
        f"• {len(slices)} asset classes for diversification",
        f"• Market volatility: {assessment.get('marketVolatility', 'N/A')}",
        f"• Inflation protection: {assessment.get('inflationProtection', 'N/A')}",
        "",
        "Generated with Smart Investment Advisor",
    ])
