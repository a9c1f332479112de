# PURPOSE: Dashboard charts for a Recommendation: allocation pie, growth projections,
#          diversification radar and risk gauge.
# CONTEXT: Everything here is a pure function of the recommendation dict. The
#          derived-value helpers hold the display logic; the *_figure builders
#          only hand that data to Plotly.

from __future__ import annotations
from typing import Any, Dict, List

import plotly.express as px
import plotly.graph_objects as go

from smart_advisor.schema import ASSET_CLASSES, HORIZONS

ASSET_COLORS = {
    "stocks": "#3B82F6",
    "bonds": "#10B981",
    "etfs": "#8B5CF6",
    "crypto": "#F59E0B",
    "reits": "#14B8A6",
    "commodities": "#EF4444",
}
ASSET_LABELS = {
    "stocks": "Stocks",
    "bonds": "Bonds",
    "etfs": "ETFs",
    "crypto": "Crypto",
    "reits": "REITs",
    "commodities": "Commodities",
}
FALLBACK_COLOR = "#6B7280"


def asset_label(key: str) -> str:
    return ASSET_LABELS.get(key, key[:1].upper() + key[1:])


def as_number(value: Any) -> float:
    """Numeric value for display; anything that is not a real number counts as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def as_mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


# -------------------- Derived display values -------------------- #

def allocation_slices(portfolio: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Non-zero allocations, largest first, with label and colour."""
    slices = [
        {"key": key, "label": asset_label(key), "value": as_number(value), "color": ASSET_COLORS.get(key, FALLBACK_COLOR)}
        for key, value in as_mapping(portfolio).items()
        if as_number(value) > 0
    ]
    return sorted(slices, key=lambda s: s["value"], reverse=True)


def projection_rows(projections: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    One row per horizon in 1/3/5/10-year order; unknown horizons go last.

    returns:
    - list[dict] – {"period": "5Y", "conservative", "expected", "optimistic", "range"}
    """
    projections = as_mapping(projections)
    order = {h: i for i, h in enumerate(HORIZONS)}
    rows = []
    for period in sorted(projections, key=lambda p: order.get(p, len(HORIZONS))):
        values = as_mapping(projections[period])
        conservative = as_number(values.get("conservative"))
        optimistic = as_number(values.get("optimistic"))
        rows.append({
            "period": period.replace("year", "Y"),
            "conservative": conservative,
            "expected": as_number(values.get("expected")),
            "optimistic": optimistic,
            "range": optimistic - conservative,
        })
    return rows


def radar_points(portfolio: Dict[str, Any]) -> List[Dict[str, Any]]:
    """All six asset classes; absent ones plot as 0."""
    portfolio = as_mapping(portfolio)
    return [{"asset": asset_label(key), "value": as_number(portfolio.get(key)), "fullMark": 100} for key in ASSET_CLASSES]


def risk_level(score: Any) -> Dict[str, str]:
    score = as_number(score)
    if score <= 3:
        return {"level": "Low Risk", "color": "#10B981",
                "description": "Capital preservation focused with minimal volatility"}
    if score <= 6:
        return {"level": "Moderate Risk", "color": "#F59E0B",
                "description": "Balanced growth with manageable volatility"}
    return {"level": "High Risk", "color": "#EF4444",
            "description": "Maximum growth potential with higher volatility"}


def gauge_value(score: Any) -> float:
    """Risk score clamped to the 0-10 gauge scale."""
    return min(max(as_number(score), 0.0), 10.0)


def gauge_angle(score: Any) -> float:
    """Needle angle on a 0-180 degree semicircle for a 0-10 score."""
    return gauge_value(score) / 10 * 180


def diversification_level(score: Any) -> str:
    """Quality band for a 1-10 diversification score."""
    score = as_number(score)
    if score >= 8:
        return "Excellent"
    if score >= 6:
        return "Good"
    if score >= 4:
        return "Fair"
    return "Poor"


def active_asset_count(portfolio: Dict[str, Any]) -> int:
    return len(allocation_slices(portfolio))


# -------------------- Figures -------------------- #

def pie_figure(portfolio: Dict[str, Any]) -> go.Figure:
    slices = allocation_slices(portfolio)
    fig = px.pie(
        names=[s["label"] for s in slices],
        values=[s["value"] for s in slices],
        color=[s["label"] for s in slices],
        color_discrete_map={s["label"]: s["color"] for s in slices},
        hole=0.45,
        title="Portfolio Allocation",
    )
    fig.update_traces(textinfo="label+percent", sort=False)
    return fig


def growth_figure(projections: Dict[str, Any]) -> go.Figure:
    rows = projection_rows(projections)
    periods = [r["period"] for r in rows]
    fig = go.Figure()
    for name, color in (("optimistic", "#10B981"), ("expected", "#3B82F6"), ("conservative", "#F59E0B")):
        fig.add_trace(go.Scatter(
            x=periods,
            y=[r[name] for r in rows],
            mode="lines+markers",
            name=name.capitalize(),
            line={"color": color, "width": 3},
        ))
    fig.update_layout(title="Growth Projections", yaxis_title="Cumulative return (%)", hovermode="x unified")
    return fig


def radar_figure(portfolio: Dict[str, Any], diversification_score: float) -> go.Figure:
    points = radar_points(portfolio)
    labels = [p["asset"] for p in points]
    values = [p["value"] for p in points]
    fig = go.Figure(go.Scatterpolar(
        # Repeat the first point to close the polygon.
        r=values + values[:1],
        theta=labels + labels[:1],
        fill="toself",
        line={"color": "#8B5CF6"},
        name="Allocation",
    ))
    fig.update_layout(
        polar={"radialaxis": {"visible": True, "range": [0, 100]}},
        showlegend=False,
        title=f"Diversification: {diversification_level(diversification_score)} ({diversification_score}/10)",
    )
    return fig


def gauge_figure(risk_score: float) -> go.Figure:
    info = risk_level(risk_score)
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=gauge_value(risk_score),
        number={"suffix": "/10"},
        title={"text": info["level"]},
        gauge={
            "axis": {"range": [0, 10]},
            "bar": {"color": info["color"]},
            "steps": [
                {"range": [0, 3], "color": "#D1FAE5"},
                {"range": [3, 6], "color": "#FEF3C7"},
                {"range": [6, 10], "color": "#FEE2E2"},
            ],
        },
    ))
    return fig
