import plotly.graph_objects as go
import pytest

from smart_advisor import charts
from smart_advisor.mock_model import generate_mock_recommendation

def test_allocation_slices_drop_zero_and_sort():
    slices = charts.allocation_slices({"bonds": 25, "stocks": 60, "crypto": 0, "reits": 5, "etfs": 10})
    assert [s["key"] for s in slices] == ["stocks", "bonds", "etfs", "reits"]
    assert slices[0]["label"] == "Stocks" and slices[0]["color"] == "#3B82F6"

def test_allocation_slices_unknown_asset():
    slices = charts.allocation_slices({"gold": 10})
    assert slices == [{"key": "gold", "label": "Gold", "value": 10.0, "color": charts.FALLBACK_COLOR}]

def test_projection_rows_in_horizon_order():
    projections = generate_mock_recommendation()["projections"]
    shuffled = {k: projections[k] for k in ("10year", "1year", "5year", "3year")}
    rows = charts.projection_rows(shuffled)
    assert [r["period"] for r in rows] == ["1Y", "3Y", "5Y", "10Y"]
    assert rows[0]["range"] == pytest.approx(12.8 - 5.2)

def test_radar_points_cover_all_assets():
    points = charts.radar_points({"stocks": 100})
    assert len(points) == 6
    assert points[0] == {"asset": "Stocks", "value": 100.0, "fullMark": 100}
    assert all(p["value"] == 0 for p in points[1:])

@pytest.mark.parametrize("score,angle", [(0, 0), (5, 90), (10, 180), (-3, 0), (14, 180)])
def test_gauge_angle(score, angle):
    assert charts.gauge_angle(score) == angle

@pytest.mark.parametrize("score,level", [(2, "Low Risk"), (3, "Low Risk"), (6, "Moderate Risk"), (7, "High Risk")])
def test_risk_level(score, level):
    assert charts.risk_level(score)["level"] == level

@pytest.mark.parametrize("score,level", [(9, "Excellent"), (8, "Excellent"), (6, "Good"), (4, "Fair"), (3, "Poor")])
def test_diversification_level(score, level):
    assert charts.diversification_level(score) == level

def test_figures_build_from_mock():
    rec = generate_mock_recommendation()
    for fig in (
        charts.pie_figure(rec["portfolio"]),
        charts.growth_figure(rec["projections"]),
        charts.radar_figure(rec["portfolio"], rec["diversificationScore"]),
        charts.gauge_figure(rec["riskScore"]),
    ):
        assert isinstance(fig, go.Figure)
    assert len(charts.growth_figure(rec["projections"]).data) == 3

@pytest.mark.parametrize("score", [None, "7", True, [7]])
def test_non_numeric_scores_band_as_zero(score):
    assert charts.risk_level(score)["level"] == "Low Risk"
    assert charts.diversification_level(score) == "Poor"
    assert charts.gauge_angle(score) == 0

@pytest.mark.parametrize("score,value", [(6, 6.0), (-2, 0.0), (12.5, 10.0), (None, 0.0)])
def test_gauge_value_matches_figure(score, value):
    assert charts.gauge_value(score) == value
    assert charts.gauge_figure(score).data[0].value == value

def test_malformed_shapes_render_empty():
    assert charts.allocation_slices(["stocks", 60]) == []
    assert charts.projection_rows({"1year": "soon", "5year": {"expected": 9}})[0]["expected"] == 0
    assert all(p["value"] == 0 for p in charts.radar_points("stocks"))
