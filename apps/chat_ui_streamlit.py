# PURPOSE: Streamlit chat + dashboard for the Smart Investment Advisor.
# CONTEXT: Talks to the FastAPI backend over HTTP (RecommendationClient); all chat
#          state lives in one ConversationState per browser session.
# Run: streamlit run apps/chat_ui_streamlit.py

import json

import streamlit as st

from smart_advisor.charts import (
    active_asset_count,
    as_mapping,
    asset_label,
    diversification_level,
    gauge_figure,
    growth_figure,
    pie_figure,
    radar_figure,
    risk_level,
)
from smart_advisor.client import RecommendationClient
from smart_advisor.config import load_settings
from smart_advisor.conversation import SUGGESTED_QUERIES, ConversationState
from smart_advisor.errors import TransportError
from smart_advisor.export import build_report, build_share_text, recommendation_to_json, report_filename
from smart_advisor.logging_setup import configure_logging

st.set_page_config(page_title="Smart Investment Advisor", layout="wide")


@st.cache_resource
def get_client() -> RecommendationClient:
    configure_logging()
    settings = load_settings()
    return RecommendationClient(settings.api_base_url, timeout=settings.request_timeout)


client = get_client()

# One conversation per browser session.
if "conversation" not in st.session_state:
    st.session_state.conversation = ConversationState()
conv: ConversationState = st.session_state.conversation


def render_recommendation_card(rec: dict) -> None:
    """Compact card under an assistant message."""
    badge = "AI-powered" if rec.get("isAI") else "Expert framework"
    st.caption(f"{badge} · {rec.get('timestamp', '')}")
    c1, c2, c3 = st.columns(3)
    c1.metric("Risk score", f"{rec.get('riskScore', 'N/A')}/10")
    c2.metric("Diversification", f"{rec.get('diversificationScore', 'N/A')}/10")
    expected = as_mapping(as_mapping(rec.get("projections")).get("5year")).get("expected")
    c3.metric("Expected 5y return", "N/A" if expected is None else f"+{expected}%")
    alloc = ", ".join(f"{asset_label(k)} {v}%" for k, v in as_mapping(rec.get("portfolio")).items() if v)
    st.write(f"**Allocation:** {alloc}")


with st.sidebar:
    st.title("Smart Investment Advisor")
    try:
        health = client.check_health()
        st.success("AI: Bedrock" if health.get("aiEnabled") else "AI: disabled (mock data)")
    except TransportError as e:
        st.warning(str(e))
    st.caption("Educational only – not financial advice.")

chat_tab, dashboard_tab = st.tabs(["Advisor", "Dashboard"])

with chat_tab:
    if conv.error:
        st.error(conv.error)
        if st.button("Dismiss"):
            conv.dismiss_error()
            st.rerun()

    for message in conv.messages:
        with st.chat_message("user" if message.is_user else "assistant"):
            st.write(message.text)
            if message.recommendation:
                render_recommendation_card(message.recommendation)

    st.write("Try one of these:")
    picked = None
    cols = st.columns(len(SUGGESTED_QUERIES))
    for col, query in zip(cols, SUGGESTED_QUERIES):
        if col.button(query, disabled=conv.is_loading):
            picked = query

    typed = st.chat_input("Describe your investment goals...", disabled=conv.is_loading)
    text = typed or picked
    if text:
        with st.spinner("Analyzing your investment goals..."):
            conv.submit(text, client)
        st.rerun()

with dashboard_tab:
    rec = conv.current_recommendation
    if rec is None:
        st.info("Chat with the advisor to get a portfolio recommendation; it will show up here.")
    else:
        risk = risk_level(rec.get("riskScore", 0))
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Risk", f"{rec.get('riskScore')}/10", risk["level"])
        c2.metric("Diversification", f"{rec.get('diversificationScore')}/10",
                  diversification_level(rec.get("diversificationScore", 0)))
        expected = as_mapping(as_mapping(rec.get("projections")).get("5year")).get("expected")
        c3.metric("Expected 5y", "N/A" if expected is None else f"+{expected}%")
        c4.metric("Asset classes", active_asset_count(rec.get("portfolio")))

        left, right = st.columns(2)
        left.plotly_chart(pie_figure(rec.get("portfolio")), use_container_width=True)
        right.plotly_chart(growth_figure(rec.get("projections")), use_container_width=True)
        left, right = st.columns(2)
        left.plotly_chart(gauge_figure(rec.get("riskScore", 0)), use_container_width=True)
        left.caption(risk["description"])
        right.plotly_chart(radar_figure(rec.get("portfolio"), rec.get("diversificationScore", 0)),
                           use_container_width=True)

        st.subheader("Investment rationale")
        for asset, reason in as_mapping(rec.get("rationale")).items():
            st.markdown(f"**{asset_label(asset)}** – {reason}")

        st.subheader("Risk assessment")
        for key, value in as_mapping(rec.get("riskAssessment")).items():
            st.markdown(f"**{key}** – {value}")

        d1, d2 = st.columns(2)
        d1.download_button("Export report", build_report(rec), file_name=report_filename("report"),
                           mime="text/plain")
        d2.download_button("Export JSON", recommendation_to_json(rec), file_name=report_filename("json"),
                           mime="application/json")
        with st.expander("Share"):
            st.code(build_share_text(rec), language=None)
        with st.expander("Raw JSON"):
            st.code(json.dumps(rec, indent=2))
