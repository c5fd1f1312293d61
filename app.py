import logging
from datetime import datetime, timezone

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from dashboard import build_snapshot, chart_rows
from filters import ALL, TIME_RANGE_OPTIONS, FilterSelection
from kpi_definitions import get_kpi_definitions
from report_export import build_report, export_report_json, report_filename, save_report
from sales_data import generate_sales_data
from settings import configure_logging, load_settings
from template_report import generate_template_report

logger = logging.getLogger(__name__)

COLORS = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884D8", "#82CA9D"]
HISTORY_COLOR = "#2563eb"
FORECAST_COLOR = "#dc2626"


def init_session_state(seed: int | None):
    defaults = {
        "sales_data": None,
        "saved_report_path": None,
    }
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v
    # generated once per session; a new dataset is a new universe
    if st.session_state.sales_data is None:
        st.session_state.sales_data = generate_sales_data(seed=seed)


def _inject_css():
    st.markdown("""
    <style>
    .stApp { max-width: 100%; }
    .main-header { font-size: 1.75rem; font-weight: 600; color: #1e293b; margin-bottom: 0.25rem; }
    .insight-card { background: #eff6ff; border-left: 4px solid #2563eb; padding: 0.6rem 0.8rem; border-radius: 4px; margin-bottom: 0.5rem; }
    section[data-testid="stSidebar"] .stMarkdown { font-size: 0.9rem; }
    </style>
    """, unsafe_allow_html=True)


def _format_millions(value: float) -> str:
    return f"${value / 1_000_000:.1f}M"


def _trend_figure(rows: list[dict]) -> go.Figure:
    df = pd.DataFrame(rows)
    fig = go.Figure()
    history = df[df["type"] == "historical"]
    fig.add_trace(go.Scatter(
        x=history["month"], y=history["revenue"], mode="lines+markers",
        name="Historical", line=dict(color=HISTORY_COLOR, width=2),
    ))
    forecast = df[df["type"] == "forecast"]
    if not forecast.empty:
        # start the dashed line at the last actual month so the two series connect
        bridge = pd.concat([history.tail(1), forecast])
        fig.add_trace(go.Scatter(
            x=bridge["month"], y=bridge["revenue"], mode="lines+markers",
            name="Forecast", line=dict(color=FORECAST_COLOR, width=2, dash="dash"),
        ))
    fig.update_layout(height=400, yaxis_tickprefix="$", yaxis_tickformat=",.0f", margin=dict(t=20))
    return fig


def _render_kpis(kpis):
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Revenue", _format_millions(kpis.total_revenue))
    c2.metric("Total Orders", f"{kpis.total_orders:,.0f}")
    c3.metric("Avg Order Value", f"${kpis.avg_order_value:,.0f}")
    c4.metric("Active Regions", kpis.unique_regions)


def main():
    st.set_page_config(page_title="Sales Performance Dashboard", layout="wide", initial_sidebar_state="expanded")
    _inject_css()

    settings = load_settings()
    configure_logging(settings.log_level)
    init_session_state(settings.seed)
    sales_data = st.session_state.sales_data

    # ----- Sidebar: Filters -----
    with st.sidebar:
        st.markdown("### Filters")
        st.divider()
        products = [ALL, *pd.unique(sales_data["product"])]
        regions = [ALL, *pd.unique(sales_data["region"])]
        product = st.selectbox("Product", products, key="product_select")
        region = st.selectbox("Region", regions, key="region_select")
        time_range = st.selectbox("Time Range", TIME_RANGE_OPTIONS, key="time_range_select")
        show_forecast = st.checkbox("Show AI forecast", value=False, key="show_forecast")

        if st.button("Regenerate data", key="regenerate_btn"):
            logger.info("Regenerating sales data at user request")
            st.session_state.sales_data = generate_sales_data()
            st.rerun()

        with st.expander("KPI definitions", expanded=False):
            for name, defn in get_kpi_definitions().items():
                st.markdown(f"**{name}**")
                st.caption(defn["formula"])

    selection = FilterSelection(product=product, region=region, time_range=time_range)
    snapshot = build_snapshot(
        sales_data,
        selection,
        show_forecast=show_forecast,
        horizon=settings.forecast_horizon,
        anchor=settings.time_range_anchor,
    )
    kpis = snapshot.kpis

    # ----- Main area -----
    st.markdown('<div class="main-header">Sales Performance Dashboard</div>', unsafe_allow_html=True)
    st.caption("AI-powered analytics and forecasting for data-driven decisions")
    st.caption(f"**{snapshot.rows_used:,}** of {len(sales_data):,} records match the current filters.")

    _render_kpis(kpis)

    st.subheader("Revenue Trend Over Time")
    if kpis.monthly_trend:
        st.plotly_chart(_trend_figure(chart_rows(snapshot)), width="stretch")
        if show_forecast and not snapshot.forecast:
            st.warning("Forecast not available for the current selection.")
    else:
        st.info("No monthly data for the selected filters.")

    col_prod, col_region = st.columns(2)
    with col_prod:
        st.subheader("Revenue by Product")
        if kpis.product_totals:
            fig = px.bar(pd.DataFrame(kpis.product_totals), x="product", y="revenue",
                         color_discrete_sequence=[COLORS[0]])
            fig.update_layout(yaxis_tickprefix="$", margin=dict(t=20))
            st.plotly_chart(fig, width="stretch")
        else:
            st.info("No product data.")
    with col_region:
        st.subheader("Revenue by Region")
        if kpis.region_totals:
            fig = px.pie(pd.DataFrame(kpis.region_totals), names="region", values="revenue",
                         color_discrete_sequence=COLORS)
            fig.update_layout(margin=dict(t=20))
            st.plotly_chart(fig, width="stretch")
        else:
            st.info("No regional data.")

    st.subheader("AI Insights")
    for insight in snapshot.insights:
        st.markdown(f'<div class="insight-card">{insight}</div>', unsafe_allow_html=True)

    if snapshot.forecast:
        with st.expander("Forecast details", expanded=False):
            st.dataframe(pd.DataFrame(snapshot.forecast), width="stretch")

    # ----- Export -----
    st.divider()
    now = datetime.now(timezone.utc)
    col_json, col_md, col_save = st.columns(3)
    with col_json:
        st.download_button(
            "Export Report (JSON)",
            data=export_report_json(selection, kpis, snapshot.insights, generated_at=now),
            file_name=report_filename(now),
            mime="application/json",
            key="dl_json",
        )
    with col_md:
        st.download_button(
            "Download Summary (Markdown)",
            data=generate_template_report(snapshot),
            file_name=report_filename(now).replace(".json", ".md"),
            mime="text/markdown",
            key="dl_md",
        )
    with col_save:
        if st.button("Save report to disk", key="save_btn"):
            payload = build_report(selection, kpis, snapshot.insights, generated_at=now)
            st.session_state.saved_report_path = save_report(payload, settings.output_dir)
    if st.session_state.saved_report_path:
        st.caption(f"Saved to {st.session_state.saved_report_path}")


if __name__ == "__main__":
    main()
