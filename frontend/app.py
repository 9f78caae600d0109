import streamlit as st

from dashboard.client import suggest_tickers
from dashboard.config import Config
from dashboard.controller import DashboardController
from dashboard.templates import SECTION_TITLES

# ----------------- CONFIG -----------------
cfg = Config()
st.set_page_config(page_title="Stock Prediction Dashboard", layout="wide", page_icon="📈")

# Custom CSS for the metric cards
st.markdown("""
    <style>
    .metric-card {
        background-color: #1e2130;
        padding: 20px;
        border-radius: 10px;
        border: 1px solid #2e3140;
        text-align: center;
    }
    .metric-value {
        font-size: 24px;
        font-weight: bold;
    }
    .metric-label {
        font-size: 14px;
        color: #9ca3af;
    }
    </style>
    """, unsafe_allow_html=True)

UP = "#4ade80"
DOWN = "#f87171"

# ----------------- SESSION ----------------
if "view" not in st.session_state:
    st.session_state.view = {}
if "busy" not in st.session_state:
    st.session_state.busy = False


class SessionTarget:
    """RenderTarget that stores what should be shown; the page draws it on every rerun."""

    def __init__(self, status):
        self.status = status

    def set_busy(self, busy):
        st.session_state.busy = busy
        if busy:
            self.status.info("🔍 Analyzing with the prediction model...")
        else:
            self.status.empty()

    def notify(self, message, kind="success"):
        st.session_state.view["notification"] = (kind, message)

    def show_overview(self, overview):
        st.session_state.view["overview"] = overview

    def show_table(self, frame):
        st.session_state.view["table"] = frame

    def show_charts(self, price_fig, volume_fig):
        st.session_state.view["charts"] = (price_fig, volume_fig)

    def show_report(self, report, sections):
        st.session_state.view["report"] = (report, sections)

    def show_explainer(self, explainer, sections):
        st.session_state.view["explainer"] = (explainer, sections)


def metric_card(col, label, value, color=None):
    style = f" style='color: {color}'" if color else ""
    col.markdown(
        f"<div class='metric-card'><div class='metric-label'>{label}</div>"
        f"<div class='metric-value'{style}>{value}</div></div>",
        unsafe_allow_html=True,
    )


def style_rows(frame):
    def colour(row):
        close_color = f"color: {UP if row['Up'] else DOWN}"
        return ["" if c != "Close" else close_color for c in row.index]
    return (
        frame.style.apply(colour, axis=1)
        .format({c: "${:.2f}" for c in ["Open", "Close", "High", "Low"]})
        .hide(axis="columns", subset=["Up"])
    )


# ----------------- SIDEBAR ----------------
with st.sidebar:
    st.title("📈 Stock Predictor")
    st.caption(f"{cfg.model_name} price forecasting with technical analysis")

    query = st.text_input("Ticker Symbol", value="", placeholder="e.g., AAPL, TSLA, NVDA")
    suggestions = suggest_tickers(query, cfg.tickers, cfg.suggestion_limit)
    choice = None
    if suggestions and query.strip().upper() not in suggestions:
        # nothing preselected; a partial entry is submitted as typed
        choice = st.radio("Suggestions", suggestions, horizontal=True, index=None)
    ticker = choice or query

    run_btn = st.button("Predict", type="primary", width="stretch",
                        disabled=st.session_state.busy)

    st.markdown("---")
    st.markdown(f"API: `{cfg.predict_url}`")

status = st.empty()

# ----------------- MAIN LOGIC ----------------
if run_btn:
    st.session_state.view = {}
    DashboardController(SessionTarget(status), config=cfg).analyze(ticker)

view = st.session_state.view

if "notification" in view:
    kind, message = view["notification"]
    (st.success if kind == "success" else st.error)(message)

if "overview" in view:
    ov = view["overview"]
    st.markdown(f"## 🏛️ {ov.ticker}")
    k1, k2, k3, k4, k5 = st.columns(5)
    change_color = UP if float(ov.predicted_change) >= 0 else DOWN
    metric_card(k1, "Current Price", f"${ov.current_price:.2f}")
    metric_card(k2, "Predicted Change", f"{ov.predicted_change}%", change_color)
    metric_card(k3, "Accuracy", f"{ov.accuracy}%")
    metric_card(k4, "RMSE", ov.rmse)
    metric_card(k5, "Trend", ov.trend, UP if ov.trend == "Bullish" else DOWN)
    st.caption(f"MSE: {ov.mse}")
    st.markdown("---")

if "charts" in view:
    price_fig, volume_fig = view["charts"]
    st.plotly_chart(price_fig, width="stretch")
    st.plotly_chart(volume_fig, width="stretch")

if "table" in view and not view["table"].empty:
    st.subheader("Historical Data")
    st.dataframe(style_rows(view["table"]), width="stretch", hide_index=True)

if "report" in view:
    report, sections = view["report"]
    st.subheader(f"{report.ticker} - {report.profile.name}")
    tabs = st.tabs([SECTION_TITLES[name] for name in sections])
    for tab, body in zip(tabs, sections.values()):
        with tab:
            st.markdown(body)

if "explainer" in view:
    explainer, sections = view["explainer"]
    with st.expander("🧠 Model Explainer"):
        st.write(sections["summary"])
        st.markdown("**Feature Importance**")
        for feature, share in explainer.feature_importance:
            st.progress(min(int(round(share)), 100), text=f"{feature}: {share:.1f}%")
        st.markdown("**Technical Analysis**")
        st.markdown(sections["technical"])
        st.markdown("**Model Reasoning**")
        st.markdown(sections["reasoning"])
        st.markdown("**Prediction Factors**")
        st.markdown(sections["factors"])

if not view:
    # Landing Page State
    st.markdown("### Ready to Analyze")
    st.markdown("""
    Enter a stock ticker in the sidebar to begin.

    **Features:**
    - 📈 Historical vs. predicted price chart
    - 📊 Moving averages, RSI, volatility and volume trend
    - 🎯 BUY / SELL / HOLD recommendation with every signal listed
    - 🛡️ Risk tier with stop-loss and position sizing
    """)
