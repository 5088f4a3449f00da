import streamlit as st

PRIMARY = "var(--primary-color, #16a34a)"  # green-600 fallback
MUTED = "#64748b"  # slate-500

TIER_COLORS = {
    "high": ("rgba(22,163,74,0.15)", "#16a34a"),
    "medium": ("rgba(234,179,8,0.18)", "#ca8a04"),
    "low": ("rgba(220,38,38,0.15)", "#dc2626"),
}

def page_header(title: str, subtitle: str | None = None):
    st.markdown(f"<h2 style='margin-bottom:0.2rem'>{title}</h2>", unsafe_allow_html=True)
    if subtitle:
        st.markdown(f"<p style='color:{MUTED};margin-top:0'>{subtitle}</p>", unsafe_allow_html=True)

def pill(text: str, background: str = "rgba(22,163,74,0.12)", color: str = "#16a34a"):
    st.markdown(
        f"""
        <span style="
          padding:4px 10px;border-radius:9999px;
          background:{background};color:{color};
          font-size:0.85rem;">{text}</span>
        """,
        unsafe_allow_html=True
    )

def confidence_badge(label: str, tier: str):
    background, color = TIER_COLORS.get(tier, TIER_COLORS["low"])
    pill(label, background=background, color=color)
