import html

import requests
import streamlit as st
from streamlit_lottie import st_lottie

from use_cases.session_models import Session

EMPTY_LOTTIE_URL = "https://assets5.lottiefiles.com/packages/lf20_a1xjeug1.json"


def setup_style():
    st.markdown("""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;600;700;800&display=swap');

        :root {
            --accent: #4f46e5;
            --accent-2: #14b8a6;
            --card-bg: rgba(255, 255, 255, 0.92);
            --card-border: rgba(15, 23, 42, 0.08);
            --text-main: #0f172a;
            --text-soft: #64748b;
            --ease-fluid: cubic-bezier(0.22, 1, 0.36, 1);
        }

        html, body, .stApp {
            font-family: 'Manrope', sans-serif;
            background: linear-gradient(135deg, #f8fafc 0%, #eef2f7 100%);
        }

        h1 {
            font-weight: 800;
            letter-spacing: -0.03em;
            background: linear-gradient(90deg, var(--accent), var(--accent-2));
            -webkit-background-clip: text;
            -webkit-text-fill-color: transparent;
        }

        .sc-card {
            background: var(--card-bg);
            border: 1px solid var(--card-border);
            border-radius: 16px;
            padding: 18px 20px 12px 20px;
            margin-bottom: 10px;
            box-shadow: 0 6px 24px rgba(15, 23, 42, 0.06);
            animation: cardFadeUp 340ms var(--ease-fluid);
        }

        @keyframes cardFadeUp {
            from { opacity: 0; transform: translateY(10px); }
            to { opacity: 1; transform: translateY(0); }
        }

        .sc-card-title { font-size: 1.15rem; font-weight: 700; color: var(--text-main); margin-bottom: 6px; }
        .sc-card-meta { font-size: 0.8rem; color: var(--text-soft); margin-top: 8px; }
        .sc-card a { color: var(--accent); word-break: break-all; }

        .sc-badge {
            display: inline-block;
            padding: 2px 10px;
            border-radius: 999px;
            font-size: 0.75rem;
            font-weight: 600;
        }
        .sc-badge-published { background: #dcfce7; color: #166534; }
        .sc-badge-draft { background: #fef9c3; color: #854d0e; }

        .sc-tag {
            display: inline-block;
            padding: 2px 8px;
            margin: 2px 4px 2px 0;
            border-radius: 8px;
            background: #e0e7ff;
            color: #3730a3;
            font-size: 0.75rem;
        }

        .sc-status-line { text-align: center; color: var(--text-soft); font-size: 0.85rem; min-height: 1.2rem; }

        @keyframes skeletonPulse {
            0% { opacity: 0.55; }
            50% { opacity: 1; }
            100% { opacity: 0.55; }
        }
        .skeleton-box {
            animation: skeletonPulse 1.8s ease-in-out infinite;
            background: rgba(255, 255, 255, 0.7);
            border-radius: 16px;
            padding: 18px;
            margin-bottom: 10px;
        }
        .skeleton-line { background: rgba(100, 116, 139, 0.18); border-radius: 8px; height: 12px; margin-bottom: 10px; }
    </style>
    """, unsafe_allow_html=True)


def render_placeholder(message="Loading..."):
    """Neutral screen shown while nothing may be decided yet (no redirects)."""
    st.markdown(f"<div class='sc-status-line' style='margin-top: 30vh;'>{html.escape(message)}</div>", unsafe_allow_html=True)


def render_skeleton_cards(count=3):
    for _ in range(count):
        st.markdown('''
        <div class="skeleton-box">
            <div class="skeleton-line" style="width: 45%; height: 16px;"></div>
            <div class="skeleton-line" style="width: 25%;"></div>
            <div class="skeleton-line" style="width: 60%;"></div>
        </div>
        ''', unsafe_allow_html=True)


def status_badge(status: str) -> str:
    css = "sc-badge-published" if status == "published" else "sc-badge-draft"
    return f"<span class='sc-badge {css}'>{html.escape(status)}</span>"


def render_session_card(session: Session, show_status=True):
    tags = "".join(f"<span class='sc-tag'>{html.escape(tag)}</span>" for tag in session.tags)
    updated = session.updated_at.strftime("%d.%m.%Y") if session.updated_at is not None else "—"
    badge = status_badge(session.status) if show_status else ""
    url = html.escape(session.json_file_url)
    st.markdown(
        f"""
        <div class="sc-card">
          <div class="sc-card-title">{html.escape(session.title) or "Untitled"} {badge}</div>
          <div>{tags}</div>
          <div class="sc-card-meta">JSON: <a href="{url}" target="_blank">{url}</a></div>
          <div class="sc-card-meta">Last updated: {updated}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


@st.cache_data(show_spinner=False)
def load_lottieurl(url: str):
    try:
        r = requests.get(url, timeout=5)
        if r.status_code == 200:
            return r.json()
    except (requests.RequestException, ValueError):
        return None
    return None


def render_empty_state(title, subtitle=""):
    lottie_empty = load_lottieurl(EMPTY_LOTTIE_URL)
    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        if lottie_empty:
            st_lottie(lottie_empty, height=220, key=f"empty_{title}")
        st.markdown(
            f"<h3 style='text-align: center;'>{html.escape(title)}</h3>"
            f"<p style='text-align: center; color: var(--text-soft);'>{html.escape(subtitle)}</p>",
            unsafe_allow_html=True
        )
