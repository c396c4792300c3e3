"""Streamlit UI for the page analyzer."""
from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from job_hunter.config import PROFILE_PATH, get_api_key, load_profile
from job_hunter.demo import get_page_analyzer
from job_hunter.environment import get_environment_config, is_demo_mode
from job_hunter.errors import JobHunterError
from job_hunter.log import get_logger
from job_hunter.models import UserProfile

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

_GLASS_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #e8eaf6 0%, #f3e5f5 40%, #e0f2f1 100%);
}
[data-testid="stSidebar"] {
    background: rgba(255,255,255,0.55);
    backdrop-filter: blur(16px);
    -webkit-backdrop-filter: blur(16px);
    border-right: 1px solid rgba(255,255,255,0.3);
}
.block-container {
    padding-top: 2rem;
}
[data-testid="stMetric"],
[data-testid="stForm"],
[data-testid="stExpander"] {
    background: rgba(255,255,255,0.6);
    backdrop-filter: blur(12px);
    -webkit-backdrop-filter: blur(12px);
    border-radius: 12px;
    border: 1px solid rgba(255,255,255,0.4);
    box-shadow: 0 4px 16px rgba(0,0,0,0.06);
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _analyzer():
    if "_analyzer" not in st.session_state:
        st.session_state["_analyzer"] = get_page_analyzer()
    return st.session_state["_analyzer"]


def _profile_dict() -> dict:
    if not PROFILE_PATH.exists():
        return {}
    try:
        return load_profile()
    except JobHunterError as exc:
        st.warning(str(exc))
        return {}


def _check(label: str, ok: bool) -> str:
    icon = "✅" if ok else "⬜"
    return f"{icon}  {label}"


def _show_error(exc: Exception) -> None:
    log.error("UI request failed: %s", exc)
    st.error(str(exc))


# ── Page: Analyze ────────────────────────────────────────────────────────


def page_analyze() -> None:
    st.header("Analyze Page")
    url = st.text_input("Page URL", placeholder="https://boards.greenhouse.io/acme/jobs/123")

    if st.button("Analyze", type="primary", use_container_width=True, disabled=not url):
        with st.status("Analyzing page…", expanded=True) as sw:
            try:
                if is_demo_mode():
                    analysis = _analyzer().analyze_page(None)
                else:
                    from job_hunter.browser import open_page

                    sw.write("Opening browser…")
                    with open_page(url) as page:
                        sw.write("Asking the vision model…")
                        analysis = _analyzer().analyze_page(page)
                st.session_state["last_analysis"] = analysis
                sw.update(label="Analysis complete!", state="complete")
            except Exception as exc:
                sw.update(label="Analysis failed", state="error")
                _show_error(exc)

    analysis = st.session_state.get("last_analysis")
    if not analysis:
        st.info("Enter a URL above to analyze a job page.")
        return

    st.divider()
    c1, c2, c3 = st.columns(3)
    c1.metric("Page type", analysis.page_type.replace("_", " ").title())
    c2.metric("Form fields", len(analysis.form_fields))
    c3.metric("Job links", len(analysis.jobs))
    if analysis.login_required:
        st.warning("This page requires login.")
    for err in analysis.errors:
        st.error(err)
    if analysis.form_fields:
        st.subheader("Form fields")
        st.dataframe(
            [
                {"label": f.label, "type": f.type, "required": f.required,
                 "selector": f.selector, "profile": f.profile_mapping or ""}
                for f in analysis.form_fields
            ],
            use_container_width=True,
        )
    with st.expander("Raw analysis"):
        st.json(analysis.to_dict())


# ── Page: Job Match ──────────────────────────────────────────────────────


def page_match() -> None:
    st.header("Job Match")
    profile = UserProfile.from_dict(_profile_dict())
    if not profile.skills:
        st.warning(f"No skills found in `{PROFILE_PATH.name}` — add them to get a meaningful score.")

    description = st.text_area("Job description", height=240)
    if st.button("Score match", type="primary", use_container_width=True, disabled=not description.strip()):
        try:
            with st.spinner("Scoring…"):
                st.session_state["last_match"] = _analyzer().analyze_job_match(description, profile)
        except Exception as exc:
            _show_error(exc)

    result = st.session_state.get("last_match")
    if result:
        st.divider()
        st.metric("Score", f"{result.score:.0f}")
        st.markdown(result.analysis)
        c1, c2 = st.columns(2)
        with c1:
            st.markdown("**Missing skills**")
            for s in result.missing_skills:
                st.markdown(f"- {s}")
        with c2:
            st.markdown("**Strong matches**")
            for s in result.strong_matches:
                st.markdown(f"- {s}")


# ── Page: Careers ────────────────────────────────────────────────────────


def page_careers() -> None:
    st.header("Careers Page")
    with st.form("careers"):
        company = st.text_input("Company name")
        website = st.text_input("Company website (optional)")
        submitted = st.form_submit_button("Find careers page", type="primary")
    if submitted and company.strip():
        try:
            url = _analyzer().find_careers_page(company.strip(), website.strip() or None)
        except Exception as exc:
            _show_error(exc)
            return
        if url:
            st.success(url)
        else:
            st.info(f"No careers page found for {company}.")


# ── Layout ───────────────────────────────────────────────────────────────


def _inject_css() -> None:
    st.markdown(_GLASS_CSS, unsafe_allow_html=True)


def _sidebar_status() -> None:
    cfg = get_environment_config()
    with st.sidebar:
        st.divider()
        st.markdown(f"**Mode:** {cfg.mode}")
        st.markdown(_check("LLM API key", bool(get_api_key())))
        st.markdown(_check("Profile configured", PROFILE_PATH.exists()))
    if cfg.is_demo:
        st.info("Demo mode — results below are sample data.")


def _wrap(page_fn):
    def run() -> None:
        _inject_css()
        _sidebar_status()
        page_fn()

    run.__name__ = page_fn.__name__
    return run


pages = [
    st.Page(_wrap(page_analyze), title="Analyze Page", icon="🔎", url_path="analyze", default=True),
    st.Page(_wrap(page_match), title="Job Match", icon="🎯", url_path="match"),
    st.Page(_wrap(page_careers), title="Careers Page", icon="🏢", url_path="careers"),
]

nav = st.navigation(pages)
nav.run()
