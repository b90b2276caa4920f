import streamlit as st

from courseadmin.config import ENTITY_KINDS, TAB_TITLES, ConfigError, load_settings
from courseadmin.services.records_client import get_record_client
from courseadmin.ui import controller
from courseadmin.ui.state import (
    get_app_state,
    init_state_if_missing,
    mark_reload,
    pop_notices,
    push_notice,
    set_app_state,
)
from courseadmin.ui.views import RENDERERS
from courseadmin.utils.kpis import count_active_courses, format_eur, today_in, total_revenue
from courseadmin.utils.log import get_logger, setup_logging

st.set_page_config(page_title="Course Administration", layout="wide")

try:
    settings = load_settings(st.secrets)
except ConfigError as exc:
    st.error(f"Configuration error: {exc}")
    st.stop()

setup_logging(settings.log_level)
logger = get_logger("streamlit_app")

client = get_record_client()


def refresh_all():
    # Full load of all five collections happens ONLY here
    state, notices = controller.load_state(client, get_app_state())
    set_app_state(state)
    for n in notices:
        push_notice(n)


# -----------------------------
# Init
# -----------------------------
init_state_if_missing()
if get_app_state().loading:
    with st.spinner("Loading data..."):
        refresh_all()

for notice in pop_notices():
    st.toast(notice.message, icon="❌" if notice.level == "error" else "✅")

state = get_app_state()
today = today_in(settings.timezone)

# -----------------------------
# Header + summary counters
# -----------------------------
h1, h2 = st.columns([6, 1])
with h1:
    st.title("Course Administration")
    st.caption("Courses, instructors and participants")
with h2:
    if st.button("Reload", key="reload_all_btn"):
        logger.info("Manual reload requested")
        set_app_state(mark_reload(state))
        st.rerun()

c1, c2, c3 = st.columns(3)
c1.metric("Active courses", count_active_courses(state.courses, today))
c1.caption(f"of {len(state.courses)}")
c2.metric("Enrollments", len(state.enrollments))
c2.caption("total")
c3.metric("Revenue", f"{format_eur(total_revenue(state.enrollments, state.courses))} €")
c3.caption("EUR paid")

st.divider()

# -----------------------------
# Tabs
# -----------------------------
tabs = st.tabs([TAB_TITLES[k] for k in ENTITY_KINDS])
for kind, tab in zip(ENTITY_KINDS, tabs):
    with tab:
        RENDERERS[kind](state, client, today)
