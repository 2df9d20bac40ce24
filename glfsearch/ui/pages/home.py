import streamlit as st
from glfsearch.ui.state import AppState
from glfsearch.core.external_tools import ExternalTools


def render(app_state: AppState):
    st.title("GLF Search :: Status")

    # --- Status Section ---
    st.header("System Status")

    col1, col2, col3 = st.columns(3)
    prefs = app_state.preferences

    # Environment
    with col1:
        st.metric("Environment", app_state.env)

    # Config
    with col2:
        cfg_status = app_state.config.get("status", "UNKNOWN")
        st.metric("Config", cfg_status)
        if cfg_status == "ERROR":
            st.error(f"Config Error: {app_state.config.get('error')}")
        else:
            st.caption(f"Source: {app_state.config.get('source')}")

    # glf binary
    with col3:
        binary = ExternalTools.check_binaries(prefs.glf_path)
        st.metric("glf binary", "OK" if binary["found"] else "MISSING")
        if binary["found"]:
            st.caption(binary["resolved"])
        else:
            st.warning(f"glf not found (configured: {binary['configured']}). Install with `brew install igusev/tap/glf`.")

    st.divider()

    # --- Background Sync ---
    st.header("Background Sync")
    scheduler = app_state.background_sync()
    if not scheduler.enabled:
        st.info("Background sync is disabled (interval is 0 or invalid).")
    else:
        c1, c2, c3 = st.columns(3)
        c1.metric("Interval", f"{scheduler.interval_minutes} min")
        c2.metric("Runs", scheduler.runs)
        c3.metric("Failures", scheduler.failures)
        if scheduler.failures:
            st.caption("Background sync failures are only logged. Use \"Sync Projects\" on the Search page to retry.")

    st.divider()

    # --- Preferences ---
    st.header("Preferences")
    st.json({
        "glf_path": prefs.glf_path,
        "show_scores": prefs.show_scores,
        "max_results": prefs.limit,
        "auto_sync_interval": prefs.sync_interval_minutes or 0,
        "timeout_seconds": prefs.timeout_seconds,
        "debounce_ms": prefs.debounce_ms,
    })
