import time
import streamlit as st
from glfsearch.ui.state import AppState
from glfsearch.ui.components import project_list, detail_panel
from glfsearch.core.notifications import ToastStyle
from glfsearch.services import actions_service

TOAST_ICONS = {
    ToastStyle.ANIMATED: "⏳",
    ToastStyle.SUCCESS: "✅",
    ToastStyle.FAILURE: "❌",
}

LOADING_POLL_SECONDS = 0.3


def _on_search_change(app_state: AppState):
    app_state.search(st.session_state.get("glf_search_text", ""))


def _copy(kind: str, value: str):
    if actions_service.copy_to_clipboard(value):
        st.toast(f"Copied {kind}", icon="📋")
    else:
        st.toast(f"Cannot copy {kind}: no clipboard tool available", icon="❌")


def _select(project):
    st.session_state["glf_selected_path"] = project.path


def render(app_state: AppState):
    st.title("Search")

    if app_state.config.get("status") == "ERROR":
        st.warning(f"Config Error: {app_state.config.get('error')}. Using defaults.")

    prefs = app_state.preferences
    app_state.background_sync()

    # First render of a session lists everything
    if "glf_search_started" not in st.session_state:
        st.session_state["glf_search_started"] = True
        app_state.search("")

    # --- Search Bar & Toolbar ---
    c_search, c_sync, c_hidden = st.columns([4, 1, 1])
    with c_search:
        st.text_input(
            "Query",
            placeholder="Search GitLab projects...",
            key="glf_search_text",
            on_change=_on_search_change,
            args=(app_state,),
        )
    with c_sync:
        if st.button("Sync Projects", icon="🔄"):
            with st.spinner("Syncing projects..."):
                app_state.sync_now()
    with c_hidden:
        label = "Hide Hidden Projects" if app_state.view.show_hidden else "Show Hidden Projects"
        if st.button(label):
            app_state.toggle_show_hidden()
            st.rerun()

    for toast in app_state.drain_toasts():
        text = f"**{toast.title}**" + (f"\n\n{toast.message}" if toast.message else "")
        st.toast(text, icon=TOAST_ICONS[toast.style])

    view = app_state.view
    visible = app_state.controller.visible_projects

    # --- Results ---
    if view.error:
        st.error(f"Search Error\n\n{view.error}", icon="⚠️")
    elif view.is_loading or view.is_initial_load:
        with st.spinner("Searching..."):
            time.sleep(LOADING_POLL_SECONDS)
            app_state.wait_for_results()
        st.rerun()
    elif not visible:
        empty = project_list.empty_view(view.search_text, view.show_hidden)
        st.info(f"**{empty['title']}**\n\n{empty['description']}", icon="🔍")
    else:
        col_res, col_detail = st.columns([3, 2])
        with col_res:
            if view.result is not None:
                st.caption(f"Showing {len(visible)} of {view.result.total} projects (limit {view.result.limit})")
            project_list.render(visible, prefs.show_scores, on_copy=_copy, on_select=_select)

        selected_path = st.session_state.get("glf_selected_path")
        selected = next((p for p in visible if p.path == selected_path), None)
        with col_detail:
            detail_panel.render(selected, "Project Details")
