import concurrent.futures
import logging
import streamlit as st
from typing import List, Optional

from glfsearch.ui.config_loader import load_config
from glfsearch.core.glf_client import GLFClient
from glfsearch.core.notifications import Notifier, Toast
from glfsearch.core.search.controller import SearchController
from glfsearch.core.search.models import SearchView
from glfsearch.core.sync_scheduler import SyncScheduler
from glfsearch.core.utils.event_loop import LoopRunner
from glfsearch.models.preferences import Preferences

logger = logging.getLogger(__name__)

# How long a rerun waits for a search to settle before rendering "loading"
SETTLE_TIMEOUT = 2.0


@st.cache_resource
def get_loop_runner() -> LoopRunner:
    """
    One event loop per process hosts every controller and the scheduler.
    """
    return LoopRunner()


@st.cache_resource
def ensure_background_sync(glf_path: str, interval: str, timeout: Optional[float]) -> SyncScheduler:
    """
    Starts the periodic sync once per process and preference set.
    """
    prefs = Preferences(glf_path=glf_path, auto_sync_interval=interval, timeout_seconds=timeout)
    scheduler = SyncScheduler(GLFClient(prefs), prefs.auto_sync_interval)

    async def _start():
        return scheduler.start()

    get_loop_runner().run(_start())
    return scheduler


class AppState:
    def __init__(self):
        # Load config only once if possible, or reload on refresh
        if "app_config" not in st.session_state:
            st.session_state.app_config = load_config()

        self.config = st.session_state.app_config
        self.runner = get_loop_runner()

    @property
    def env(self) -> str:
        return self.config.get("env", "UNKNOWN")

    @property
    def preferences(self) -> Preferences:
        return Preferences.from_config(self.config.get("data", {}))

    @property
    def controller(self) -> SearchController:
        # Per browser session; show-hidden starts off for every session
        if "search_controller" not in st.session_state:
            prefs = self.preferences
            st.session_state.search_controller = SearchController(GLFClient(prefs), prefs, Notifier())
        return st.session_state.search_controller

    @property
    def view(self) -> SearchView:
        return self.controller.view

    def background_sync(self) -> SyncScheduler:
        prefs = self.preferences
        return ensure_background_sync(prefs.glf_path, prefs.auto_sync_interval, prefs.timeout_seconds)

    def on_loop(self, func, *args):
        """Runs a plain callable on the core loop and returns its result."""
        async def _call():
            return func(*args)

        return self.runner.run(_call())

    def search(self, text: str) -> SearchView:
        # Scheduled ahead of the wait below; the loop runs callbacks in order
        self.runner.call(self.controller.set_search_text, text)
        return self.wait_for_results()

    def wait_for_results(self, timeout: float = SETTLE_TIMEOUT) -> SearchView:
        try:
            self.runner.run(self.controller.wait_idle(), timeout=timeout)
        except concurrent.futures.TimeoutError:
            logger.debug("Search still running, rendering loading state")
        return self.controller.view

    def sync_now(self) -> bool:
        return self.runner.run(self.controller.sync_now())

    def toggle_show_hidden(self) -> bool:
        return self.on_loop(self.controller.toggle_show_hidden)

    def drain_toasts(self) -> List[Toast]:
        return self.on_loop(self.controller.notifier.drain)


def init_app_state() -> AppState:
    return AppState()
