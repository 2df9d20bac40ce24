import asyncio
import logging
from dataclasses import replace
from enum import Enum
from typing import List, Optional

from glfsearch.core.errors import GLFError
from glfsearch.core.glf_client import GLFClient
from glfsearch.core.notifications import Notifier, ToastStyle
from glfsearch.core.search.filters import filter_projects
from glfsearch.core.search.models import SearchRequest, SearchView
from glfsearch.models.preferences import Preferences
from glfsearch.models.projects import Project

logger = logging.getLogger(__name__)


class SearchPhase(Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    RUNNING = "running"


def error_message(error: BaseException) -> str:
    if isinstance(error, GLFError):
        return error.message
    return str(error) or "Unknown error"


class SearchController:
    """
    Owns the search text and turns bursts of changes into one glf search.

    Every new request takes the next generation number and cancels the
    previous task. A completion is applied only if its generation is still
    current, because cancelling the child process is best effort and a
    stale glf run may still finish and produce output.

    Must be driven from a single running event loop.
    """

    def __init__(
        self,
        client: GLFClient,
        preferences: Optional[Preferences] = None,
        notifier: Optional[Notifier] = None,
        debounce_seconds: Optional[float] = None,
    ):
        self.client = client
        self.preferences = preferences or client.preferences
        self.notifier = notifier or Notifier()
        if debounce_seconds is None:
            debounce_seconds = self.preferences.debounce_ms / 1000.0
        self.debounce_seconds = debounce_seconds

        self.view = SearchView()
        self.phase = SearchPhase.IDLE
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    # --- Inputs ---

    def set_search_text(self, text: str) -> asyncio.Task:
        """Keystroke entry point: restarts the debounce window."""
        self._publish(search_text=text)
        return self._start(text, delay=self.debounce_seconds)

    async def perform_search(self, query: str) -> bool:
        """
        Runs a search immediately. Returns True if this search was the one
        applied, False if it was superseded or cancelled.
        """
        task = self._start(query, delay=0)
        await asyncio.wait([task])
        return not task.cancelled() and task.result()

    async def sync_now(self) -> bool:
        """
        User-triggered full sync. Reported through its own toast; on success
        the current text is searched again to show the fresh cache.
        """
        toast = self.notifier.show(ToastStyle.ANIMATED, "Syncing projects...")
        try:
            await self.client.sync()
        except Exception as e:
            message = error_message(e)
            logger.error(f"Sync failed: {message}")
            self.notifier.update(toast, ToastStyle.FAILURE, "Sync failed", message)
            return False

        self.notifier.update(toast, ToastStyle.SUCCESS, "Sync complete", "Projects updated from GitLab")
        await self.perform_search(self.view.search_text)
        return True

    def toggle_show_hidden(self) -> bool:
        self._publish(show_hidden=not self.view.show_hidden)
        return self.view.show_hidden

    async def wait_idle(self) -> None:
        task = self._task
        if task is not None and not task.done():
            await asyncio.wait([task])

    def close(self) -> None:
        self._generation += 1
        self._cancel_pending()
        self.phase = SearchPhase.IDLE

    # --- Outputs ---

    @property
    def visible_projects(self) -> List[Project]:
        return filter_projects(self.view.projects, self.view.show_hidden)

    @property
    def generation(self) -> int:
        return self._generation

    # --- Internals ---

    def _start(self, query: str, delay: float) -> asyncio.Task:
        self._generation += 1
        self._cancel_pending()
        request = SearchRequest(
            query=query,
            generation=self._generation,
            limit=self.preferences.limit,
            include_scores=self.preferences.show_scores,
        )
        self.phase = SearchPhase.DEBOUNCING
        self._task = asyncio.get_running_loop().create_task(self._search(request, delay))
        return self._task

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def _is_current(self, request: SearchRequest) -> bool:
        return request.generation == self._generation

    async def _search(self, request: SearchRequest, delay: float) -> bool:
        if delay > 0:
            await asyncio.sleep(delay)

        self.phase = SearchPhase.RUNNING
        self._publish(is_loading=True, error=None)

        try:
            result = await self.client.search(
                request.query,
                limit=request.limit,
                include_scores=request.include_scores,
            )
        except asyncio.CancelledError:
            logger.debug(f"Search #{request.generation} cancelled")
            raise
        except Exception as e:
            if not self._is_current(request):
                logger.debug(f"Discarding failure of superseded search #{request.generation}")
                return False
            message = error_message(e)
            if isinstance(e, GLFError):
                logger.error(f"Search failed: {message}")
            else:
                logger.exception("Search failed")
            self.phase = SearchPhase.IDLE
            self._publish(error=message, is_loading=False, is_initial_load=False)
            self.notifier.show(ToastStyle.FAILURE, "Search failed", message)
            return True

        if not self._is_current(request):
            logger.debug(f"Discarding result of superseded search #{request.generation}")
            return False

        self.phase = SearchPhase.IDLE
        self._publish(
            result=result,
            projects=result.results,
            error=None,
            is_loading=False,
            is_initial_load=False,
        )
        return True

    def _publish(self, **changes) -> None:
        self.view = replace(self.view, **changes)
