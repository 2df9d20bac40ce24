import asyncio
import concurrent.futures
import threading
import pytest

from glfsearch.core.search.controller import SearchController
from glfsearch.core.utils.event_loop import LoopRunner
from glfsearch.models.preferences import Preferences
from conftest import make_result


class InstantClient:
    def __init__(self):
        self.preferences = Preferences()
        self.threads = set()

    async def search(self, query, limit=None, include_scores=None):
        self.threads.add(threading.current_thread().name)
        return make_result(query, "team/api")

    async def sync(self):
        pass


@pytest.fixture
def runner():
    runner = LoopRunner(name="test-loop")
    yield runner
    runner.stop()


def test_runs_coroutines_on_background_thread(runner):
    async def where():
        return threading.current_thread().name

    assert runner.alive
    assert runner.run(where(), timeout=2) == "test-loop"


def test_controller_driven_from_another_thread(runner):
    client = InstantClient()
    controller = SearchController(client, debounce_seconds=0)

    async def type_text():
        return controller.set_search_text("api")

    runner.run(type_text(), timeout=2)
    runner.run(controller.wait_idle(), timeout=2)

    assert controller.view.result.query == "api"
    assert client.threads == {"test-loop"}


def test_timeout_leaves_work_running(runner):
    async def slow():
        await asyncio.sleep(0.2)
        return "done"

    future = runner.submit(slow())
    with pytest.raises(concurrent.futures.TimeoutError):
        future.result(timeout=0.01)
    assert future.result(timeout=2) == "done"


def test_stop_closes_loop():
    runner = LoopRunner()
    runner.stop()
    assert not runner.alive
    # Stopping twice is harmless
    runner.stop()


def test_call_runs_before_later_submissions(runner):
    client = InstantClient()
    controller = SearchController(client, debounce_seconds=0)

    runner.call(controller.set_search_text, "web")
    runner.run(controller.wait_idle(), timeout=2)

    assert client.threads == {"test-loop"}
    assert controller.view.result.query == "web"
