import asyncio
import sys
import pytest

from glfsearch.core.errors import BinaryMissing, CacheEmpty, NotConfigured
from glfsearch.core.glf_client import GLFClient
from glfsearch.models.preferences import Preferences
from conftest import search_payload

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="fake glf is a shell script")

PROJECTS = [
    {"path": "team/api", "name": "api", "description": "REST API", "url": "https://gl/team/api",
     "starred": True, "excluded": False, "archived": False, "member": True, "score": 12.34},
    {"path": "team/legacy", "name": "legacy", "description": "", "url": "https://gl/team/legacy",
     "starred": False, "excluded": False, "archived": True, "member": True, "score": 3.0},
]


def test_search_passes_preferences_as_arguments(fake_glf, recorded_args):
    script = fake_glf(stdout=search_payload("api", PROJECTS, limit=5))
    client = GLFClient(Preferences(glf_path=str(script), max_results="5", show_scores=True))

    result = asyncio.run(client.search("api"))

    assert recorded_args() == ["--json", "--limit", "5", "--scores", "api"]
    assert [p.path for p in result.results] == ["team/api", "team/legacy"]
    assert result.limit == 5


def test_empty_query_lists_all(fake_glf, recorded_args):
    script = fake_glf(stdout=search_payload("", PROJECTS))
    client = GLFClient(Preferences(glf_path=str(script), max_results="not-a-number"))

    asyncio.run(client.search("  "))

    assert recorded_args() == ["--json", "--limit", "20"]


def test_search_error_envelope(fake_glf):
    script = fake_glf(stdout='{"error": "no projects in cache"}', exit_code=1)
    client = GLFClient(Preferences(glf_path=str(script)))
    with pytest.raises(CacheEmpty):
        asyncio.run(client.search("x"))


def test_sync_runs_full_sync(fake_glf, recorded_args):
    script = fake_glf(stdout="Synced 2 projects")
    client = GLFClient(Preferences(glf_path=str(script)))
    asyncio.run(client.sync())
    assert recorded_args() == ["--sync", "--full"]


def test_sync_failure_is_classified(fake_glf):
    script = fake_glf(stderr="Error: config not found", exit_code=1)
    client = GLFClient(Preferences(glf_path=str(script)))
    with pytest.raises(NotConfigured):
        asyncio.run(client.sync())


def test_missing_custom_binary(tmp_path):
    client = GLFClient(Preferences(glf_path=str(tmp_path / "nowhere" / "glf")))
    with pytest.raises(BinaryMissing):
        asyncio.run(client.search("x"))
