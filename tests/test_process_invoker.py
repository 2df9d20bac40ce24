import asyncio
import json
import sys
import time
import logging
import pytest

from glfsearch.core.errors import (
    BinaryMissing,
    CacheEmpty,
    DomainError,
    ExecutionFailed,
    NotConfigured,
    TimedOut,
)
from glfsearch.core.process_invoker import (
    ProcessInvoker,
    ProcessOutput,
    build_search_args,
    build_sync_args,
    check_sync_output,
    classify_failure,
    decode_search_output,
)
from conftest import search_payload

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake glf is a shell script")


# --- Error translation ---

@pytest.mark.parametrize("message,kind", [
    ("Error: no projects in cache", CacheEmpty),
    ("config not found: ~/.config/glf/config.yaml", NotConfigured),
    ("spawn glf ENOENT", BinaryMissing),
    ("sh: glf: command not found", BinaryMissing),
    ("[Errno 2] No such file or directory: 'glf'", BinaryMissing),
    ("segmentation fault", ExecutionFailed),
])
def test_classify_failure(message, kind):
    assert isinstance(classify_failure(message, "/opt/homebrew/bin/glf"), kind)


def test_config_not_found_is_not_a_missing_binary():
    err = classify_failure("config not found", "/usr/local/bin/glf")
    assert isinstance(err, NotConfigured)
    assert "glf --init" in err.message


def test_binary_missing_message_names_path_and_install_hint():
    err = classify_failure("command not found", "/custom/glf")
    assert "/custom/glf" in err.message
    assert "brew install igusev/tap/glf" in err.message


def test_execution_failed_prefix_depends_on_operation():
    assert classify_failure("boom", None, "search").message == "GLF execution failed: boom"
    assert classify_failure("boom", None, "sync").message == "GLF sync failed: boom"


# --- Arguments ---

def test_build_search_args():
    assert build_search_args("", 20) == ["--json", "--limit", "20"]
    assert build_search_args("   ", 5, include_scores=True) == ["--json", "--limit", "5", "--scores"]
    assert build_search_args("acme  api", 20) == ["--json", "--limit", "20", "acme", "api"]


def test_build_sync_args():
    assert build_sync_args() == ["--sync", "--full"]


# --- Decoding ---

def test_decode_success_envelope_keeps_order():
    payload = search_payload("api", [
        {"path": "g/zeta", "name": "zeta", "description": "", "url": "u1",
         "starred": True, "excluded": False, "archived": False, "member": True, "score": 9.5},
        {"path": "g/alpha", "name": "alpha", "description": "", "url": "u2",
         "starred": False, "excluded": False, "archived": True, "member": True},
    ], total=7)
    result = decode_search_output(ProcessOutput(0, payload, ""), "glf")

    assert result.query == "api"
    assert [p.path for p in result.results] == ["g/zeta", "g/alpha"]
    assert result.total == 7
    assert result.limit == 20
    assert result.results[0].score == 9.5
    assert result.results[1].score is None
    assert result.results[1].archived is True


def test_decode_error_envelope_is_domain_error():
    out = ProcessOutput(0, json.dumps({"error": "index is corrupted"}), "")
    with pytest.raises(DomainError) as exc:
        decode_search_output(out, "glf")
    assert exc.value.message == "index is corrupted"


def test_decode_error_envelope_with_known_wording():
    out = ProcessOutput(1, json.dumps({"error": "no projects in cache"}), "")
    with pytest.raises(CacheEmpty):
        decode_search_output(out, "glf")


def test_decode_nonzero_exit_unparsable_stdout():
    out = ProcessOutput(2, "panic!", "something exploded")
    with pytest.raises(ExecutionFailed) as exc:
        decode_search_output(out, "glf")
    assert "something exploded" in exc.value.message


def test_decode_zero_exit_unparsable_stdout():
    with pytest.raises(ExecutionFailed):
        decode_search_output(ProcessOutput(0, "not json", ""), "glf")


@pytest.mark.parametrize("envelope", [
    {"query": "x", "results": [], "total": None, "limit": 20},
    {"query": "x", "results": [], "total": 0, "limit": "many"},
    {"query": "x", "results": [{"name": "no path"}], "total": 1, "limit": 20},
])
def test_decode_malformed_envelope(envelope):
    with pytest.raises(ExecutionFailed) as exc:
        decode_search_output(ProcessOutput(0, json.dumps(envelope), ""), "glf")
    assert "malformed result from glf" in exc.value.message


def test_check_sync_output():
    check_sync_output(ProcessOutput(0, "Synced 42 projects", ""), "glf")
    with pytest.raises(NotConfigured):
        check_sync_output(ProcessOutput(1, "", "config not found"), "glf")
    with pytest.raises(ExecutionFailed) as exc:
        check_sync_output(ProcessOutput(3, "", ""), "glf")
    assert exc.value.message == "GLF sync failed: exit status 3"


# --- Real child processes ---

@posix_only
def test_invoke_captures_output(fake_glf, recorded_args):
    script = fake_glf(stdout=search_payload("x"))
    out = asyncio.run(ProcessInvoker().invoke(str(script), ["--json", "--limit", "20", "x"]))
    assert out.returncode == 0
    assert json.loads(out.stdout)["query"] == "x"
    assert recorded_args() == ["--json", "--limit", "20", "x"]


@posix_only
def test_stderr_alone_is_not_fatal(fake_glf, caplog):
    script = fake_glf(stdout=search_payload("x"), stderr="warning: cache is 3 days old")
    with caplog.at_level(logging.WARNING):
        out = asyncio.run(ProcessInvoker().invoke(str(script), []))
    result = decode_search_output(out, str(script))
    assert result.query == "x"
    assert "cache is 3 days old" in caplog.text


def test_invoke_missing_binary(tmp_path):
    missing = str(tmp_path / "does-not-exist" / "glf")
    with pytest.raises(BinaryMissing) as exc:
        asyncio.run(ProcessInvoker().invoke(missing, ["--json"]))
    assert missing in exc.value.message


@posix_only
def test_invoke_times_out(fake_glf):
    script = fake_glf(sleep=5)
    start = time.monotonic()
    with pytest.raises(TimedOut):
        asyncio.run(ProcessInvoker(timeout=0.3).invoke(str(script), []))
    assert time.monotonic() - start < 4


@posix_only
def test_cancel_kills_process(fake_glf):
    script = fake_glf(sleep=5)

    async def scenario():
        task = asyncio.ensure_future(ProcessInvoker(timeout=None).invoke(str(script), []))
        await asyncio.sleep(0.2)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    start = time.monotonic()
    asyncio.run(scenario())
    assert time.monotonic() - start < 4
