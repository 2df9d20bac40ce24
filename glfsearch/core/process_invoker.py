import asyncio
import json
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from glfsearch.core.errors import (
    BinaryMissing,
    CacheEmpty,
    DomainError,
    ExecutionFailed,
    GLFError,
    NotConfigured,
    TimedOut,
)
from glfsearch.models.projects import Project, SearchResult

logger = logging.getLogger(__name__)

BINARY_MISSING_MARKERS = ("enoent", "command not found", "no such file or directory")


@dataclass
class ProcessOutput:
    returncode: int
    stdout: str
    stderr: str


def classify_failure(message: str, glf_path: Optional[str], operation: str = "search") -> GLFError:
    """
    Maps a raw failure message from glf or the OS to an error kind.
    glf has no machine-readable error codes, so this matches on wording.
    Checked in order; the first matching kind wins.
    """
    lowered = (message or "").lower()
    if "no projects in cache" in lowered:
        return CacheEmpty()
    if "config not found" in lowered:
        return NotConfigured()
    if any(marker in lowered for marker in BINARY_MISSING_MARKERS):
        return BinaryMissing(glf_path or "")
    return ExecutionFailed(message, operation)


def build_search_args(query: str, limit: int, include_scores: bool = False) -> List[str]:
    args = ["--json", "--limit", str(limit)]
    if include_scores:
        args.append("--scores")
    # Blank query lists everything
    args.extend(query.split())
    return args


def build_sync_args() -> List[str]:
    return ["--sync", "--full"]


class ProcessInvoker:
    """
    Runs glf as a child process. Stateless; every call spawns exactly one
    process and nothing is retried.
    """

    def __init__(self, timeout: Optional[float] = 60.0):
        self.timeout = timeout or None

    async def invoke(self, executable: str, args: Sequence[str], operation: str = "search") -> ProcessOutput:
        try:
            proc = await asyncio.create_subprocess_exec(
                executable,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise BinaryMissing(executable) from e
        except OSError as e:
            raise classify_failure(str(e), executable, operation) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            await self._terminate(proc)
            logger.error(f"glf {operation} timed out after {self.timeout}s")
            raise TimedOut(self.timeout, operation)
        except asyncio.CancelledError:
            # Best effort only; a stale result is discarded by the caller anyway
            await self._terminate(proc)
            raise

        output = ProcessOutput(
            returncode=proc.returncode if proc.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
        if output.stderr.strip():
            # glf prints warnings on otherwise successful runs
            logger.warning(f"glf {operation} stderr: {output.stderr.strip()}")
        return output

    @staticmethod
    async def _terminate(proc) -> None:
        if proc.returncode is not None:
            return
        try:
            proc.kill()
        except ProcessLookupError:
            return
        try:
            await asyncio.wait_for(proc.wait(), timeout=1.0)
        except (asyncio.TimeoutError, asyncio.CancelledError):
            logger.debug("glf process did not exit after kill")


def decode_search_output(output: ProcessOutput, glf_path: Optional[str]) -> SearchResult:
    try:
        payload = json.loads(output.stdout)
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        if output.returncode != 0:
            raw = output.stderr.strip() or output.stdout.strip() or f"exit status {output.returncode}"
            raise classify_failure(raw, glf_path, "search")
        raise ExecutionFailed("invalid JSON output from glf", "search")

    if "error" in payload:
        message = str(payload["error"])
        error = classify_failure(message, glf_path, "search")
        if isinstance(error, ExecutionFailed):
            raise DomainError(message)
        raise error

    try:
        projects = tuple(Project.from_dict(item) for item in payload.get("results") or [])
        total = int(payload.get("total", len(projects)))
        limit = int(payload.get("limit", 0))
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ExecutionFailed(f"malformed result from glf: {e}", "search") from e

    return SearchResult(
        query=str(payload.get("query", "")),
        results=projects,
        total=total,
        limit=limit,
    )


def check_sync_output(output: ProcessOutput, glf_path: Optional[str]) -> None:
    if output.returncode == 0:
        logger.info(f"glf sync output: {output.stdout.strip()}")
        return
    raw = output.stderr.strip() or output.stdout.strip() or f"exit status {output.returncode}"
    raise classify_failure(raw, glf_path, "sync")
