import json
import stat
import pytest
from pathlib import Path
from typing import Optional

from glfsearch.models.projects import Project, SearchResult


def make_project(path: str, **overrides) -> Project:
    fields = {
        "path": path,
        "name": path.split("/")[-1],
        "description": f"{path} description",
        "url": f"https://gitlab.example.com/{path}",
        "starred": False,
        "excluded": False,
        "archived": False,
        "member": True,
    }
    fields.update(overrides)
    return Project(**fields)


def make_result(query: str, *paths: str) -> SearchResult:
    projects = tuple(make_project(p) for p in paths)
    return SearchResult(query=query, results=projects, total=len(projects), limit=20)


@pytest.fixture
def fake_glf(tmp_path):
    """
    Writes an executable shell script standing in for glf.
    The script records its arguments to args.txt next to it.
    """
    def _write(stdout: str = "", stderr: str = "", exit_code: int = 0, sleep: Optional[float] = None) -> Path:
        script = tmp_path / "glf"
        args_file = tmp_path / "args.txt"
        lines = ["#!/bin/sh", f'printf "%s\\n" "$@" > "{args_file}"']
        if sleep:
            # exec so that killing the process also ends the sleep
            lines.append(f"exec sleep {sleep}")
        if stderr:
            lines.append(f"cat >&2 <<'GLF_STDERR'\n{stderr}\nGLF_STDERR")
        if stdout:
            lines.append(f"cat <<'GLF_STDOUT'\n{stdout}\nGLF_STDOUT")
        lines.append(f"exit {exit_code}")
        script.write_text("\n".join(lines) + "\n")
        script.chmod(script.stat().st_mode | stat.S_IEXEC | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _write


@pytest.fixture
def recorded_args(tmp_path):
    def _read():
        args_file = tmp_path / "args.txt"
        if not args_file.exists():
            return None
        return [line for line in args_file.read_text().split("\n") if line]

    return _read


def search_payload(query: str = "", projects=None, total=None, limit: int = 20) -> str:
    projects = projects or []
    return json.dumps({
        "query": query,
        "results": projects,
        "total": len(projects) if total is None else total,
        "limit": limit,
    })
