from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from glfsearch.core.errors import GLFError
from glfsearch.core.glf_client import GLFClient
from glfsearch.core.identity import render_identity
from glfsearch.core.search.controller import SearchController
from glfsearch.core.search.filters import filter_projects, is_hidden
from glfsearch.models.preferences import Preferences
from glfsearch.models.projects import format_score
from glfsearch.services import actions_service
from glfsearch.ui.config_loader import load_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="glfsearch", description="Search and sync cached GitLab projects via glf.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    parser.add_argument("--glf-path", help="Override the glf binary path.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Search projects.")
    p_search.add_argument("query", nargs="*", help="Free-text query (empty lists all).")
    p_search.add_argument("--limit", help="Maximum results.")
    p_search.add_argument("--scores", action="store_true", help="Show relevance scores.")
    p_search.add_argument("--show-hidden", action="store_true", help="Include archived, excluded and guest projects.")

    p_open = sub.add_parser("open", help="Open the best match in the browser.")
    p_open.add_argument("query", nargs="+", help="Free-text query.")
    p_open.add_argument("--show-hidden", action="store_true", help="Include archived, excluded and guest projects.")

    sub.add_parser("sync", help="Run a full sync now.")
    return parser


def _preferences(args) -> Preferences:
    config = load_config()
    if config["status"] == "ERROR":
        logging.getLogger(__name__).warning(f"Config: {config['error']}")
    prefs = Preferences.from_config(config.get("data", {}))
    overrides = {}
    if args.glf_path:
        overrides["glf_path"] = args.glf_path
    if getattr(args, "limit", None):
        overrides["max_results"] = args.limit
    if getattr(args, "scores", False):
        overrides["show_scores"] = True
    if overrides:
        prefs = replace(prefs, **overrides)
    return prefs


async def _search(prefs: Preferences, query: str, show_hidden: bool) -> int:
    controller = SearchController(GLFClient(prefs), prefs, debounce_seconds=0)
    await controller.perform_search(query)
    view = controller.view
    if view.error:
        print(view.error, file=sys.stderr)
        return 1

    for project in filter_projects(view.projects, show_hidden):
        identity = render_identity(project.name, is_hidden(project))
        line = f"[{identity.initials:>2}] {project.name:<30} {project.path}"
        if prefs.show_scores and project.score is not None:
            line += f"  ({format_score(project.score)})"
        if project.starred:
            line = "* " + line
        else:
            line = "  " + line
        print(line)
    return 0


async def _open(prefs: Preferences, query: str, show_hidden: bool) -> int:
    controller = SearchController(GLFClient(prefs), prefs, debounce_seconds=0)
    await controller.perform_search(query)
    view = controller.view
    if view.error:
        print(view.error, file=sys.stderr)
        return 1

    projects = filter_projects(view.projects, show_hidden)
    if not projects:
        print(f'No projects matching "{query}"', file=sys.stderr)
        return 1
    best = projects[0]
    print(best.url)
    return 0 if actions_service.open_url(best.url) else 1


async def _sync(prefs: Preferences) -> int:
    try:
        await GLFClient(prefs).sync()
    except GLFError as e:
        print(f"Sync failed: {e.message}", file=sys.stderr)
        return 1
    print("Sync complete")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    prefs = _preferences(args)

    if args.command == "sync":
        return asyncio.run(_sync(prefs))
    if args.command == "open":
        return asyncio.run(_open(prefs, " ".join(args.query), args.show_hidden))
    return asyncio.run(_search(prefs, " ".join(args.query), args.show_hidden))


if __name__ == "__main__":
    raise SystemExit(main())
