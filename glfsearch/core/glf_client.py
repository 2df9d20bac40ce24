import logging
from typing import Optional

from glfsearch.core.external_tools import ExternalTools
from glfsearch.core.process_invoker import (
    ProcessInvoker,
    build_search_args,
    build_sync_args,
    check_sync_output,
    decode_search_output,
)
from glfsearch.models.preferences import Preferences
from glfsearch.models.projects import SearchResult

logger = logging.getLogger(__name__)


class GLFClient:
    """
    Search and sync entry points over the glf CLI.
    The binary is re-resolved on every call so a glf installed after
    startup is picked up.
    """

    def __init__(self, preferences: Preferences, invoker: Optional[ProcessInvoker] = None):
        self.preferences = preferences
        self.invoker = invoker or ProcessInvoker(timeout=preferences.timeout_seconds)

    def resolve_binary(self) -> str:
        return ExternalTools.resolve(self.preferences.glf_path) or self.preferences.glf_path

    async def search(self, query: str, limit: Optional[int] = None, include_scores: Optional[bool] = None) -> SearchResult:
        glf_path = self.resolve_binary()
        if limit is None:
            limit = self.preferences.limit
        if include_scores is None:
            include_scores = self.preferences.show_scores

        args = build_search_args(query, limit, include_scores)
        logger.debug(f"glf search: {glf_path} {' '.join(args)}")
        output = await self.invoker.invoke(glf_path, args, operation="search")
        return decode_search_output(output, glf_path)

    async def sync(self) -> None:
        glf_path = self.resolve_binary()
        output = await self.invoker.invoke(glf_path, build_sync_args(), operation="sync")
        check_sync_output(output, glf_path)
