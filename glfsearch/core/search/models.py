from dataclasses import dataclass, field
from typing import Optional, Tuple

from glfsearch.models.projects import Project, SearchResult


@dataclass(frozen=True)
class SearchRequest:
    """
    A query bound to its generation. Only the request carrying the
    controller's current generation may publish its outcome.
    """
    query: str
    generation: int
    limit: int = 20
    include_scores: bool = False


@dataclass(frozen=True)
class SearchView:
    """
    Snapshot of what the list UI shows. Replaced as a whole on every change.
    """
    search_text: str = ""
    projects: Tuple[Project, ...] = field(default_factory=tuple)
    result: Optional[SearchResult] = None
    is_loading: bool = False
    is_initial_load: bool = True
    error: Optional[str] = None
    show_hidden: bool = False
