from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Project:
    path: str  # unique key
    name: str
    description: str = ""
    url: str = ""
    starred: bool = False
    excluded: bool = False
    archived: bool = False
    member: bool = True
    # Only present when glf runs with --scores
    score: Optional[float] = None
    history_score: Optional[float] = None
    starred_bonus: Optional[float] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Project":
        return cls(
            path=str(raw["path"]),
            name=str(raw.get("name") or raw["path"]),
            description=raw.get("description") or "",
            url=raw.get("url") or "",
            starred=bool(raw.get("starred", False)),
            excluded=bool(raw.get("excluded", False)),
            archived=bool(raw.get("archived", False)),
            member=bool(raw.get("member", True)),
            score=_optional_float(raw.get("score")),
            history_score=_optional_float(raw.get("history_score")),
            starred_bonus=_optional_float(raw.get("starred_bonus")),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "path": self.path,
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "starred": self.starred,
            "excluded": self.excluded,
            "archived": self.archived,
            "member": self.member,
        }
        for key in ("score", "history_score", "starred_bonus"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class SearchResult:
    """
    One successful glf search. `results` keeps the relevance order
    assigned by glf.
    """
    query: str
    results: Tuple[Project, ...] = field(default_factory=tuple)
    total: int = 0
    limit: int = 0


@dataclass(frozen=True)
class VisualIdentity:
    color: str
    text_color: str
    initials: str


def format_score(score: float) -> str:
    return f"Score: {score:.1f}"
