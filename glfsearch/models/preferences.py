import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_GLF_PATH = "/usr/local/bin/glf"
DEFAULT_MAX_RESULTS = 20
DEFAULT_SYNC_INTERVAL = "60"
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_DEBOUNCE_MS = 50

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(value: Any) -> Optional[int]:
    """
    Reads the leading integer of a numeric preference, so "20", 20, " 60 ",
    "1.5" and "15m" give 20, 20, 60, 1 and 15. None when there is none.
    """
    if value is None or isinstance(value, bool):
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def parse_positive_int(value: Any) -> Optional[int]:
    """Like parse_int, but zero and negative values are None too."""
    number = parse_int(value)
    return number if number is not None and number > 0 else None


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def _timeout(value: Any) -> Optional[float]:
    # 0 disables the timeout; anything unusable keeps the default
    if value is None or isinstance(value, bool):
        return DEFAULT_TIMEOUT_SECONDS
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT_SECONDS
    if seconds == 0:
        return None
    return seconds if seconds > 0 else DEFAULT_TIMEOUT_SECONDS


def _debounce(value: Any) -> int:
    number = parse_int(value)
    return number if number is not None and number >= 0 else DEFAULT_DEBOUNCE_MS


@dataclass(frozen=True)
class Preferences:
    glf_path: str = DEFAULT_GLF_PATH
    show_scores: bool = False
    max_results: str = str(DEFAULT_MAX_RESULTS)
    auto_sync_interval: str = DEFAULT_SYNC_INTERVAL
    timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS
    debounce_ms: int = DEFAULT_DEBOUNCE_MS

    @property
    def limit(self) -> int:
        return parse_positive_int(self.max_results) or DEFAULT_MAX_RESULTS

    @property
    def sync_interval_minutes(self) -> Optional[int]:
        # None means background sync is disabled
        return parse_positive_int(self.auto_sync_interval)

    @classmethod
    def from_config(cls, data: Dict[str, Any]) -> "Preferences":
        """
        Builds preferences from the loaded config `data` section.
        Missing or unusable values fall back to defaults, so a config that
        failed validation still yields working preferences.
        """
        glf = _section(data, "glf")
        search = _section(data, "search")

        path = glf.get("path")
        show_scores = glf.get("show_scores", False)

        return cls(
            glf_path=path if isinstance(path, str) and path else DEFAULT_GLF_PATH,
            show_scores=show_scores if isinstance(show_scores, bool) else False,
            max_results=str(glf.get("max_results", DEFAULT_MAX_RESULTS)),
            auto_sync_interval=str(glf.get("auto_sync_interval", DEFAULT_SYNC_INTERVAL)),
            timeout_seconds=_timeout(glf.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
            debounce_ms=_debounce(search.get("debounce_ms", DEFAULT_DEBOUNCE_MS)),
        )
