from typing import Dict, Any, List
import logging

from glfsearch.models.preferences import parse_positive_int

logger = logging.getLogger(__name__)


class ConfigValidator:
    """
    Validates configuration structure and types.
    Numeric preferences may be strings ("20"); an unparsable sync interval
    is not an error, it disables background sync.
    """

    @staticmethod
    def validate(config: Dict[str, Any]) -> List[str]:
        errors = []

        # 1. Top-Level Sections
        if "glf" not in config:
            errors.append("Missing required section: 'glf'")

        # 2. glf section
        glf = config.get("glf", {})
        if not isinstance(glf, dict):
            errors.append("'glf' must be a dictionary")
        else:
            if "path" in glf and not isinstance(glf["path"], str):
                errors.append(f"Field 'glf.path' must be a string, got {type(glf['path']).__name__}")

            ConfigValidator._check_bool(glf, "show_scores", errors)
            ConfigValidator._check_numeric(glf, "max_results", errors)
            ConfigValidator._check_numeric(glf, "auto_sync_interval", errors)

            if "max_results" in glf and isinstance(glf["max_results"], (str, int)):
                if not ConfigValidator._is_positive_int(glf["max_results"]):
                    logger.warning(f"'glf.max_results' is not a positive integer ({glf['max_results']!r}), default limit is used")

            timeout = glf.get("timeout_seconds")
            if timeout is not None:
                if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
                    errors.append(f"Field 'timeout_seconds' must be a number, got {type(timeout).__name__}")
                elif timeout < 0:
                    errors.append("Field 'timeout_seconds' must not be negative")

        # 3. search section (optional)
        search = config.get("search", {})
        if not isinstance(search, dict):
            errors.append("'search' must be a dictionary")
        elif "debounce_ms" in search:
            val = search["debounce_ms"]
            if isinstance(val, bool) or not isinstance(val, int) or val < 0:
                errors.append("Field 'debounce_ms' must be a non-negative integer")

        # 4. Logging of Results
        if errors:
            logger.error(f"Config Validation Failed: {errors}")
        else:
            logger.info("Config OK: glf=%s", glf)

        return errors

    @staticmethod
    def _check_bool(section: dict, key: str, errors: list):
        if key in section and not isinstance(section[key], bool):
            errors.append(f"Field '{key}' must be boolean, got {type(section[key]).__name__}")

    @staticmethod
    def _check_numeric(section: dict, key: str, errors: list):
        if key in section:
            val = section[key]
            if isinstance(val, bool) or not isinstance(val, (str, int)):
                errors.append(f"Field '{key}' must be a numeric string or integer, got {type(val).__name__}")

    @staticmethod
    def _is_positive_int(value) -> bool:
        return parse_positive_int(value) is not None
