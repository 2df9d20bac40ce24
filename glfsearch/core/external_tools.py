import shutil
import logging
import os
from typing import List, Optional

logger = logging.getLogger(__name__)

BINARY_NAME = "glf"

# Default values of the path preference. Anything else is a user override.
KNOWN_DEFAULTS = ("/usr/local/bin/glf", "/opt/homebrew/bin/glf")

COMMON_PATHS: List[str] = [
    "/opt/homebrew/bin/glf",               # Apple Silicon
    "/usr/local/bin/glf",                  # Intel Mac
    "/home/linuxbrew/.linuxbrew/bin/glf",  # Linux Homebrew
]


class ExternalTools:
    """
    Resolves the glf executable.
    Logic:
    1. Explicit config override (any value other than the known defaults) wins.
    2. Check system PATH (shutil.which).
    3. Check well-known Homebrew prefixes in order.
    4. Fall back to the configured value so the invocation fails with a
       "binary not found" error instead of silently.
    Nothing is cached; every call probes again.
    """

    @staticmethod
    def resolve(configured_path: Optional[str]) -> Optional[str]:
        if configured_path and configured_path not in KNOWN_DEFAULTS:
            return configured_path

        detected = ExternalTools._which(BINARY_NAME)
        if detected:
            logger.debug(f"glf found on PATH: {detected}")
            return detected

        for candidate in COMMON_PATHS:
            if os.path.isfile(candidate):
                logger.debug(f"glf found at common path: {candidate}")
                return candidate

        logger.debug(f"glf not detected, using configured path: {configured_path}")
        return configured_path

    @staticmethod
    def check_binaries(configured_path: Optional[str]) -> dict:
        """
        Status summary for the runtime check and the status page.
        """
        resolved = ExternalTools.resolve(configured_path)
        found = bool(resolved) and os.path.isfile(resolved)
        if not found:
            logger.warning(f"glf binary not found (configured: {configured_path}, resolved: {resolved})")
        return {
            "configured": configured_path,
            "resolved": resolved,
            "found": found,
        }

    @staticmethod
    def _which(name: str) -> Optional[str]:
        try:
            path = shutil.which(name)
        except OSError as e:
            logger.debug(f"which {name} failed: {e}")
            return None
        return path.strip() if path else None
