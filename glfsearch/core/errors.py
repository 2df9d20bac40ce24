from typing import Optional

INSTALL_HINT = "Installation: brew install igusev/tap/glf"


class GLFError(Exception):
    """
    Base class for failures of a single glf operation.
    `message` is the user-facing text shown in the error view and toasts.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BinaryMissing(GLFError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"GLF binary not found at: {path}\n\n"
            "Please install GLF or update the binary path in preferences.\n"
            + INSTALL_HINT
        )


class CacheEmpty(GLFError):
    def __init__(self):
        super().__init__("No projects in cache. Run 'glf sync' first to fetch projects from GitLab.")


class NotConfigured(GLFError):
    def __init__(self):
        super().__init__("GLF not configured. Run 'glf --init' to configure GitLab connection.")


class ExecutionFailed(GLFError):
    def __init__(self, raw_message: str, operation: str = "search"):
        self.raw_message = raw_message
        self.operation = operation
        prefix = "GLF sync failed" if operation == "sync" else "GLF execution failed"
        super().__init__(f"{prefix}: {raw_message}")


class DomainError(GLFError):
    """The `error` field reported by glf itself."""


class TimedOut(GLFError):
    def __init__(self, timeout: Optional[float], operation: str = "search"):
        self.timeout = timeout
        self.operation = operation
        super().__init__(f"GLF {operation} timed out after {timeout:g}s")
