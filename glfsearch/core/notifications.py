import logging
from dataclasses import dataclass
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)


class ToastStyle(Enum):
    ANIMATED = "animated"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(eq=False)
class Toast:
    style: ToastStyle
    title: str
    message: str = ""


class Notifier:
    """
    Collects toasts raised by the core. The UI drains them on its next
    render; the core never talks to the UI directly.
    A toast may be updated in place (progress -> success/failure).
    """

    def __init__(self):
        self._pending: List[Toast] = []
        self.history: List[Toast] = []

    def show(self, style: ToastStyle, title: str, message: str = "") -> Toast:
        toast = Toast(style=style, title=title, message=message)
        self._pending.append(toast)
        self.history.append(toast)
        return toast

    def update(self, toast: Toast, style: ToastStyle, title: str, message: str = "") -> Toast:
        toast.style = style
        toast.title = title
        toast.message = message
        if not any(t is toast for t in self._pending):
            self._pending.append(toast)
        return toast

    def drain(self) -> List[Toast]:
        pending, self._pending = self._pending, []
        return pending

    def count(self, style: ToastStyle) -> int:
        return sum(1 for t in self.history if t.style == style)
