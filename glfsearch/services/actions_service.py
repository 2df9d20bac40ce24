"""
Direct, synchronous result actions: copy to the system clipboard and open
in the browser. Run on the machine hosting the app.
"""
import sys
import logging
import subprocess
import webbrowser
from typing import List

logger = logging.getLogger(__name__)

CLIPBOARD_TIMEOUT = 5


def _clipboard_commands() -> List[List[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if sys.platform == "win32":
        return [["clip"]]
    return [
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
        ["wl-copy"],
    ]


def copy_to_clipboard(text: str) -> bool:
    """
    Copies text using the platform clipboard tool.
    Returns False if no tool is available or every attempt failed.
    """
    for cmd in _clipboard_commands():
        try:
            result = subprocess.run(
                cmd,
                input=text,
                capture_output=True,
                text=True,
                timeout=CLIPBOARD_TIMEOUT,
            )
        except FileNotFoundError:
            continue
        except (subprocess.TimeoutExpired, OSError) as e:
            logger.warning(f"Clipboard command {cmd[0]} failed: {e}")
            continue

        if result.returncode == 0:
            return True
        logger.warning(f"Clipboard command {cmd[0]} exited with {result.returncode}: {result.stderr.strip()}")

    logger.error("No working clipboard tool found (tried: %s)", [c[0] for c in _clipboard_commands()])
    return False


def open_url(url: str) -> bool:
    if not url:
        return False
    try:
        return webbrowser.open(url)
    except webbrowser.Error as e:
        logger.error(f"Cannot open {url}: {e}")
        return False
