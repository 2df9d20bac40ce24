from __future__ import annotations

import os
from pathlib import Path
from datetime import datetime

from glfsearch.core.external_tools import ExternalTools
from glfsearch.models.preferences import Preferences
from glfsearch.ui.config_loader import load_config


def main() -> int:
    repo_root = Path(__file__).resolve().parents[1]
    now = datetime.now().isoformat(timespec="seconds")
    config = load_config()
    prefs = Preferences.from_config(config.get("data", {}))
    binary = ExternalTools.check_binaries(prefs.glf_path)

    print("GLF Search :: runtime check")
    print(f"timestamp: {now}")
    print(f"repo_root: {repo_root}")
    print(f"cwd:       {Path.cwd()}")
    print(f"python:    {os.sys.version.split()[0]}")
    print(f"config:    {config['status']} ({config.get('config_path') or config.get('error')})")
    print(f"glf:       {binary['resolved']} ({'found' if binary['found'] else 'MISSING'})")
    print(f"sync:      {prefs.sync_interval_minutes or 'disabled'}")
    return 0 if binary["found"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
