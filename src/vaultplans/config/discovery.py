"""Locate the vaultplans.toml that describes which vault to talk to.

The file carries the REST API connection (``[api]``), the managed folder
names (``[plans]``) and the sweep threshold. It is looked up from the working
directory towards the filesystem root, so running ``vaultplans`` anywhere
inside a project picks up that project's vault. ``VAULTPLANS_CONFIG`` pins a
file explicitly; ``--config`` bypasses discovery altogether.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "vaultplans.toml"
CONFIG_ENV_VAR = "VAULTPLANS_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Nearest vaultplans.toml at or above *start* (default: cwd).

    A ``VAULTPLANS_CONFIG`` pointing at a missing file yields None; the
    walk-up is not attempted in that case.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
