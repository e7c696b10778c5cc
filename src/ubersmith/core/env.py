"""Loading API credentials from a `.env` file.

`UBERSMITH_ENV_FILE` names the file explicitly; otherwise the nearest `.env` at or
above the current working directory is used. Values already present in the process
environment are never overridden.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load the `.env` file once; returns its path, or None when there is none."""
    explicit = os.getenv("UBERSMITH_ENV_FILE")
    if explicit:
        env_path = Path(explicit).expanduser()
        if not env_path.is_file():
            return None
    else:
        found = find_dotenv(usecwd=True)
        if not found:
            return None
        env_path = Path(found)

    load_dotenv(dotenv_path=env_path, override=False)
    return env_path
