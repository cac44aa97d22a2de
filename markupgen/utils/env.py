"""Load ``MARKUPGEN_*`` defaults from a dotenv file."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DOTENV_VARIABLE = "MARKUPGEN_DOTENV"

_loaded_from: Optional[str] = None


def load_env(*, dotenv_path: Optional[str | Path] = None) -> Optional[str]:
    """Load defaults once and return the file they came from, if any.

    The file is *dotenv_path*, else ``$MARKUPGEN_DOTENV``, else the nearest
    ``.env`` above the working directory. Values already in the process
    environment are never overridden.
    """

    global _loaded_from
    if _loaded_from is not None:
        return _loaded_from or None

    candidate = dotenv_path or os.getenv(DOTENV_VARIABLE) or find_dotenv(usecwd=True)
    if candidate and Path(candidate).is_file():
        load_dotenv(dotenv_path=candidate, override=False)
        _loaded_from = str(candidate)
    else:
        _loaded_from = ""
    return _loaded_from or None


__all__ = ["DOTENV_VARIABLE", "load_env"]
