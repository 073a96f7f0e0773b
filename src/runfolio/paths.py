from __future__ import annotations

from pathlib import Path

import runfolio


def app_root() -> Path:
    """
    Return the checkout root (the directory holding `src/`).

    Derived from the installed package location so asset lookups stay correct from any
    subpackage.
    """

    return Path(runfolio.__file__).resolve().parents[2]


def assets_dir(override: str | None = None) -> Path:
    if override:
        return Path(override).expanduser().resolve()
    return app_root() / "assets"
