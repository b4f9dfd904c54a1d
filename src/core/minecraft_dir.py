"""Best-effort lookup of the game's `mods` folder.

The result is a convenience for `download --mcdir`, never a guarantee: the
caller falls back to another directory when nothing is found.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Mapping

log = logging.getLogger(__name__)


def default_minecraft_dir(
    *,
    platform: str | None = None,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Standard launcher installation directory, or `None` on unknown platforms."""

    platform = platform if platform is not None else sys.platform
    home = home if home is not None else Path.home()
    environ = environ if environ is not None else os.environ

    if platform.startswith("win"):
        appdata = environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / ".minecraft"
    if platform.startswith("linux"):
        return home / ".minecraft"
    if platform == "darwin":
        return home / "Library" / "Application Support" / "minecraft"
    return None


def locate_mods_dir(
    minecraft_dir: Path | None = None,
    *,
    platform: str | None = None,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Return `<minecraft_dir>/mods`, creating it when missing.

    `minecraft_dir` overrides platform detection. Returns `None` when the
    installation directory does not exist or `mods` cannot be created.
    """

    root = minecraft_dir or default_minecraft_dir(platform=platform, home=home, environ=environ)
    if root is None:
        log.debug("No known Minecraft directory for this platform")
        return None

    root = root.expanduser()
    if not root.is_dir():
        log.debug("Minecraft directory %s does not exist", root)
        return None

    mods = root / "mods"
    if not mods.is_dir():
        try:
            mods.mkdir()
        except OSError as exc:
            log.warning("Could not create %s: %s", mods, exc)
            return None
        log.info("Created %s", mods)
    return mods
