# Copyright (C) 2025-2026 Cartridge Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""
Game catalog scanning for Cartridge.

A games folder is a flat directory of ``.xci`` / ``.nsp`` dumps with an
optional artwork tree next to them::

    <games_path>/
        games.json                  cleaned name -> {"id": "0100..."}
        Some Game [v0](USA).nsp
        media/                      cover art
        media/screenshottitle/      title screenshots
        media/background/           fullscreen backgrounds

:func:`build_catalog` turns that folder into a list of :class:`GameRecord`
objects in directory-listing order.  Artwork is matched by file-name prefix
against the cleaned game name; anything that cannot be found falls back to
the bundled default images.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from cartridge.core.errors import LookupLoadError

log = logging.getLogger(__name__)

_ASSETS_DIR = Path(__file__).resolve().parents[2] / "assets"

GAME_EXTENSIONS: frozenset[str] = frozenset({".xci", ".nsp"})
IMAGE_RE = re.compile(r"\.(jpg|jpeg|png)$", re.IGNORECASE)

LOOKUP_FILE = "games.json"
MEDIA_DIR = "media"
SCREENSHOT_DIR = "media/screenshottitle"
BACKGROUND_DIR = "media/background"

DEFAULT_COVER = str(_ASSETS_DIR / "default_card.png")
DEFAULT_SCREENSHOT = str(_ASSETS_DIR / "default_screenshot.png")
DEFAULT_BACKGROUND = str(_ASSETS_DIR / "default_background.png")

_SQUARE_TAG_RE = re.compile(r"\[.*?\]")
_ROUND_TAG_RE = re.compile(r"\(.*?\)")


@dataclass(frozen=True)
class GameRecord:
    """One launchable game found in the games folder."""
    name: str
    title_id: str | None
    extension: str
    cover: str
    screenshot: str
    background: str
    path: str

    @property
    def badge(self) -> str:
        """Label drawn on the cover, e.g. ``.XCI``."""
        return self.extension.upper()


# -- Names -------------------------------------------------------------------

def clean_game_name(name: str) -> str:
    """Strip ``[...]`` and ``(...)`` tags and surrounding whitespace.

    >>> clean_game_name("Game Title [1.0.0](USA)")
    'Game Title'
    """
    name = _SQUARE_TAG_RE.sub("", name)
    name = _ROUND_TAG_RE.sub("", name)
    return name.strip()


def is_game_file(filename: str) -> bool:
    if filename.lower() == MEDIA_DIR:
        return False
    return Path(filename).suffix.lower() in GAME_EXTENSIONS


# -- Lookup table --------------------------------------------------------------

def load_lookup(lookup_path: str | Path) -> dict[str, dict]:
    """Read the name -> identifier table.

    Raises :class:`LookupLoadError` when the file is missing, unreadable,
    not valid JSON, or does not hold a JSON object at the top level.
    """
    path = Path(lookup_path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LookupLoadError(path, exc.strerror or str(exc)) from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LookupLoadError(path, f"invalid JSON ({exc.msg}, line {exc.lineno})") from exc
    if not isinstance(data, dict):
        raise LookupLoadError(path, f"expected an object, got {type(data).__name__}")
    return data


def lookup_title_id(lookup: dict[str, dict], game_name: str) -> str | None:
    entry = lookup.get(game_name)
    if not isinstance(entry, dict):
        return None
    title_id = entry.get("id")
    return str(title_id) if title_id else None


# -- Artwork -------------------------------------------------------------------

def resolve_image(folder: str | Path, game_name: str, default: str) -> str:
    """Return the first image in *folder* whose name starts with *game_name*.

    Matching is case-insensitive and follows directory-listing order, so
    when several files share a prefix the first one listed wins.  A missing
    or unreadable folder yields *default*.
    """
    folder = Path(folder)
    prefix = game_name.lower()
    try:
        if not folder.is_dir():
            return default
        for filename in os.listdir(folder):
            if filename.lower().startswith(prefix) and IMAGE_RE.search(filename):
                return str(folder / filename)
    except OSError:
        log.warning("Error reading image directory %s", folder, exc_info=True)
    return default


def resolve_cover(games_path: str | Path, game_name: str) -> str:
    return resolve_image(Path(games_path) / MEDIA_DIR, game_name, DEFAULT_COVER)


def resolve_screenshot(games_path: str | Path, game_name: str) -> str:
    return resolve_image(Path(games_path) / SCREENSHOT_DIR, game_name, DEFAULT_SCREENSHOT)


def resolve_background(games_path: str | Path, game_name: str) -> str:
    return resolve_image(Path(games_path) / BACKGROUND_DIR, game_name, DEFAULT_BACKGROUND)


def list_media_images(games_path: str | Path) -> list[Path]:
    """Every cover image in ``media/``, used to warm the pixmap cache."""
    media = Path(games_path) / MEDIA_DIR
    try:
        if not media.is_dir():
            return []
        return [media / f for f in os.listdir(media) if IMAGE_RE.search(f)]
    except OSError:
        log.warning("Error listing cover images in %s", media, exc_info=True)
        return []


# -- Catalog -------------------------------------------------------------------

def make_record(games_path: Path, filename: str, lookup: dict[str, dict]) -> GameRecord:
    """Build the record for one game file inside *games_path*."""
    name = clean_game_name(Path(filename).stem)
    return GameRecord(
        name=name,
        title_id=lookup_title_id(lookup, name),
        extension=Path(filename).suffix.lower(),
        cover=resolve_cover(games_path, name),
        screenshot=resolve_screenshot(games_path, name),
        background=resolve_background(games_path, name),
        path=str(games_path / filename),
    )


def build_catalog(
    games_path: str | Path,
    lookup_path: str | Path | None = None,
) -> list[GameRecord]:
    """Scan *games_path* and return its games in directory-listing order.

    The lookup file defaults to ``<games_path>/games.json``.  If it cannot
    be loaded, or the games folder cannot be listed, the failure is logged
    and an empty catalog is returned.  No sorting or de-duplication is done.
    """
    games_path = Path(games_path)
    if lookup_path is None:
        lookup_path = games_path / LOOKUP_FILE

    try:
        lookup = load_lookup(lookup_path)
    except LookupLoadError as exc:
        log.error("%s", exc)
        return []

    try:
        entries = os.listdir(games_path)
    except OSError:
        log.error("Error reading games directory %s", games_path, exc_info=True)
        return []

    catalog: list[GameRecord] = []
    for filename in entries:
        if not is_game_file(filename):
            continue
        if (games_path / filename).is_dir():
            continue
        catalog.append(make_record(games_path, filename, lookup))

    log.info("Catalog built: %d game(s) in %s", len(catalog), games_path)
    return catalog
