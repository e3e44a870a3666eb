"""Exception hierarchy for Cartridge."""

from __future__ import annotations

from pathlib import Path


class CartridgeError(Exception):
    """Base class for every error raised by Cartridge itself."""


class ConfigError(CartridgeError):
    """The configuration document could not be read or written."""


class CatalogError(CartridgeError):
    """Building the game catalog failed."""


class LookupLoadError(CatalogError):
    """``games.json`` is missing, unreadable, or not a JSON object."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot load lookup file {self.path}: {reason}")
