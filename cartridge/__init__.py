# Copyright (C) 2025-2026 Cartridge Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""Cartridge: a fullscreen Ryujinx game launcher."""

__version__ = "1.2.0"
