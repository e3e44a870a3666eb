# Copyright (C) 2025-2026 Cartridge Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

import sys
from pathlib import Path

_CACHE_DIR = Path(__file__).resolve().parent / "cache"


def main():
    from cartridge.core.diagnostics import CrashLogger, configure_logging

    crash_logger = CrashLogger(_CACHE_DIR)
    crash_logger.install()

    from cartridge.core.config import Config, config_path

    config_file = config_path()
    config = Config.load(config_file)
    crash_logger.attach(config, config_file)
    configure_logging(config, _CACHE_DIR)

    from cartridge.app import CartridgeApp
    app = CartridgeApp(sys.argv, config)
    sys.exit(app.run())


if __name__ == "__main__":
    main()
