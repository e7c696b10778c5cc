"""
Logging setup for entrypoints (the CLI, scripts).

Library code never configures logging: the client logs through the logger it was given,
and `configure_logging()` is only called by programs that own the process.
"""

from __future__ import annotations

import copy
import logging.config

from ubersmith.config.settings import Settings, get_logging_config, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the packaged `logging.yaml`, with root and handler levels set from `app.log_level`."""
    settings = settings or get_settings()
    level = settings.app.log_level.upper()

    config = copy.deepcopy(get_logging_config())
    config["root"] = {**config.get("root", {}), "level": level}
    for handler in config.get("handlers", {}).values():
        handler["level"] = level

    logging.config.dictConfig(config)
