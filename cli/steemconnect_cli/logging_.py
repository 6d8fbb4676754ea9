from __future__ import annotations

import logging

SDK_LOGGER = "steemconnect"
# httpx logs every request at INFO
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    logging.getLogger(SDK_LOGGER).setLevel(level)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(level)
