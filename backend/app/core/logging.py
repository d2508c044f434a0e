from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(debug: bool = False, level_name: str | None = None) -> None:
    if level_name:
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level '{level_name}'")
    else:
        level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    # Uvicorn may have installed handlers already; then only adjust levels.
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)

    root_logger.setLevel(level)
    logging.getLogger("backend").setLevel(level)
    # SQL echo is only useful while debugging queries.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if debug else logging.WARNING)
