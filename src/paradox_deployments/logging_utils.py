"""Logging helpers for paradox-deployments library."""

import logging


def configure_logging(level: int = logging.INFO) -> None:
    """Configure default logging, or only set the level if handlers are present."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler()],
    )
