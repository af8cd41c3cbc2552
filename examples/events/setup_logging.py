"""Shared logging configuration for examples."""

import logging


def setup_logging(level=logging.INFO):
    """Show hybrd logs, keep httpx/uvicorn quiet."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("hybrd").setLevel(level)
    for noisy in ("httpx", "httpcore", "uvicorn", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
