import logging
import os
import sys

_configured = False


def setup_logging() -> None:
    global _configured
    if _configured:
        return

    log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)

    # uvicorn/pytest могут уже повесить свои хендлеры
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        root.addHandler(handler)

    _configured = True


def get_logger(name: str = "shop_catalog") -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)


logger = get_logger()
