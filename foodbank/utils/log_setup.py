import logging

from foodbank.config import LOG_LEVEL


def setup_logging() -> None:
    """Configures the root logger once for the API and the scheduler."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    for uv_logger in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(uv_logger).setLevel(LOG_LEVEL)
