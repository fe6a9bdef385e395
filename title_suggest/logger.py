import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger


class InterceptHandler(logging.Handler):
    """Forwards standard-library records (uvicorn, httpx) into loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logger(
    level: str = "INFO",
    log_dir: str | None = None,
    rotation: str = "10 MB",
    retention: str = "10 days",
) -> Any:
    """
    Configures loguru with a console sink and, if log_dir is given, rotating files.

    Args:
        level (str): Minimum level for the console sink.
        log_dir (str | None): Directory for file sinks; console only when None.
        rotation (str): File size or time to rotate logs (e.g. "10 MB", "1 day").
        retention (str): How long to keep rotated logs.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=level,
    )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "title_suggest.log",
            rotation=rotation,
            retention=retention,
            level="DEBUG",
            compression="zip",
        )
        logger.add(
            log_path / "title_suggest.json.log",
            rotation=rotation,
            retention=retention,
            level="INFO",
            serialize=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = [InterceptHandler()]

    logger.debug(f"Logger initialized at level {level}" + (f", files in {log_dir}" if log_dir else ""))
    return logger
