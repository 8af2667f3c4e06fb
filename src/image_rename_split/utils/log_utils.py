import logging
from rich.logging import RichHandler


def configure_logging(level: int = logging.INFO, enable_rich: bool = True) -> None:
    """
    Configure the root logger, through a RichHandler unless `enable_rich` is False.
    """
    if enable_rich:
        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True)]
        )
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger (after logging is configured).
    """
    return logging.getLogger(name)
