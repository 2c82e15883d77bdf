import logging

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _logger(log_level: int) -> logging.Logger:
    logging.basicConfig(level=log_level, format="%(asctime)s - %(filename)s - %(lineno)d - %(levelname)s - %(message)s")
    return logging.getLogger("mulist")


def level_from_name(name: str) -> int:
    """Map a level name such as `debug` to its logging constant"""
    try:
        return LOG_LEVELS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name}") from None


def set_level(log_level: int, *, logger: logging.Logger) -> None:
    """Set level of the logger"""
    logger.setLevel(log_level)


logger = _logger(log_level=logging.INFO)
