from typing import Optional

from loguru import logger

from pizzabasket.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# Id and level of the stdout sink installed by configure_logging
_sink_id: Optional[int] = None
_sink_level: Optional[str] = None


def configure_logging(level: Optional[str] = None) -> int:
    """Install the stdout sink at `level` (default: get_config().log_level).

    Loguru's default stderr sink is dropped on the first call only. Later
    calls replace our own sink when the level changed and are no-ops
    otherwise, so sinks added by the host application survive.
    """
    global _sink_id, _sink_level
    level = (level or get_config().log_level).upper()
    if _sink_id is not None and level == _sink_level:
        return _sink_id

    if _sink_id is None:
        logger.remove()
    else:
        logger.remove(_sink_id)
    _sink_id = logger.add(sink=lambda msg: print(msg, end=""), level=level, format=LOG_FORMAT)
    _sink_level = level
    return _sink_id


def get_logger(name: Optional[str] = None):
    """Get the application logger, bound to `name` when given."""
    configure_logging()
    if name:
        return logger.bind(name=name)
    return logger
