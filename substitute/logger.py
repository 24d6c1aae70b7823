import logging
from pathlib import Path


from .configs import configs


_LOG_FOLDER = Path(__file__).parent.resolve() / "logs"
_FORMAT = '%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s'


def _make_logger(level: int = logging.WARNING, log_folder: Path = _LOG_FOLDER) -> logging.Logger:
    """
    Package logger writing to `logs/substitute.log`.

    Dispatch traces are logged at DEBUG, verification failures at INFO and
    matcher errors at WARNING, so the default level only records matcher errors.
    """
    logger = logging.getLogger(__package__)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    log_folder.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_folder / "substitute.log", delay=True)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(file_handler)

    return logger


logger = _make_logger(configs.LOG_LEVEL)
