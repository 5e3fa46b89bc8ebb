import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

PACKAGE_LOGGER = "resultsync"

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
# запросы уходят из пула потоков, в файле полезно видеть, из какого
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"

# библиотеки, которые на INFO/DEBUG пишут по строке на каждый запрос или кадр
CHATTY_LOGGERS = ("urllib3", "flet", "flet_core")


def _drop_handlers(logger: logging.Logger) -> None:
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()


def quiet_libraries(debug: bool = False, names: tuple[str, ...] = CHATTY_LOGGERS) -> None:
    """Keep transport and UI framework loggers at WARNING unless debugging."""
    for name in names:
        logging.getLogger(name).setLevel(logging.NOTSET if debug else logging.WARNING)


def setup_logging(  # noqa: PLR0913
    *,
    enabled: bool = True,
    debug: bool = False,
    logger_name: str = PACKAGE_LOGGER,
    file_path: str | None = "logs/results.log",
    max_bytes: int = 500_000,
    backups: int = 3,
) -> logging.Logger:
    """
    Configure the package logger for the results screen.

    enabled=False keeps only a NullHandler (WARNING, or DEBUG with debug=True).
    Otherwise logs go to the console and, when file_path is set, to a rotating
    file that also records the worker thread name. Handlers from a previous call
    are closed, so calling this again (tests, hot reload) never leaks file handles.
    """
    logger = logging.getLogger(logger_name)
    _drop_handlers(logger)
    quiet_libraries(debug)

    if not enabled:
        logger.setLevel(logging.DEBUG if debug else logging.WARNING)
        logger.addHandler(logging.NullHandler())
        return logger

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(file_path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
        rotating.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(rotating)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Child of the package logger, e.g. get_logger("orchestrator") -> 'resultsync.orchestrator'."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}" if name else PACKAGE_LOGGER)
