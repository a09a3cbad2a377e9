import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Library code logs through this; nothing is emitted until configure_logging() runs
logger = logging.getLogger("astargrid")
logger.addHandler(logging.NullHandler())


def configure_logging(level="INFO", filename=None):
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        filename=filename,
        filemode="w",
        level=level,
        format=LOG_FORMAT,
    )
    logger.setLevel(level)
    return logger
