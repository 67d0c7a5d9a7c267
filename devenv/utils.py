import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def parse_log_level(name):
    """Map a level name such as 'debug' to its logging constant, defaulting to INFO."""
    return getattr(logging, str(name).upper(), logging.INFO)


def setup_logging(log_level=logging.INFO, log_file=None):
    """Configure the root logger once; later calls leave existing handlers alone."""
    logger = logging.getLogger()
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(log_level)
    return logger
