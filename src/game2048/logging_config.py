"""
logging setup for the game
"""
import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level="INFO"):
    """configure a stdout handler; only the GUI entry point calls this"""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format=_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name):
    """module logger, name is usually __name__"""
    return logging.getLogger(name)
