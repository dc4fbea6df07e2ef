# wish_merchant/utils/logging.py
import logging
import os
import colorlog
from colorlog.escape_codes import parse_colors

LEVEL_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'bold_red',
}

SESSION_COLORS = {
    "[sandbox]": "purple",
    "[prod]": "blue",
}

class SessionColorFilter(logging.Filter):
    """Pick the message colour from the session prefix found in the message.

    ColoredFormatter always derives ``log_color`` from the level, so the
    session colour goes into its own ``session_color`` field. Errors keep
    their level colour.
    """
    def filter(self, record):
        record.session_color = ""
        if record.levelno >= logging.ERROR or "NO_COLOR" in os.environ:
            return True
        message = str(record.msg)
        for prefix, color in SESSION_COLORS.items():
            if prefix in message:
                record.session_color = parse_colors(color)
                break
        return True

def setup_logging(name: str = "wish_merchant", level: int = logging.INFO) -> logging.Logger:
    """Configure colored logging for the SDK.

    Args:
        name (str): Logger name.
        level (int): Initial logging level.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        handler = colorlog.StreamHandler()
        handler.setFormatter(colorlog.ColoredFormatter(
            '%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(session_color)s%(message)s',
            log_colors=LEVEL_COLORS
        ))
        handler.addFilter(SessionColorFilter())
        logger.addHandler(handler)
    return logger

logger = setup_logging()
