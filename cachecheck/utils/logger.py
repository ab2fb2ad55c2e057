import logging
import sys
from typing import Optional

def setup_logger(verbose: bool = False, quiet: bool = False, log_level: Optional[str] = None):
    """
    Configure the logger based on verbosity flags.
    An explicit log level wins over -v / -q.
    """
    logger = logging.getLogger("cachecheck")
    for old in list(logger.handlers):
        logger.removeHandler(old)
    # stderr keeps --json output on stdout clean
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_level:
        level = getattr(logging, log_level.upper(), None)
        if not isinstance(level, int):
            logger.setLevel(logging.INFO)
            logger.warning(f"Unknown log level '{log_level}', falling back to INFO")
            return logger
        logger.setLevel(level)
    elif quiet:
        logger.setLevel(logging.WARNING)
    elif verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)
    
    return logger

logger = logging.getLogger("cachecheck")
