import logging


def setup_logging(level='INFO'):
    """Attach a console handler to the root logger, once."""
    logger = logging.getLogger()
    if logger.handlers:
        # create_app can run many times in one process (tests)
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    ))
    logger.addHandler(handler)
