import logging

LOGGER_NAME = 'artifact_deckcode'

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def setup_logger(debug=False):
    """Sends package logs to the console. Applications with their own logging config don't need this."""
    if debug:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        consoleout = logging.StreamHandler()
        consoleout.setFormatter(logging.Formatter('%(asctime)s %(name)s %(levelname)s: %(message)s'))
        logger.addHandler(consoleout)

    return logger
