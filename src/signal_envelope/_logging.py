"""Logger setup for signal_envelope.

The library never configures output itself. Enable it from the application:

    logging.getLogger("signal_envelope").setLevel(logging.DEBUG)
"""

import logging

LOGGER_NAME = "signal_envelope"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the signal_envelope hierarchy."""
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
