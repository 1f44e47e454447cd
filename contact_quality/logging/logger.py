import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class Log:
    """Process-wide logging facade for the contact quality checker."""

    _logger: logging.Logger = logging.getLogger("contact_quality")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler.

        Safe to call more than once (the web app factory and ``main`` both
        call it); the handler is only added the first time.
        """
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log a workflow milestone."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a recoverable oddity, such as issues output that is not JSON."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log a failed operation without a traceback."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log an error with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log a debug message, such as each service call and its response."""
        cls._logger.debug(message, extra=kwargs)
