"""
Base Runner - naming and prefixed logging shared by the runner components
"""
import logging


class BaseRunner:
    """
    Gives each runner a name, a `runner.<name>` logger and log helpers that
    tag every line with `[<name>]`.
    """

    def __init__(self, name: str, description: str = ""):
        """
        Args:
            name: Component name, also the log prefix
            description: One line on what the component does
        """
        self.name = name
        self.description = description
        self.logger = logging.getLogger(f"runner.{name}")

    def _log(self, level: int, message: str):
        self.logger.log(level, f"[{self.name}] {message}")

    def log_info(self, message: str):
        self._log(logging.INFO, message)

    def log_warning(self, message: str):
        self._log(logging.WARNING, message)

    def log_error(self, message: str):
        self._log(logging.ERROR, message)

    def log_debug(self, message: str):
        self._log(logging.DEBUG, message)

    def __repr__(self):
        return f"<{self.__class__.__name__}(name='{self.name}')>"
