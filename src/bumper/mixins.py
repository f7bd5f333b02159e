"""Shared mixins for bumper components."""

import logging
import typing


class VerboseLoggerMixin:
    """Provides a per-class logger and verbosity-aware info logging."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose
        self.logger = logging.getLogger(type(self).__module__)

    def _log_verbose_info(self, message: str, *args: typing.Any) -> None:
        """Log at INFO level when verbose, DEBUG otherwise."""
        if self.verbose:
            self.logger.info(message, *args)
        else:
            self.logger.debug(message, *args)
