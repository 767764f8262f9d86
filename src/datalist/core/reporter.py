"""Single funnel for user-facing diagnostics."""

from typing import Callable, Literal

from .errors import DataListAlert
from .logging_config import get_logger

logger = get_logger(__name__)

AlertSink = Callable[[str], None]

# Severity 0 blocks (alert or raise); anything higher is informational
SEVERITY_FATAL = 0
SEVERITY_WARNING = 1


def _log_alert(message: str) -> None:
    logger.critical("alert", message=message)


class ErrorReporter:
    """
    Formats and routes data list diagnostics.

    Severity 0 messages go to the alert sink in ``alert`` mode or raise
    ``DataListAlert`` in ``raise`` mode. Other severities are logged only.
    """

    def __init__(
        self,
        list_id: str | None = None,
        error_mode: Literal["alert", "raise"] = "alert",
        alert: AlertSink | None = None,
    ) -> None:
        self.list_id = list_id
        self.error_mode = error_mode
        self._alert = alert or _log_alert

    def format(self, message: str) -> str:
        """Prefix message with the list identity."""
        if self.list_id is None:
            return f"dataList warning: {message}"
        return f"dataList warning (list id = '{self.list_id}'): {message}"

    def report(self, message: str, level: int = SEVERITY_WARNING, kind: str | None = None) -> None:
        """
        Report a message.

        Args:
            message: Human readable message
            level: Severity (0 = fatal)
            kind: Error class name for structured logs

        Raises:
            DataListAlert: Severity 0 in raise mode
        """
        text = self.format(message)

        if level == SEVERITY_FATAL:
            if self.error_mode == "alert":
                self._alert(text)
                return
            raise DataListAlert(text)

        logger.warning("reported", kind=kind, message=text, list_id=self.list_id)

    def report_error(self, error: Exception, level: int = SEVERITY_WARNING) -> None:
        """Report an exception instance by its class name and message."""
        self.report(str(error), level=level, kind=type(error).__name__)


__all__ = ["ErrorReporter", "AlertSink", "SEVERITY_FATAL", "SEVERITY_WARNING"]
