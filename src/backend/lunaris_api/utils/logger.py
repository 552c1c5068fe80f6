import logging
from typing import Any, Mapping

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger (safe to call twice)."""
    global _configured
    root = logging.getLogger()
    root.setLevel(level.upper())
    if _configured:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class SubmissionLogger:
    """
    Logs submitted form fields at DEBUG.

    Field values are personal data, so nothing is emitted unless payload
    logging was switched on explicitly (LOG_REQUEST_PAYLOADS=true).
    """

    def __init__(self, logger: logging.Logger, log_payloads: bool = False):
        self._logger = logger
        self.log_payloads = log_payloads

    def received(self, form: str, fields: Mapping[str, Any]) -> None:
        if not self.log_payloads:
            return
        rendered = " ".join(f"{key}={value!r}" for key, value in fields.items())
        self._logger.debug("Received %s submission: %s", form, rendered)
