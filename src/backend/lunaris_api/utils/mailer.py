import smtplib
from email.message import EmailMessage
from typing import Any, Dict, List, Optional, Tuple

from lunaris_api.config import Settings
from lunaris_api.utils.logger import get_logger

logger = get_logger(__name__)

FORM_LABELS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "interest": (
        ("First name", "first_name"),
        ("Last name", "last_name"),
        ("Email", "email"),
        ("Program", "program"),
    ),
    "sponsorship": (
        ("Name", "name"),
        ("Email", "email"),
        ("Phone number", "phone_number"),
        ("Comment", "comment"),
    ),
}


def _format_value(value: Any) -> str:
    if value is None or value == "":
        return "N/A"
    return str(value)


def _build_submission_body(form: str, submission_id: int, fields: Dict[str, Any]) -> str:
    lines = [f"A new {form} form was submitted (id {submission_id}):"]
    for label, key in FORM_LABELS.get(form, ()):
        lines.append(f"+ {label}: {_format_value(fields.get(key))}")
    return "\n".join(lines)


def _skip_reason(settings: Settings, recipients: List[str]) -> Optional[str]:
    if not settings.submission_notification_enabled:
        return "disabled in settings"
    if not recipients:
        return "no recipients configured"
    if not settings.smtp_host:
        return "SMTP host is not configured"
    return None


def _deliver(settings: Settings, message: EmailMessage) -> None:
    server_cls = smtplib.SMTP_SSL if settings.smtp_use_ssl else smtplib.SMTP
    with server_cls(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout) as smtp:
        if settings.smtp_use_tls and not settings.smtp_use_ssl:
            smtp.starttls()
        if settings.smtp_username and settings.smtp_password:
            smtp.login(settings.smtp_username, settings.smtp_password)
        smtp.send_message(message)


def send_submission_notification(
    settings: Settings, form: str, submission_id: int, fields: Dict[str, Any]
) -> None:
    """Email a summary of a stored submission; failures are logged, never raised."""
    recipients = [r.strip() for r in settings.submission_notification_recipients if r and r.strip()]
    reason = _skip_reason(settings, recipients)
    if reason:
        logger.debug("Skipping %s notification id=%s: %s", form, submission_id, reason)
        return

    message = EmailMessage()
    message["Subject"] = f"[{settings.service_name}] New {form} form submission"
    message["From"] = settings.submission_notification_from
    message["To"] = ", ".join(recipients)
    message.set_content(_build_submission_body(form, submission_id, fields))

    try:
        _deliver(settings, message)
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to send submission notification for %s id=%s", form, submission_id)
        return
    logger.info("Submission notification for %s id=%s sent", form, submission_id)
