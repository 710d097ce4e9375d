"""Ausgehende E-Mails. Zustellung läuft im Hintergrund und darf nie die Anfrage scheitern lassen."""
import logging
import smtplib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.message import EmailMessage
from string import Template

from app.core import config

logger = logging.getLogger(__name__)


@dataclass
class NotificationMessage:
    subject: str
    body: str


RESPONSE_RECEIPT_TEMPLATE = Template(
    "Hello,\n\n"
    "thank you for taking part in \"$survey_title\". "
    "Your response was recorded on $submitted_at (UTC).\n"
)


def render_response_receipt(survey_title: str, submitted_at) -> NotificationMessage:
    return NotificationMessage(
        subject=f"Your response to {survey_title}",
        body=RESPONSE_RECEIPT_TEMPLATE.substitute(
            survey_title=survey_title,
            submitted_at=submitted_at.strftime("%Y-%m-%d %H:%M"),
        ),
    )


class Notifier(ABC):
    @abstractmethod
    def send(self, recipient: str, message: NotificationMessage) -> None:
        ...


class LogNotifier(Notifier):
    """Schreibt Nachrichten nur ins Log (Entwicklung, Tests)."""

    def send(self, recipient, message):
        logger.info("Mail to %s: %s", recipient, message.subject)


class SmtpNotifier(Notifier):
    def __init__(
        self,
        host=config.SMTP_HOST,
        port=config.SMTP_PORT,
        username=config.SMTP_USERNAME,
        password=config.SMTP_PASSWORD,
        use_tls=config.SMTP_USE_TLS,
        sender=config.MAIL_FROM,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.sender = sender

    def send(self, recipient, message):
        mail = EmailMessage()
        mail["From"] = self.sender
        mail["To"] = recipient
        mail["Subject"] = message.subject
        mail.set_content(message.body)

        with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(mail)
        logger.info("Mail to %s sent via %s", recipient, self.host)


def get_notifier() -> Notifier:
    if config.NOTIFIER_BACKEND == "smtp":
        return SmtpNotifier()
    return LogNotifier()


def deliver_in_background(notifier: Notifier, recipient: str, message: NotificationMessage) -> None:
    """Wird als BackgroundTask ausgeführt; Fehler werden geloggt, nicht weitergereicht."""
    try:
        notifier.send(recipient, message)
    except Exception:
        logger.exception("Delivering mail to %s failed", recipient)
