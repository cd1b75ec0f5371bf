import asyncio
import logging
import smtplib
import socket
from datetime import date, timedelta
from email.message import EmailMessage
from typing import Any, Dict

from jinja2 import Environment, select_autoescape

from hrfleet.core.config import Settings
from hrfleet.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

_env = Environment(autoescape=select_autoescape(default_for_string=True))

REMINDER_TEMPLATE = _env.from_string(
    """<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px; border: 1px solid #e0e0e0; border-radius: 8px;">
    <h2 style="text-align: center;">Vehicle Inspection Notice</h2>
    <p>Hello,</p>
    <p>The following vehicle has an upcoming inspection:</p>
    <div style="padding: 15px; background: #fff; border-left: 4px solid #2c3e50;">
      <p><strong>Vehicle:</strong> {{ vehicle_name }}</p>
      <p><strong>Plate:</strong> {{ plate }}</p>
      <p><strong>Inspection date:</strong> {{ inspection_date }}</p>
      <p style="color: #d63031; font-weight: bold;">{{ remaining_days }} day(s) left until the inspection!</p>
    </div>
    <p>Please make the necessary arrangements.</p>
    <p style="font-size: 12px; color: #666;">This e-mail was sent automatically. Please do not reply.</p>
  </div>
</body>
</html>
"""
)


def render_reminder(vehicle_name: str, plate: str, inspection_date: date, days_remaining: int) -> str:
    return REMINDER_TEMPLATE.render(
        vehicle_name=vehicle_name,
        plate=plate,
        inspection_date=inspection_date.strftime("%d.%m.%Y"),
        remaining_days=days_remaining,
    )


def _error_code(exc: Exception) -> str:
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return "EAUTH"
    if isinstance(exc, (socket.timeout, TimeoutError)):
        return "ETIMEDOUT"
    if isinstance(exc, (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected, ConnectionError, OSError)):
        return "ECONNECTION"
    return "UNKNOWN"


class Mailer:
    """SMTP-over-SSL sender for inspection reminders."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def configured(self) -> bool:
        return self.settings.mail_configured

    def _connect(self) -> smtplib.SMTP_SSL:
        s = self.settings
        client = smtplib.SMTP_SSL(s.MAIL_HOST, s.MAIL_PORT, timeout=s.MAIL_TIMEOUT)
        client.login(s.MAIL_USER, s.MAIL_PASSWORD)
        return client

    def _send_sync(self, message: EmailMessage) -> None:
        with self._connect() as client:
            client.send_message(message)

    def _verify_sync(self) -> None:
        with self._connect() as client:
            client.noop()

    async def send_inspection_reminder(
        self, vehicle_name: str, plate: str, inspection_date: date, days_remaining: int
    ) -> str:
        if not self.configured:
            raise ExternalServiceError("Mail credentials (MAIL_USER / MAIL_PASSWORD) are not set", code="ECONFIG")

        message = EmailMessage()
        message["From"] = self.settings.MAIL_USER
        message["To"] = self.settings.MAIL_TO
        message["Subject"] = f"Vehicle inspection reminder - {plate} - {days_remaining} day(s) left"
        message.set_content(
            f"{vehicle_name} ({plate}) inspection on {inspection_date:%d.%m.%Y}: "
            f"{days_remaining} day(s) left."
        )
        message.add_alternative(
            render_reminder(vehicle_name, plate, inspection_date, days_remaining),
            subtype="html",
        )

        try:
            await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Sending reminder for %s failed: %s", plate, exc)
            raise ExternalServiceError(f"Mail could not be sent: {exc}", code=_error_code(exc)) from exc

        logger.info("Reminder mail sent for %s (%s days left)", plate, days_remaining)
        return message["Subject"]

    async def send_test_mail(self) -> Dict[str, Any]:
        if not self.configured:
            logger.error("Test mail requested but mail credentials are missing")
            return {
                "success": False,
                "message": "Mail credentials are missing, contact the administrator.",
                "code": "ECONFIG",
            }

        try:
            await asyncio.to_thread(self._verify_sync)
            logger.info("SMTP connection verified")
            await self.send_inspection_reminder(
                "Test vehicle", "34TEST123", date.today() + timedelta(days=20), 20
            )
        except (smtplib.SMTPException, OSError) as exc:
            return {"success": False, "message": str(exc), "code": _error_code(exc)}
        except ExternalServiceError as exc:
            return {"success": False, "message": exc.message, "code": exc.code}

        return {"success": True, "message": "Test mail sent successfully", "code": None}
