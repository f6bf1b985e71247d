import logging
from datetime import datetime
from html import escape
from typing import Optional

import resend

from app.config import Settings
from app.core.exceptions import IntegrationError, IntegrationUnavailableError

logger = logging.getLogger(__name__)

FALLBACK = "Share the shoot details with participants directly"


def render_reminder_html(participant_name: str, shoot_title: str, when: str, location: Optional[str] = None) -> str:
    """Reminder body. Every interpolated value is HTML-escaped."""
    where = f"\n      <p><strong>Where:</strong> {escape(location)}</p>" if location else ""
    return f"""<!DOCTYPE html>
<html>
  <body style="font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1>Photo Shoot Reminder</h1>
    <p>Hi {escape(participant_name)},</p>
    <p>This is a friendly reminder about your upcoming cosplay photo shoot:</p>
    <div style="background: #f9fafb; padding: 20px; border-left: 4px solid #667eea;">
      <h2>{escape(shoot_title)}</h2>
      <p><strong>When:</strong> {escape(when)}</p>{where}
    </div>
    <p>Looking forward to seeing you there! Make sure you have all your costumes and props ready.</p>
  </body>
</html>
"""


def format_when(date: datetime, time: Optional[str] = None) -> str:
    when = f"{date:%A, %B} {date.day}, {date.year}"
    if time:
        return f"{when} at {time}"
    if date.hour or date.minute:
        return f"{when} at {date.strftime('%H:%M')}"
    return when


class ReminderEmailService:
    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return self.settings.email_configured

    def send_reminder(
        self,
        to: str,
        participant_name: str,
        shoot_title: str,
        when: str,
        location: Optional[str] = None,
    ) -> str:
        """Send one reminder; returns the provider's message id"""
        if not self.configured:
            raise IntegrationUnavailableError("Email is not configured", fallback=FALLBACK)

        resend.api_key = self.settings.resend_api_key
        params = {
            "from": self.settings.resend_from_email,
            "to": [to],
            "subject": f"Reminder: {shoot_title} Photo Shoot",
            "html": render_reminder_html(participant_name, shoot_title, when, location),
        }
        try:
            response = resend.Emails.send(params)
        except Exception as e:
            logger.error(f"Failed to send reminder email: {e}")
            raise IntegrationError("Failed to send reminder email", fallback=FALLBACK) from e
        return response.get("id", "") if isinstance(response, dict) else getattr(response, "id", "")
