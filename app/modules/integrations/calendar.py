from datetime import timedelta, timezone
from typing import Any, Dict, Optional
from urllib.parse import quote

from app.core.exceptions import BadRequestError, IntegrationError
from app.modules.integrations.google_auth import GoogleApiService
from app.modules.shoots.schemas import ShootResponse

CALENDAR_API = "https://www.googleapis.com/calendar/v3"
DEFAULT_DURATION_MINUTES = 120


def shoot_window(shoot: ShootResponse):
    """Start and end of the shoot in UTC; "HH:MM" in shoot.time overrides the date's clock"""
    if shoot.date is None:
        raise BadRequestError("Shoot needs a date before it can be added to a calendar")

    start = shoot.date
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    if shoot.time:
        hour, minute = shoot.time.split(":")
        start = start.replace(hour=int(hour), minute=int(minute), second=0, microsecond=0)

    end = start + timedelta(minutes=shoot.duration_minutes or DEFAULT_DURATION_MINUTES)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def build_event(shoot: ShootResponse, location: Optional[str] = None) -> Dict[str, Any]:
    start, end = shoot_window(shoot)
    event: Dict[str, Any] = {
        "summary": shoot.title,
        "start": {"dateTime": start.isoformat(), "timeZone": "UTC"},
        "end": {"dateTime": end.isoformat(), "timeZone": "UTC"},
    }
    if shoot.description:
        event["description"] = shoot.description
    if location:
        event["location"] = location
    return event


class GoogleCalendarService(GoogleApiService):
    scopes = (
        "https://www.googleapis.com/auth/calendar",
        "https://www.googleapis.com/auth/calendar.events",
    )
    label = "Google Calendar"
    fallback = "Add the shoot to your calendar manually"

    def _events_url(self, event_id: Optional[str] = None) -> str:
        url = f"{CALENDAR_API}/calendars/{quote(self.settings.google_calendar_id, safe='')}/events"
        if event_id:
            url += f"/{quote(event_id, safe='')}"
        return url

    def create_event(self, shoot: ShootResponse, location: Optional[str] = None) -> Dict[str, str]:
        response = self._request("POST", self._events_url(), json=build_event(shoot, location))
        self._raise_for_status(response, "create calendar event")
        data = response.json()
        if not data.get("id") or not data.get("htmlLink"):
            raise IntegrationError("Calendar did not return an event id", fallback=self.fallback)
        return {"event_id": data["id"], "event_url": data["htmlLink"]}

    def update_event(self, event_id: str, shoot: ShootResponse, location: Optional[str] = None) -> Dict[str, str]:
        response = self._request("PUT", self._events_url(event_id), json=build_event(shoot, location))
        self._raise_for_status(response, "update calendar event")
        data = response.json()
        return {"event_id": data.get("id", event_id), "event_url": data.get("htmlLink", "")}

    def delete_event(self, event_id: str) -> None:
        response = self._request("DELETE", self._events_url(event_id))
        # Already gone counts as deleted
        if response.status_code in (404, 410):
            return
        self._raise_for_status(response, "delete calendar event")
