"""
Service-account access to Google REST APIs.

Credentials are minted per call from the configured service account JSON;
nothing is cached between requests.
"""

import json
import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from app.config import Settings
from app.core.exceptions import IntegrationError, IntegrationUnavailableError

logger = logging.getLogger(__name__)


def load_service_account_info(raw: str) -> Dict[str, Any]:
    try:
        info = json.loads(raw)
    except ValueError:
        raise ValueError("Invalid GOOGLE_SERVICE_ACCOUNT JSON")
    if not isinstance(info, dict) or not info.get("client_email") or not info.get("private_key"):
        raise ValueError("Service account key must contain client_email and private_key")
    return info


class GoogleApiService:
    """Base for adapters calling a Google REST API with a bearer token"""

    scopes: Sequence[str] = ()
    label = "Google"
    fallback: Optional[str] = None

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.settings.google_service_account)

    def _access_token(self) -> str:
        try:
            info = load_service_account_info(self.settings.google_service_account)
            credentials = service_account.Credentials.from_service_account_info(info, scopes=list(self.scopes))
            credentials.refresh(GoogleAuthRequest())
        except (ValueError, GoogleAuthError) as e:
            logger.error(f"{self.label} authentication failed: {e}")
            raise IntegrationError(f"{self.label} authentication failed", fallback=self.fallback) from e
        return credentials.token

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        if not self.configured:
            raise IntegrationUnavailableError(f"{self.label} is not configured", fallback=self.fallback)

        headers = {"Authorization": f"Bearer {self._access_token()}"}
        try:
            with httpx.Client(timeout=self.settings.integration_timeout_seconds, transport=self._transport) as client:
                response = client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{self.label} request failed: {e}")
            raise IntegrationError(f"{self.label} request failed", fallback=self.fallback) from e
        return response

    def _raise_for_status(self, response: httpx.Response, action: str) -> None:
        if response.is_error:
            logger.error(f"{self.label} {action} failed: {response.status_code} {response.text}")
            raise IntegrationError(f"Failed to {action}", fallback=self.fallback)
