"""Google OAuth authentication client.

This module provides refresh-token based OAuth 2.0 authentication for the
YouTube Data API v3 and the Google Drive API v3. The publishing channel
authorizes once out of band; the stored refresh token is then exchanged
for short-lived access tokens on demand.

Required OAuth scopes:
- youtube.upload: Upload videos
- drive.readonly: Read source files shared from Drive
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource, build

from app.core.exceptions import InvalidCredentialsError, TokenExpiredError
from app.core.logging import get_logger

logger = get_logger(__name__)

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

# Required OAuth scopes for publication
GOOGLE_SCOPES = [
    "https://www.googleapis.com/auth/youtube.upload",
    "https://www.googleapis.com/auth/drive.readonly",
]


@dataclass
class GoogleOAuthSettings:
    """OAuth client settings for the publishing account.

    Attributes:
        client_id: OAuth client ID
        client_secret: OAuth client secret
        refresh_token: Long-lived refresh token
        scopes: Authorized scopes
    """

    client_id: str
    client_secret: str
    refresh_token: str
    scopes: list[str] = field(default_factory=lambda: list(GOOGLE_SCOPES))


class GoogleAuthClient:
    """Google OAuth authentication client.

    Holds refresh-token credentials and hands out authenticated service
    objects and bearer tokens. Service objects wrap an httplib2 transport
    that is not thread-safe, so a fresh one is built for each caller.

    Example:
        >>> auth = GoogleAuthClient(client_id, client_secret, refresh_token)
        >>> youtube = await auth.get_youtube_service()
        >>> token = await auth.get_access_token()
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        refresh_token: str,
    ) -> None:
        """Initialize Google auth client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            refresh_token: Stored refresh token

        Raises:
            InvalidCredentialsError: If any credential is missing
        """
        missing = [
            name
            for name, value in (
                ("client_id", client_id),
                ("client_secret", client_secret),
                ("refresh_token", refresh_token),
            )
            if not value
        ]
        if missing:
            raise InvalidCredentialsError(
                message=f"Missing Google OAuth credentials: {', '.join(missing)}",
                credential_type="oauth_client",
            )

        self.settings = GoogleOAuthSettings(
            client_id=client_id,
            client_secret=client_secret,
            refresh_token=refresh_token,
        )
        self._credentials: Credentials | None = None
        self._lock = asyncio.Lock()

        logger.info("GoogleAuthClient initialized", scopes=self.settings.scopes)

    def _build_credentials(self) -> Credentials:
        """Build unrefreshed credentials from the stored refresh token."""
        return Credentials(
            token=None,
            refresh_token=self.settings.refresh_token,
            token_uri=GOOGLE_TOKEN_URI,
            client_id=self.settings.client_id,
            client_secret=self.settings.client_secret,
            scopes=self.settings.scopes,
        )

    async def _refresh_credentials(self, creds: Credentials) -> Credentials:
        """Exchange the refresh token for a new access token.

        Args:
            creds: Credentials with refresh token

        Returns:
            Refreshed credentials

        Raises:
            TokenExpiredError: If refresh fails
        """
        try:
            await asyncio.to_thread(creds.refresh, Request())
            logger.info("Successfully refreshed Google credentials")
            return creds
        except RefreshError as e:
            logger.error("Failed to refresh Google credentials", error=str(e))
            raise TokenExpiredError(
                token_type="refresh",
                message=f"Failed to refresh token: {e}",
            ) from e

    async def get_credentials(self) -> Credentials:
        """Get valid credentials, refreshing if needed.

        Returns:
            Valid OAuth credentials

        Raises:
            TokenExpiredError: If token refresh fails
        """
        async with self._lock:
            if self._credentials and self._credentials.valid:
                return self._credentials

            creds = self._credentials or self._build_credentials()
            self._credentials = await self._refresh_credentials(creds)
            return self._credentials

    async def get_access_token(self) -> str:
        """Get a valid bearer access token.

        Returns:
            OAuth access token
        """
        creds = await self.get_credentials()
        return creds.token

    async def get_youtube_service(self) -> Resource:
        """Build an authenticated YouTube Data API v3 service.

        Returns:
            YouTube API service resource
        """
        creds = await self.get_credentials()
        service = build("youtube", "v3", credentials=creds, cache_discovery=False)
        logger.debug("Created YouTube Data API service")
        return service

    async def get_drive_service(self) -> Resource:
        """Build an authenticated Google Drive API v3 service.

        Returns:
            Drive API service resource
        """
        creds = await self.get_credentials()
        service = build("drive", "v3", credentials=creds, cache_discovery=False)
        logger.debug("Created Drive API service")
        return service

    def get_credentials_info(self) -> dict[str, Any]:
        """Get info about current credentials.

        Returns:
            Dictionary with credentials info (without sensitive data)
        """
        creds = self._credentials
        return {
            "authenticated": bool(creds and creds.valid),
            "scopes": list(self.settings.scopes),
            "expiry": creds.expiry.isoformat() if creds and creds.expiry else None,
        }


__all__ = [
    "GOOGLE_SCOPES",
    "GoogleAuthClient",
    "GoogleOAuthSettings",
]
