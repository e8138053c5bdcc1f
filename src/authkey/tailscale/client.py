"""
Tailscale API client: OAuth client-credentials grant and auth-key creation.
"""

from urllib.parse import quote

import httpx
from pydantic import ValidationError

from authkey.config import Settings
from authkey.shared.exceptions import KeyCreateError, KeyMissingError, OAuthError
from authkey.shared.logging import get_logger
from authkey.tailscale.schemas import (
    CreateKeyRequest,
    CreateKeyResponse,
    IssuedKey,
    OAuthTokenResponse,
)

logger = get_logger(__name__)


class TailscaleClient:
    """Issues pre-authorization keys for one tailnet.

    Every call goes out once; failures are never retried and an access token
    obtained before a failed key request is left to expire.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        """Initialize Tailscale client.

        Args:
            settings: Application settings holding the OAuth client and tailnet.
            http_client: HTTP client used for both requests.
        """
        self._settings = settings
        self._http_client = http_client

    @property
    def token_url(self) -> str:
        return f"{self._settings.tailscale_api_url}/oauth/token"

    @property
    def keys_url(self) -> str:
        tailnet = quote(self._settings.tailnet_name, safe="")
        return f"{self._settings.tailscale_api_url}/tailnet/{tailnet}/keys"

    async def fetch_access_token(self) -> str:
        """Exchange the OAuth client credentials for an access token.

        Returns:
            The access token. Callers must not log or return it.

        Raises:
            OAuthError: On transport failure, non-2xx status or a response
                without an access token.
        """
        try:
            response = await self._http_client.post(
                self.token_url,
                data={"grant_type": "client_credentials"},
                auth=httpx.BasicAuth(
                    self._settings.tailscale_oauth_client_id,
                    self._settings.tailscale_oauth_client_secret,
                ),
            )
        except httpx.HTTPError as e:
            logger.error(
                "Tailscale OAuth request failed",
                extra={"error_type": type(e).__name__},
            )
            raise OAuthError(details={"error_type": type(e).__name__}) from e

        if not response.is_success:
            logger.error(
                "Tailscale OAuth rejected",
                extra={"status_code": response.status_code},
            )
            raise OAuthError(details={"status_code": response.status_code})

        try:
            token = OAuthTokenResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Tailscale OAuth response had no access token")
            raise OAuthError(details={"reason": "no_access_token"}) from e

        return token.access_token

    async def create_auth_key(self, access_token: str) -> IssuedKey:
        """Create a single-use, pre-authorized key for the configured tailnet.

        Args:
            access_token: Token from fetch_access_token.

        Returns:
            The issued key and its expiry (None when the API omits it).

        Raises:
            KeyCreateError: On transport failure or non-2xx status.
            KeyMissingError: When the response carries no key.
        """
        body = CreateKeyRequest.single_use(
            tag=self._settings.authkey_tag,
            expiry_seconds=self._settings.authkey_expiry_seconds,
        )

        try:
            response = await self._http_client.post(
                self.keys_url,
                json=body.to_payload(),
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logger.error(
                "Tailscale key request failed",
                extra={"error_type": type(e).__name__},
            )
            raise KeyCreateError(details={"error_type": type(e).__name__}) from e

        if not response.is_success:
            logger.error(
                "Tailscale key creation rejected",
                extra={
                    "status_code": response.status_code,
                    "tailnet": self._settings.tailnet_name,
                },
            )
            raise KeyCreateError(details={"status_code": response.status_code})

        try:
            parsed = CreateKeyResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Tailscale key response could not be parsed")
            raise KeyMissingError(details={"reason": "unparseable"}) from e

        auth_key = parsed.auth_key
        if not auth_key:
            logger.error("Tailscale key response had no key field")
            raise KeyMissingError(details={"reason": "no_key_field"})

        return IssuedKey(auth_key=auth_key, expires_at=parsed.expires_at)
