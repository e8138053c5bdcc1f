"""
Key issuance pipeline: authorize the operator, then mint a key.
"""

from authkey.operators.store import OperatorStore
from authkey.shared.exceptions import ForbiddenError
from authkey.shared.logging import get_logger
from authkey.tailscale.client import TailscaleClient
from authkey.tailscale.schemas import IssuedKey

logger = get_logger(__name__)


class KeyIssuanceService:
    """Runs authorization, token exchange and key creation in strict order."""

    def __init__(self, operators: OperatorStore, tailscale: TailscaleClient) -> None:
        self._operators = operators
        self._tailscale = tailscale

    async def authorize(self, bearer_token: str) -> None:
        """Raise ForbiddenError unless the caller is a verified operator."""
        record = await self._operators.fetch_current(bearer_token)
        if record is None or not record.verified:
            logger.info(
                "Operator not authorized",
                extra={"reason": "not_found" if record is None else "not_verified"},
            )
            raise ForbiddenError()

    async def issue(self, bearer_token: str) -> IssuedKey:
        """Issue a single-use pre-authorization key for a verified operator.

        Args:
            bearer_token: The caller's credential.

        Returns:
            The issued key and expiry.

        Raises:
            ForbiddenError: Caller is unknown or not verified.
            UpstreamError: Token exchange or key creation failed.
        """
        await self.authorize(bearer_token)

        access_token = await self._tailscale.fetch_access_token()
        issued = await self._tailscale.create_auth_key(access_token)

        logger.info(
            "Auth key issued",
            extra={"has_expiry": issued.expires_at is not None},
        )
        return issued
