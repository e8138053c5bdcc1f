"""
Operator lookup against the Supabase REST API.

The caller's own bearer token is forwarded as the acting identity, so the
store's row-level security decides which `operators` row (if any) is visible.
"""

from typing import Any

import httpx
from pydantic import ValidationError

from authkey.config import Settings
from authkey.operators.models import OperatorRecord
from authkey.shared.logging import get_logger

logger = get_logger(__name__)

# PostgREST single-object mode: 406 unless exactly one row matches.
SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class OperatorStore:
    """Reads the calling operator's record from the identity store."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http_client = http_client

    async def fetch_current(self, bearer_token: str) -> OperatorRecord | None:
        """Fetch the single operator row visible to the caller.

        Args:
            bearer_token: Caller credential, forwarded verbatim.

        Returns:
            The operator record, or None on any lookup error or missing row.
        """
        url = f"{self._settings.supabase_rest_url}/operators"
        headers = {
            "apikey": self._settings.supabase_anon_key,
            "Authorization": f"Bearer {bearer_token}",
            "Accept": SINGLE_OBJECT,
        }

        try:
            response = await self._http_client.get(
                url,
                params={"select": "verified"},
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning(
                "Operator lookup request failed",
                extra={"error_type": type(e).__name__},
            )
            return None

        if not response.is_success:
            logger.info(
                "Operator lookup returned no record",
                extra={"status_code": response.status_code},
            )
            return None

        try:
            data: Any = response.json()
        except ValueError:
            logger.warning("Operator lookup returned a non-JSON body")
            return None

        if not isinstance(data, dict):
            return None

        try:
            return OperatorRecord.model_validate(data)
        except ValidationError:
            logger.warning("Operator lookup returned an unexpected row shape")
            return None
