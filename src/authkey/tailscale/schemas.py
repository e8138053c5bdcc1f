"""
Request and response models for the Tailscale API.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


class OAuthTokenResponse(BaseModel):
    """Client-credentials grant response."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(..., min_length=1)
    token_type: str | None = None
    expires_in: int | None = None
    scope: str | None = None


class DeviceCreateCapabilities(BaseModel):
    reusable: bool = False
    ephemeral: bool = False
    preauthorized: bool = True
    tags: list[str] = Field(default_factory=list)


class DeviceCapabilities(BaseModel):
    create: DeviceCreateCapabilities


class KeyCapabilities(BaseModel):
    devices: DeviceCapabilities


class CreateKeyRequest(BaseModel):
    """Body of POST /api/v2/tailnet/{tailnet}/keys."""

    capabilities: KeyCapabilities
    expiry_seconds: int = Field(..., alias="expirySeconds", gt=0)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def single_use(cls, tag: str, expiry_seconds: int) -> CreateKeyRequest:
        """Single-use, non-ephemeral, pre-authorized key carrying one tag."""
        return cls(
            capabilities=KeyCapabilities(
                devices=DeviceCapabilities(
                    create=DeviceCreateCapabilities(
                        reusable=False,
                        ephemeral=False,
                        preauthorized=True,
                        tags=[tag],
                    )
                )
            ),
            expiry_seconds=expiry_seconds,
        )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


# Strict: a JSON `true` must not turn into 1.
ExpiryValue = StrictStr | StrictInt | StrictFloat


class CreateKeyResponse(BaseModel):
    """Key-creation response.

    The API has answered with `key`/`expires` and with `authKey`/`expiry`;
    both spellings are accepted and the first non-empty one wins.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    key: str | None = None
    auth_key_alt: str | None = Field(default=None, alias="authKey")
    expires: ExpiryValue | None = None
    expiry: ExpiryValue | None = None

    @property
    def auth_key(self) -> str | None:
        return self.key or self.auth_key_alt or None

    @property
    def expires_at(self) -> ExpiryValue | None:
        return self.expires or self.expiry or None


class IssuedKey(BaseModel):
    """Successful endpoint response."""

    auth_key: str
    expires_at: ExpiryValue | None = None
