"""
Tailscale API integration.
"""

from authkey.tailscale.client import TailscaleClient
from authkey.tailscale.schemas import CreateKeyRequest, CreateKeyResponse, IssuedKey

__all__ = ["CreateKeyRequest", "CreateKeyResponse", "IssuedKey", "TailscaleClient"]
