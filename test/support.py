"""
Shared constants and helpers for the key-issuance tests.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import respx

SUPABASE_HOST = "project.supabase.test"
TAILSCALE_HOST = "api.tailscale.test"
SUPABASE_URL = f"https://{SUPABASE_HOST}"
TAILSCALE_API = f"https://{TAILSCALE_HOST}"
TAILNET = "example.com"

OPERATORS_PATH = "/rest/v1/operators"
TOKEN_PATH = "/api/v2/oauth/token"
KEYS_PATH = f"/api/v2/tailnet/{TAILNET}/keys"

CALLER_TOKEN = "caller-jwt-123"


@dataclass
class UpstreamRoutes:
    """respx routes for the three outbound collaborators."""

    router: respx.MockRouter
    operators: respx.Route
    token: respx.Route
    keys: respx.Route

    @property
    def total_calls(self) -> int:
        return self.operators.call_count + self.token.call_count + self.keys.call_count


@contextmanager
def mock_upstream() -> Iterator[UpstreamRoutes]:
    """Mock the identity store and Tailscale API; any other host fails the test."""
    with respx.mock(assert_all_called=False, assert_all_mocked=True) as router:
        yield UpstreamRoutes(
            router=router,
            operators=router.get(host=SUPABASE_HOST, path=OPERATORS_PATH),
            token=router.post(host=TAILSCALE_HOST, path=TOKEN_PATH),
            keys=router.post(host=TAILSCALE_HOST, path__startswith="/api/v2/tailnet/"),
        )


@contextmanager
def restored_root_logging() -> Iterator[None]:
    """Undo setup_logging's changes to the root logger on exit."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        yield
    finally:
        root.handlers = handlers
        root.setLevel(level)


def json_lines(output: str) -> list[dict[str, Any]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]
