"""
Tailnet AuthKey: single-use Tailscale pre-authorization keys for verified operators.
"""

__version__ = "0.1.0"
