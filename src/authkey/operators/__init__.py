"""
Operator identity lookup.
"""

from authkey.operators.models import OperatorRecord
from authkey.operators.store import OperatorStore

__all__ = ["OperatorRecord", "OperatorStore"]
