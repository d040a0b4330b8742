"""
iqdb - reverse image search client for iqdb.org
"""

__version__ = "0.1.0"

from iqdb.client import AsyncIqdbClient, IqdbClient
from iqdb.errors import FormatError, IqdbError, StructureError, TransportError
from iqdb.models import Match, MatchType, Service

__all__ = [
    "AsyncIqdbClient",
    "FormatError",
    "IqdbClient",
    "IqdbError",
    "Match",
    "MatchType",
    "Service",
    "StructureError",
    "TransportError",
]
