"""
Payload models.

Contains the portable representations of the netting table: claims,
serialized graphs, and summary statistics.
"""

from src.core.domain.claims import ClaimRecord, SerializedGraph
from src.core.domain.stats import NettingStats

__all__ = [
    "ClaimRecord",
    "SerializedGraph",
    "NettingStats",
]
