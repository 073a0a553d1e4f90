"""Netting — многосторонний неттинг двусторонних требований.

- ClaimGraph: консолидированный граф требований
- CycleEnumerator: элементарные циклы (алгоритм Джонсона)
- CycleCanceller: отмена циклов без изменения нетто-позиций
- ExposureMetrics: нетто-позиции H и нормы L1/L2
- codec: JSON payload графа
- NettingTable: фасад (отчёты, статистика, сериализация)
"""

from .canceller import CancellationResult, CycleCanceller
from .codec import decode, encode
from .config import NettingConfig
from .cycles import Cycle, CycleEnumerator, cycle_edges
from .errors import (
    CodecError,
    DecodeError,
    EncodeError,
    InputError,
    InputFormatError,
    InputIOError,
    NettingError,
)
from .graph import Claim, ClaimGraph, CounterpartyId, MirroredGraph
from .loader import matrix_dimension, parse_matrix_tokens, read_matrix_tokens
from .metrics import ExposureMetrics, ExposureNorms
from .table import NettingTable

__all__ = [
    # Graph
    "Claim",
    "ClaimGraph",
    "CounterpartyId",
    "MirroredGraph",
    # Cycles
    "Cycle",
    "CycleEnumerator",
    "cycle_edges",
    "CancellationResult",
    "CycleCanceller",
    # Metrics
    "ExposureMetrics",
    "ExposureNorms",
    # Codec
    "encode",
    "decode",
    # Facade / config
    "NettingConfig",
    "NettingTable",
    # Loader
    "matrix_dimension",
    "parse_matrix_tokens",
    "read_matrix_tokens",
    # Errors
    "NettingError",
    "InputError",
    "InputFormatError",
    "InputIOError",
    "CodecError",
    "DecodeError",
    "EncodeError",
]
