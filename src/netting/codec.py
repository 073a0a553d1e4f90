"""Codec — сериализация ClaimGraph в переносимый JSON payload.

Формат (contracts/schema/claim_graph.json):
    {"Nodes": [0, 1, 2], "Edges": [{"f": 0, "t": 1, "v": 10.0}]}

decode() переназначает id по порядку Nodes (начиная с 0) и проигрывает
каждое ребро через add_claim, поэтому инварианты консолидации действуют
и при восстановлении графа.
"""

import json
import logging
from typing import Dict, Union

from jsonschema import ValidationError as SchemaValidationError
from pydantic import ValidationError as ModelValidationError

from src.core.contracts import ClaimGraphValidator
from src.core.domain.claims import ClaimRecord, SerializedGraph
from src.core.math.numerical_safeguards import is_valid_float
from src.netting.errors import DecodeError, EncodeError
from src.netting.graph import ClaimGraph, CounterpartyId

logger = logging.getLogger(__name__)


def to_serialized(graph: ClaimGraph) -> SerializedGraph:
    """ClaimGraph → SerializedGraph.

    Raises:
        EncodeError: Если граф нарушает инварианты модели
    """
    edges = []
    for claim in graph.claims():
        if not (graph.has_counterparty(claim.src) and graph.has_counterparty(claim.dst)):
            raise EncodeError(f"Claim {claim.src}->{claim.dst} refers to an unregistered counterparty")
        if claim.src == claim.dst:
            raise EncodeError(f"Self-claim on counterparty {claim.src}")
        if not is_valid_float(claim.weight) or claim.weight <= 0:
            raise EncodeError(
                f"Claim {claim.src}->{claim.dst} has invalid weight {claim.weight!r}"
            )
        edges.append(ClaimRecord(f=claim.src, t=claim.dst, v=claim.weight))

    return SerializedGraph(nodes=graph.counterparties(), edges=edges)


def encode(graph: ClaimGraph) -> bytes:
    """ClaimGraph → UTF-8 JSON bytes."""
    return to_serialized(graph).to_json().encode("utf-8")


def from_serialized(payload: SerializedGraph) -> ClaimGraph:
    """SerializedGraph → ClaimGraph с переназначением id.

    Raises:
        DecodeError: Дубли в Nodes или ребро на контрагента вне Nodes
    """
    graph = ClaimGraph()
    remap: Dict[int, CounterpartyId] = {}
    for node in payload.nodes:
        if node in remap:
            raise DecodeError(f"Duplicate node id {node} in payload")
        remap[node] = graph.add_counterparty()

    for edge in payload.edges:
        if edge.f not in remap or edge.t not in remap:
            raise DecodeError(f"Edge {edge.f}->{edge.t} refers to a node not listed in Nodes")
        graph.add_claim(remap[edge.f], remap[edge.t], edge.v)

    return graph


def decode(payload: Union[bytes, str]) -> ClaimGraph:
    """UTF-8 JSON bytes → ClaimGraph.

    Raises:
        DecodeError: Если payload не является корректным графом
    """
    try:
        text = payload.decode("utf-8") if isinstance(payload, (bytes, bytearray)) else payload
        data = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, TypeError, RecursionError) as exc:
        raise DecodeError(f"Payload is not valid UTF-8 JSON: {exc}") from exc

    try:
        ClaimGraphValidator().validate(data)
    except SchemaValidationError as exc:
        raise DecodeError(f"Payload violates claim_graph contract: {exc.message}") from exc

    try:
        serialized = SerializedGraph.model_validate(data)
    except ModelValidationError as exc:
        raise DecodeError(f"Payload rejected by model: {exc}") from exc

    graph = from_serialized(serialized)
    logger.debug(
        "Decoded graph: %d counterparties, %d claims", len(graph), graph.number_of_claims()
    )
    return graph
