"""
ClaimRecord / SerializedGraph — модели payload графа требований

Immutable Pydantic модели для переносимого представления таблицы неттинга.
Полная совместимость с JSON Schema (contracts/schema/claim_graph.json
и contracts/schema/counterparty_claims.json).

Формат:
    {"Nodes": [0, 1, 2], "Edges": [{"f": 0, "t": 1, "v": 10.0}, ...]}
"""

from pydantic import BaseModel, Field


# =============================================================================
# CLAIM RECORD
# =============================================================================


class ClaimRecord(BaseModel):
    """
    Одно требование в payload: f должен t сумму v.

    Используется и в сериализованном графе (только положительные v),
    и в отчёте по контрагенту (зеркальные рёбра, v может быть отрицательным).
    """

    f: int = Field(..., ge=0, description="Должник (from)")
    t: int = Field(..., ge=0, description="Кредитор (to)")
    v: float = Field(..., allow_inf_nan=False, description="Сумма требования")

    model_config = {"frozen": True, "extra": "forbid"}


# =============================================================================
# SERIALIZED GRAPH
# =============================================================================


class SerializedGraph(BaseModel):
    """
    Сериализованный граф требований.

    Порядок Nodes определяет переназначение идентификаторов при decode:
    i-й элемент списка становится контрагентом с id = i.
    """

    nodes: list[int] = Field(..., alias="Nodes", description="Идентификаторы контрагентов")
    edges: list[ClaimRecord] = Field(..., alias="Edges", description="Требования (f, t, v)")

    model_config = {"frozen": True, "extra": "forbid", "populate_by_name": True}

    def to_json(self) -> str:
        """JSON с ключами Nodes/Edges."""
        return self.model_dump_json(by_alias=True)
