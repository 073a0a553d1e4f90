"""ClaimGraph — консолидированный граф двусторонних требований.

Рёбра хранятся по неупорядоченной паре контрагентов, поэтому для пары {a, b}
структурно возможно не более одного направленного требования.

Инварианты:
1. weight > 0 всегда; нулевой результат консолидации удаляет ребро
2. для пары {a, b} хранится не более одного из a→b / b→a
3. петли (src == dst) не хранятся
4. оба конца ребра — зарегистрированные контрагенты
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

from src.core.math.numerical_safeguards import is_valid_float

CounterpartyId = int


@dataclass(frozen=True)
class Claim:
    """Требование: src должен dst сумму weight."""

    src: CounterpartyId
    dst: CounterpartyId
    weight: float


def _pair(a: CounterpartyId, b: CounterpartyId) -> Tuple[CounterpartyId, CounterpartyId]:
    return (a, b) if a < b else (b, a)


class ClaimGraph:
    """Граф требований с консолидацией встречных требований.

    Контрагенты добавляются только append-only: id выдаются по порядку
    начиная с 0 и никогда не переиспользуются.
    """

    def __init__(self) -> None:
        self._size = 0
        self._edges: Dict[Tuple[CounterpartyId, CounterpartyId], Claim] = {}

    # -------------------------------------------------------------------------
    # Counterparties
    # -------------------------------------------------------------------------

    def add_counterparty(self) -> CounterpartyId:
        """Регистрация нового контрагента. Возвращает новый id."""
        cp_id = self._size
        self._size += 1
        return cp_id

    def has_counterparty(self, cp_id: CounterpartyId) -> bool:
        return isinstance(cp_id, int) and 0 <= cp_id < self._size

    def counterparties(self) -> List[CounterpartyId]:
        return list(range(self._size))

    def __len__(self) -> int:
        return self._size

    # -------------------------------------------------------------------------
    # Claims
    # -------------------------------------------------------------------------

    def add_claim(self, src: CounterpartyId, dst: CounterpartyId, value: float) -> None:
        """Добавление требования src → dst с консолидацией.

        No-op если src == dst, любой id не зарегистрирован, value <= 0,
        value не конечен или объединённая сумма переполняется до inf.
        Иначе сумма объединяется с существующим ребром пары: одно
        направление складывается, встречное вычитается.
        """
        if src == dst:
            return
        if not (self.has_counterparty(src) and self.has_counterparty(dst)):
            return
        if not is_valid_float(value) or value <= 0:
            return
        value = float(value)

        existing = self._edges.get(_pair(src, dst))
        amount = value
        if existing is not None:
            if existing.src == src:
                amount = existing.weight + value
            else:
                # знаковая сумма в направлении src → dst
                amount = value - existing.weight
        if not is_valid_float(amount):
            return

        self._store_signed(src, dst, amount)

    def replace_claim(self, src: CounterpartyId, dst: CounterpartyId, weight: float) -> None:
        """Замена веса ребра src → dst; weight <= 0 удаляет ребро пары.

        Используется при отмене циклов, где направление ребра не меняется.
        """
        key = _pair(src, dst)
        if weight > 0:
            self._edges[key] = Claim(src, dst, weight)
        else:
            self._edges.pop(key, None)

    def _store_signed(self, src: CounterpartyId, dst: CounterpartyId, amount: float) -> None:
        key = _pair(src, dst)
        if amount > 0:
            self._edges[key] = Claim(src, dst, amount)
        elif amount < 0:
            self._edges[key] = Claim(dst, src, -amount)
        else:
            self._edges.pop(key, None)

    def has_claim(self, src: CounterpartyId, dst: CounterpartyId) -> bool:
        claim = self._edges.get(_pair(src, dst))
        return claim is not None and claim.src == src

    def weight(self, src: CounterpartyId, dst: CounterpartyId) -> float:
        """Вес ребра src → dst; 0.0 если ребра в этом направлении нет."""
        claim = self._edges.get(_pair(src, dst))
        if claim is None or claim.src != src:
            return 0.0
        return claim.weight

    def claims(self) -> List[Claim]:
        """Все требования в каноническом порядке (по паре, по возрастанию)."""
        return [self._edges[key] for key in sorted(self._edges)]

    def __iter__(self) -> Iterator[Claim]:
        return iter(self.claims())

    def number_of_claims(self) -> int:
        return len(self._edges)

    def adjacency(self) -> Dict[CounterpartyId, List[CounterpartyId]]:
        """Списки последователей каждого контрагента по возрастанию id."""
        adj: Dict[CounterpartyId, List[CounterpartyId]] = {cp: [] for cp in range(self._size)}
        for claim in self._edges.values():
            adj[claim.src].append(claim.dst)
        for successors in adj.values():
            successors.sort()
        return adj

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def mirrored(self) -> "MirroredGraph":
        """Независимая зеркальная копия для расчёта метрик."""
        return MirroredGraph.from_graph(self)

    def __repr__(self) -> str:
        return f"ClaimGraph(counterparties={self._size}, claims={len(self._edges)})"


class MirroredGraph:
    """Зеркальный граф: каждому ребру a→b (w) добавлено b→a (-w).

    Не ссылается на исходный граф; изменения ClaimGraph после создания
    снапшота на него не влияют.
    """

    def __init__(self, size: int) -> None:
        self._size = size
        self._rows: Dict[CounterpartyId, Dict[CounterpartyId, float]] = {
            cp: {} for cp in range(size)
        }

    @classmethod
    def from_graph(cls, graph: ClaimGraph) -> "MirroredGraph":
        mirror = cls(len(graph))
        for claim in graph.claims():
            mirror._rows[claim.src][claim.dst] = claim.weight
        for claim in graph.claims():
            if claim.src not in mirror._rows[claim.dst]:
                mirror._rows[claim.dst][claim.src] = -claim.weight
        return mirror

    def __len__(self) -> int:
        return self._size

    def weight(self, src: CounterpartyId, dst: CounterpartyId) -> float:
        row = self._rows.get(src)
        if row is None:
            return 0.0
        return row.get(dst, 0.0)

    def row(self, src: CounterpartyId) -> List[Tuple[CounterpartyId, float]]:
        """Исходящие веса контрагента по возрастанию dst."""
        return sorted(self._rows.get(src, {}).items())

    def edge_count(self) -> int:
        return sum(len(row) for row in self._rows.values())
