"""ExposureMetrics — нетто-позиции и нормы экспозиции.

Все метрики считаются по зеркальному снапшоту графа (MirroredGraph),
снятому при создании ExposureMetrics:

    H[j]  = Σ_i W[j][i]                       (строка зеркальной матрицы)
    L1    = Σ_{i<j} |W[i][j]| / (N(N-1)/2)
    L2    = sqrt(Σ_{i<j} W[i][j]² / (N(N-1)/2))

H[p] > 0 — контрагент чистый плательщик, H[p] < 0 — чистый получатель.
Σ H = 0 всегда (каждое ребро входит в матрицу с +w и -w).
"""

import math
from dataclasses import dataclass
from typing import List

from src.core.domain.claims import ClaimRecord
from src.core.math.numerical_safeguards import stable_sum
from src.netting.config import NORM_UNDEFINED_SENTINEL
from src.netting.graph import ClaimGraph, CounterpartyId


@dataclass(frozen=True)
class ExposureNorms:
    l1: float
    l2: float


class ExposureMetrics:
    """Метрики снапшота ClaimGraph."""

    def __init__(self, graph: ClaimGraph, undefined_sentinel: float = NORM_UNDEFINED_SENTINEL) -> None:
        self._mirror = graph.mirrored()
        self._undefined = undefined_sentinel

    @property
    def size(self) -> int:
        return len(self._mirror)

    def net_positions(self) -> List[float]:
        """Вектор нетто-позиций H, индекс — id контрагента."""
        n = len(self._mirror)
        positions = []
        for j in range(n):
            h = 0.0
            for i in range(n):
                h += self._mirror.weight(j, i)
            positions.append(h)
        return positions

    def sum_of_h(self) -> float:
        return stable_sum(self.net_positions())

    def _pair_count(self) -> int:
        n = len(self._mirror)
        return n * (n - 1) // 2

    def l1_norm(self) -> float:
        """Средняя абсолютная парная экспозиция (sentinel при N < 2)."""
        pairs = self._pair_count()
        if pairs == 0:
            return self._undefined

        n = len(self._mirror)
        abs_sum = 0.0
        for i in range(n):
            for j in range(i + 1, n):
                abs_sum += abs(self._mirror.weight(i, j))
        return abs_sum / pairs

    def l2_norm(self) -> float:
        """Среднеквадратичная парная экспозиция (sentinel при N < 2).

        Квадраты считаются умножением: при переполнении результат inf.
        """
        pairs = self._pair_count()
        if pairs == 0:
            return self._undefined

        n = len(self._mirror)
        quad_sum = 0.0
        for i in range(n):
            for j in range(i + 1, n):
                w = self._mirror.weight(i, j)
                quad_sum += w * w
        return math.sqrt(quad_sum / pairs)

    def norms(self) -> ExposureNorms:
        return ExposureNorms(l1=self.l1_norm(), l2=self.l2_norm())

    def number_of_claims(self) -> int:
        """Число требований: половина числа рёбер зеркального графа."""
        return self._mirror.edge_count() // 2

    def claims_for(self, cp_id: CounterpartyId) -> List[ClaimRecord]:
        """Зеркальные исходящие экспозиции контрагента по возрастанию t.

        Для незарегистрированного id — пустой список.
        """
        return [ClaimRecord(f=cp_id, t=dst, v=weight) for dst, weight in self._mirror.row(cp_id)]
