"""CycleCanceller — отмена долговых циклов без изменения нетто-позиций.

Один проход:
1. Циклы перечисляются один раз по текущему состоянию графа
2. Циклы обрабатываются в порядке выдачи CycleEnumerator над рабочей
   копией весов: минимум весов цикла вычитается из каждого ребра цикла
3. Если ребро цикла уже обнулено предыдущей отменой, цикл пропускается
   и учитывается как skipped
4. После прохода веса записываются в граф, нулевые рёбра удаляются

Каждый узел цикла теряет X на исходящем ребре и X на входящем, поэтому
вектор нетто-позиций инвариантен.

Проход не является fixpoint: циклы, которые остались после пропусков,
находятся только следующим проходом (max_passes > 1 или None).
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from src.netting.cycles import Cycle, CycleEnumerator, cycle_edges
from src.netting.graph import ClaimGraph, CounterpartyId

logger = logging.getLogger(__name__)

EdgeKey = Tuple[CounterpartyId, CounterpartyId]


@dataclass(frozen=True)
class CancellationResult:
    """Результат optimize()."""

    cycles_found: int
    cycles_cancelled: int
    cycles_skipped: int

    # Сумма min_weight * len(cycle) по отменённым циклам
    volume_cancelled: float

    passes: int

    def merge(self, other: "CancellationResult") -> "CancellationResult":
        return CancellationResult(
            cycles_found=self.cycles_found + other.cycles_found,
            cycles_cancelled=self.cycles_cancelled + other.cycles_cancelled,
            cycles_skipped=self.cycles_skipped + other.cycles_skipped,
            volume_cancelled=self.volume_cancelled + other.volume_cancelled,
            passes=self.passes + other.passes,
        )


_EMPTY_RESULT = CancellationResult(
    cycles_found=0,
    cycles_cancelled=0,
    cycles_skipped=0,
    volume_cancelled=0.0,
    passes=0,
)


class CycleCanceller:
    """Отмена циклов на живом ClaimGraph (мутирует граф на месте)."""

    def __init__(self, graph: ClaimGraph) -> None:
        self._graph = graph

    def optimize(self, max_passes: Optional[int] = 1) -> CancellationResult:
        """Проходы отмены циклов.

        Args:
            max_passes: число проходов; None — пока граф содержит циклы

        Returns:
            CancellationResult, агрегированный по всем проходам
        """
        if max_passes is not None and max_passes < 1:
            raise ValueError(f"max_passes must be >= 1 or None, got {max_passes}")

        total = _EMPTY_RESULT
        while max_passes is None or total.passes < max_passes:
            result = self.run_pass()
            total = total.merge(result)
            # Каждый проход с найденными циклами удаляет минимум одно ребро,
            # поэтому цикл по проходам конечен
            if result.cycles_found == 0:
                break

        logger.info(
            "Netting optimization: passes=%d found=%d cancelled=%d skipped=%d volume=%.6f",
            total.passes,
            total.cycles_found,
            total.cycles_cancelled,
            total.cycles_skipped,
            total.volume_cancelled,
        )
        return total

    def run_pass(self) -> CancellationResult:
        """Один проход отмены (skip-on-conflict)."""
        cycles = CycleEnumerator(self._graph).cycles()
        weights: Dict[EdgeKey, float] = {
            (claim.src, claim.dst): claim.weight for claim in self._graph.claims()
        }

        cancelled = 0
        skipped = 0
        volume = 0.0
        for cycle in cycles:
            reduction = self._cancel_cycle(cycle, weights)
            if reduction is None:
                skipped += 1
                continue
            cancelled += 1
            volume += reduction * len(cycle)

        for (src, dst), weight in weights.items():
            self._graph.replace_claim(src, dst, weight)

        return CancellationResult(
            cycles_found=len(cycles),
            cycles_cancelled=cancelled,
            cycles_skipped=skipped,
            volume_cancelled=volume,
            passes=1,
        )

    @staticmethod
    def _cancel_cycle(cycle: Cycle, weights: Dict[EdgeKey, float]) -> Optional[float]:
        edges: List[EdgeKey] = cycle_edges(cycle)
        min_weight = min(weights.get(edge, 0.0) for edge in edges)
        if min_weight <= 0.0:
            logger.debug("Skipping cycle %s: edge already cancelled", cycle)
            return None

        for edge in edges:
            weights[edge] -= min_weight
        logger.debug("Cancelled %.6f around cycle %s", min_weight, cycle)
        return min_weight
