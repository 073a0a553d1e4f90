"""NettingTable — фасад таблицы многостороннего неттинга.

Объединяет ClaimGraph, CycleCanceller, ExposureMetrics и Codec:

    table = NettingTable.from_matrix(values)
    before = table.stats()
    table.optimize()
    after = table.stats()
    payload = table.to_bytes()
"""

import json
import logging
from typing import List, Optional, Sequence, Union

from src.core.contracts import validate_counterparty_claims, validate_netting_stats
from src.core.domain.claims import ClaimRecord
from src.core.domain.stats import NettingStats
from src.core.math.numerical_safeguards import vectors_close
from src.netting import codec
from src.netting.canceller import CancellationResult, CycleCanceller
from src.netting.config import NettingConfig
from src.netting.graph import ClaimGraph, CounterpartyId
from src.netting.loader import matrix_dimension
from src.netting.metrics import ExposureMetrics

logger = logging.getLogger(__name__)


class NettingTable:
    """Таблица требований между контрагентами."""

    def __init__(self, config: Optional[NettingConfig] = None, graph: Optional[ClaimGraph] = None) -> None:
        self.config = config or NettingConfig()
        self.graph = graph if graph is not None else ClaimGraph()
        self.last_result: Optional[CancellationResult] = None

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_matrix(cls, values: Sequence[float], config: Optional[NettingConfig] = None) -> "NettingTable":
        """Построение из плоской построчной N×N матрицы.

        N = floor(sqrt(len(values))), лишние значения игнорируются,
        ячейки <= 0 пропускаются.
        """
        table = cls(config=config)
        n = matrix_dimension(list(values))
        for _ in range(n):
            table.add_counterparty()
        for j in range(n):
            for i in range(n):
                weight = values[i + j * n]
                if weight > 0.0:
                    table.add_claim(j, i, weight)
        logger.info(
            "Loaded netting table: %d counterparties, %d claims",
            n,
            table.graph.number_of_claims(),
        )
        return table

    @classmethod
    def from_bytes(cls, payload: Union[bytes, str], config: Optional[NettingConfig] = None) -> "NettingTable":
        """Raises DecodeError при некорректном payload."""
        return cls(config=config, graph=codec.decode(payload))

    def add_counterparty(self) -> CounterpartyId:
        return self.graph.add_counterparty()

    def add_claim(self, src: CounterpartyId, dst: CounterpartyId, value: float) -> None:
        self.graph.add_claim(src, dst, value)

    # -------------------------------------------------------------------------
    # Optimization
    # -------------------------------------------------------------------------

    def optimize(self) -> CancellationResult:
        """Отмена циклов; число проходов из config.max_passes."""
        return self._run_canceller(self.config.max_passes)

    def optimize_until_stable(self) -> CancellationResult:
        """Отмена циклов, пока в графе остаются циклы (независимо от config)."""
        return self._run_canceller(None)

    def _run_canceller(self, max_passes: Optional[int]) -> CancellationResult:
        before = self.net_positions()
        self.last_result = CycleCanceller(self.graph).optimize(max_passes=max_passes)
        after = self.net_positions()
        if not vectors_close(before, after, abs_tol=self.config.conservation_tolerance):
            logger.warning("Net positions changed by cycle cancellation: %r -> %r", before, after)
        return self.last_result

    # -------------------------------------------------------------------------
    # Metrics
    # -------------------------------------------------------------------------

    def metrics(self) -> ExposureMetrics:
        """Снапшот метрик текущего состояния графа."""
        return ExposureMetrics(self.graph, undefined_sentinel=self.config.norm_undefined_sentinel)

    def net_positions(self) -> List[float]:
        return self.metrics().net_positions()

    def l1_norm(self) -> float:
        return self.metrics().l1_norm()

    def l2_norm(self) -> float:
        return self.metrics().l2_norm()

    def stats(self) -> NettingStats:
        snapshot = self.metrics()
        stats = NettingStats(
            number_of_counter_parties=snapshot.size,
            number_of_claims=snapshot.number_of_claims(),
            metric_l1=snapshot.l1_norm(),
            metric_l2=snapshot.l2_norm(),
            sum_of_h=snapshot.sum_of_h(),
        )
        if not stats.is_conserved(self.config.conservation_tolerance):
            logger.warning("Net positions do not sum to zero: sum_of_h=%r", stats.sum_of_h)
        return stats

    def stats_json(self) -> str:
        data = self.stats().model_dump()
        validate_netting_stats(data)
        return json.dumps(data)

    def claims_for(self, cp_id: CounterpartyId) -> List[ClaimRecord]:
        return self.metrics().claims_for(cp_id)

    def claims_json(self, cp_id: CounterpartyId) -> str:
        data = [record.model_dump() for record in self.claims_for(cp_id)]
        validate_counterparty_claims(data)
        return json.dumps(data)

    # -------------------------------------------------------------------------
    # Reporting / serialization
    # -------------------------------------------------------------------------

    def to_text(self) -> str:
        """Зеркальная матрица с колонкой H и строкой L1/L2."""
        snapshot = self.metrics()
        mirror = self.graph.mirrored()
        width = self.config.report_cell_width
        h = snapshot.net_positions()
        n = snapshot.size

        lines = ["\n"]
        for j in range(n):
            cells = "".join(f"{mirror.weight(j, i):{width}.0f} " for i in range(n))
            lines.append(f"{cells} | {h[j]:{width}.0f} \n")
        lines.append(f"L1 norm: {snapshot.l1_norm():9.2f}, L2 norm: {snapshot.l2_norm():9.2f} \n\n")
        return "".join(lines)

    def to_bytes(self) -> bytes:
        """Raises EncodeError при повреждённом графе."""
        return codec.encode(self.graph)

    def __repr__(self) -> str:
        return f"NettingTable({self.graph!r})"
