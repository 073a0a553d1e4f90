"""Тесты ExposureMetrics.

Coverage:
- Нетто-позиции H и их сумма
- L1/L2 нормы и sentinel для N < 2
- Число требований и зеркальные требования контрагента
- Независимость снапшота от последующих изменений графа
"""

import math

import pytest

from src.core.domain import ClaimRecord
from src.netting.graph import ClaimGraph
from src.netting.metrics import ExposureMetrics, ExposureNorms


def _build(n, claims):
    g = ClaimGraph()
    for _ in range(n):
        g.add_counterparty()
    for src, dst, value in claims:
        g.add_claim(src, dst, value)
    return g


@pytest.fixture
def chain():
    """0 → 1 → 2 по 5."""
    return _build(3, [(0, 1, 5), (1, 2, 5)])


@pytest.fixture
def triangle():
    return _build(3, [(0, 1, 10), (1, 2, 10), (2, 0, 10)])


class TestNetPositions:
    def test_chain(self, chain):
        assert ExposureMetrics(chain).net_positions() == [5.0, 0.0, -5.0]

    def test_balanced_cycle_is_zero(self, triangle):
        assert ExposureMetrics(triangle).net_positions() == [0.0, 0.0, 0.0]

    def test_sum_is_zero(self):
        g = _build(4, [(0, 1, 0.1), (1, 2, 0.2), (3, 1, 0.7), (2, 0, 1.3)])

        metrics = ExposureMetrics(g)

        assert metrics.sum_of_h() == pytest.approx(0.0, abs=1e-12)
        assert sum(metrics.net_positions()) == pytest.approx(0.0, abs=1e-12)

    def test_isolated_counterparty_zero(self):
        g = _build(3, [(0, 1, 4)])

        assert ExposureMetrics(g).net_positions()[2] == 0.0


class TestNorms:
    def test_chain_norms(self, chain):
        metrics = ExposureMetrics(chain)

        assert metrics.l1_norm() == pytest.approx(10.0 / 3.0)
        assert metrics.l2_norm() == pytest.approx(math.sqrt(50.0 / 3.0))

    def test_triangle_norms(self, triangle):
        norms = ExposureMetrics(triangle).norms()

        assert isinstance(norms, ExposureNorms)
        assert norms.l1 == pytest.approx(10.0)
        assert norms.l2 == pytest.approx(10.0)

    def test_no_claims_zero_norms(self):
        metrics = ExposureMetrics(_build(3, []))

        assert metrics.l1_norm() == 0.0
        assert metrics.l2_norm() == 0.0

    @pytest.mark.parametrize("n", [0, 1])
    def test_sentinel_without_pairs(self, n):
        metrics = ExposureMetrics(_build(n, []))

        assert metrics.l1_norm() == -1.0
        assert metrics.l2_norm() == -1.0

    def test_large_weight_l2_overflows_to_inf(self):
        """Квадрат конечного веса > ~1.34e154 переполняется в inf без исключения."""
        metrics = ExposureMetrics(_build(2, [(0, 1, 1e200)]))

        assert metrics.l1_norm() == 1e200
        assert metrics.l2_norm() == math.inf

    def test_overflowing_pair_sum_l1_is_inf(self):
        metrics = ExposureMetrics(_build(3, [(0, 1, 1e308), (1, 2, 1e308)]))

        assert metrics.l1_norm() == math.inf

    def test_overflowing_row_sum_of_h(self):
        g = _build(4, [(0, 1, 1e308), (0, 2, 1e308), (3, 1, 1e308), (3, 2, 1e308)])

        metrics = ExposureMetrics(g)

        assert metrics.net_positions() == [math.inf, -math.inf, -math.inf, math.inf]
        assert math.isnan(metrics.sum_of_h())

    def test_custom_sentinel(self):
        metrics = ExposureMetrics(ClaimGraph(), undefined_sentinel=-99.0)

        assert metrics.l1_norm() == -99.0


class TestClaims:
    def test_number_of_claims(self, chain):
        assert ExposureMetrics(chain).number_of_claims() == 2

    def test_claims_for_middle_counterparty(self, chain):
        assert ExposureMetrics(chain).claims_for(1) == [
            ClaimRecord(f=1, t=0, v=-5.0),
            ClaimRecord(f=1, t=2, v=5.0),
        ]

    def test_claims_for_unknown_counterparty(self, chain):
        assert ExposureMetrics(chain).claims_for(7) == []
        assert ExposureMetrics(chain).claims_for(-1) == []


class TestSnapshot:
    def test_snapshot_independent_of_graph(self, chain):
        metrics = ExposureMetrics(chain)

        chain.add_claim(2, 0, 5)

        assert metrics.net_positions() == [5.0, 0.0, -5.0]
        assert ExposureMetrics(chain).net_positions() == [0.0, 0.0, 0.0]

    def test_metrics_do_not_mutate_graph(self, chain):
        before = chain.claims()

        metrics = ExposureMetrics(chain)
        metrics.net_positions()
        metrics.l1_norm()
        metrics.claims_for(0)

        assert chain.claims() == before
        assert chain.number_of_claims() == 2
