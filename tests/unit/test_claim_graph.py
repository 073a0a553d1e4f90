"""Тесты ClaimGraph.

Coverage:
- Регистрация контрагентов (монотонные id)
- Консолидация встречных требований
- Permissive-политика: невалидные аргументы игнорируются
- Инварианты: weight > 0, одно ребро на пару, нет петель
- Зеркальный снапшот (mirrored)
"""

import pytest

from src.netting.graph import Claim, ClaimGraph


@pytest.fixture
def graph():
    g = ClaimGraph()
    for _ in range(3):
        g.add_counterparty()
    return g


class TestCounterparties:
    """Регистрация контрагентов."""

    def test_ids_are_monotonic_from_zero(self):
        g = ClaimGraph()
        assert [g.add_counterparty() for _ in range(4)] == [0, 1, 2, 3]
        assert len(g) == 4
        assert g.counterparties() == [0, 1, 2, 3]

    def test_has_counterparty(self, graph):
        assert graph.has_counterparty(0)
        assert graph.has_counterparty(2)
        assert not graph.has_counterparty(3)
        assert not graph.has_counterparty(-1)


class TestAddClaim:
    """Консолидация требований."""

    def test_fresh_claim(self, graph):
        graph.add_claim(0, 1, 10.0)

        assert graph.weight(0, 1) == 10.0
        assert graph.weight(1, 0) == 0.0
        assert graph.has_claim(0, 1)
        assert not graph.has_claim(1, 0)

    def test_same_direction_accumulates(self, graph):
        graph.add_claim(0, 1, 10.0)
        graph.add_claim(0, 1, 2.5)

        assert graph.weight(0, 1) == 12.5
        assert graph.number_of_claims() == 1

    def test_opposite_direction_partial_offset(self, graph):
        graph.add_claim(0, 1, 10.0)
        graph.add_claim(1, 0, 4.0)

        assert graph.weight(0, 1) == 6.0
        assert not graph.has_claim(1, 0)

    def test_opposite_direction_flips_edge(self, graph):
        graph.add_claim(0, 1, 4.0)
        graph.add_claim(1, 0, 10.0)

        assert graph.weight(1, 0) == 6.0
        assert not graph.has_claim(0, 1)
        assert graph.number_of_claims() == 1

    def test_full_offset_removes_edge(self, graph):
        """add_claim(a,b,v) + add_claim(b,a,v) не оставляет ребра."""
        graph.add_claim(0, 1, 7.0)
        graph.add_claim(1, 0, 7.0)

        assert not graph.has_claim(0, 1)
        assert not graph.has_claim(1, 0)
        assert graph.number_of_claims() == 0

    @pytest.mark.parametrize(
        "src, dst, value",
        [
            (0, 0, 5.0),  # петля
            (0, 3, 5.0),  # dst не зарегистрирован
            (-1, 0, 5.0),  # src не зарегистрирован
            (0, 1, 0.0),
            (0, 1, -5.0),
            (0, 1, float("nan")),
            (0, 1, float("inf")),
        ],
    )
    def test_invalid_arguments_ignored(self, graph, src, dst, value):
        graph.add_claim(src, dst, value)

        assert graph.number_of_claims() == 0

    def test_negative_value_does_not_offset(self, graph):
        graph.add_claim(0, 1, 10.0)
        graph.add_claim(0, 1, -3.0)

        assert graph.weight(0, 1) == 10.0

    def test_overflowing_sum_ignored(self, graph):
        """Две конечные суммы, дающие в сумме inf, не портят ребро."""
        graph.add_claim(0, 1, 1e308)
        graph.add_claim(0, 1, 1e308)

        assert graph.claims() == [Claim(0, 1, 1e308)]

    def test_large_opposite_claims_still_offset(self, graph):
        graph.add_claim(0, 1, 1e308)
        graph.add_claim(1, 0, 1.5e308)

        assert graph.claims() == [Claim(1, 0, 1.5e308 - 1e308)]

    def test_at_most_one_edge_per_pair(self, graph):
        for src, dst, value in [(0, 1, 3.0), (1, 0, 1.0), (1, 0, 5.0), (0, 1, 0.5)]:
            graph.add_claim(src, dst, value)
            claims = [c for c in graph.claims() if {c.src, c.dst} == {0, 1}]
            assert len(claims) <= 1
            assert all(c.weight > 0 for c in claims)


class TestReadApi:
    """Чтение графа."""

    def test_claims_in_canonical_order(self, graph):
        graph.add_claim(2, 0, 1.0)
        graph.add_claim(1, 2, 2.0)
        graph.add_claim(0, 1, 3.0)

        assert graph.claims() == [Claim(0, 1, 3.0), Claim(2, 0, 1.0), Claim(1, 2, 2.0)]
        assert list(graph) == graph.claims()

    def test_adjacency_sorted(self, graph):
        graph.add_counterparty()
        graph.add_claim(0, 3, 1.0)
        graph.add_claim(0, 1, 1.0)
        graph.add_claim(2, 0, 1.0)

        assert graph.adjacency() == {0: [1, 3], 1: [], 2: [0], 3: []}

    def test_replace_claim(self, graph):
        graph.add_claim(0, 1, 10.0)

        graph.replace_claim(0, 1, 4.0)
        assert graph.weight(0, 1) == 4.0

        graph.replace_claim(0, 1, 0.0)
        assert graph.number_of_claims() == 0


class TestMirrored:
    """Зеркальный снапшот не разделяет состояние с исходным графом."""

    def test_mirrored_adds_reciprocal_edges(self, graph):
        graph.add_claim(0, 1, 10.0)
        graph.add_claim(1, 2, 4.0)

        mirror = graph.mirrored()

        assert mirror.weight(0, 1) == 10.0
        assert mirror.weight(1, 0) == -10.0
        assert mirror.weight(2, 1) == -4.0
        assert mirror.weight(0, 2) == 0.0
        assert mirror.edge_count() == 4
        assert mirror.row(1) == [(0, -10.0), (2, 4.0)]

    def test_mirrored_does_not_follow_mutation(self, graph):
        graph.add_claim(0, 1, 10.0)
        mirror = graph.mirrored()

        graph.add_claim(0, 1, 5.0)

        assert mirror.weight(0, 1) == 10.0
        assert graph.weight(0, 1) == 15.0
