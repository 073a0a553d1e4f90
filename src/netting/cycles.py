"""CycleEnumerator — поиск всех элементарных циклов графа требований.

Алгоритм Джонсона (blocked set + B-списки), итеративная реализация:
для каждого стартового узла s по возрастанию рассматривается подграф
узлов с id >= s, из него берётся компонента сильной связности узла s,
и в ней ищутся все простые циклы через s.

Свойства:
- каждый цикл начинается со своего минимального id, поэтому дублей
  с точностью до ротации нет
- стартовые узлы и последователи обходятся по возрастанию id, порядок
  выдачи циклов — чистая функция текущего множества рёбер
- циклов длины 2 не бывает: пара {a, b} имеет не более одного ребра
"""

import logging
from collections import defaultdict, deque
from typing import Dict, Iterator, List, Set, Tuple

from src.netting.graph import ClaimGraph, CounterpartyId

logger = logging.getLogger(__name__)

Cycle = Tuple[CounterpartyId, ...]
Adjacency = Dict[CounterpartyId, List[CounterpartyId]]


def cycle_edges(cycle: Cycle) -> List[Tuple[CounterpartyId, CounterpartyId]]:
    """Рёбра цикла: последовательные пары и замыкающее ребро vk → v0."""
    n = len(cycle)
    return [(cycle[i], cycle[(i + 1) % n]) for i in range(n)]


def _reachable(start: CounterpartyId, adj: Adjacency) -> Set[CounterpartyId]:
    seen = {start}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for nbr in adj.get(node, ()):
            if nbr not in seen:
                seen.add(nbr)
                queue.append(nbr)
    return seen


def _component_of(start: CounterpartyId, adj: Adjacency) -> Adjacency:
    """Компонента сильной связности start: достижимые ∩ достигающие."""
    reverse: Adjacency = defaultdict(list)
    for node, successors in adj.items():
        for nbr in successors:
            reverse[nbr].append(node)

    members = _reachable(start, adj) & _reachable(start, reverse)
    return {
        node: [nbr for nbr in adj[node] if nbr in members]
        for node in sorted(members)
    }


def _circuits_through(start: CounterpartyId, comp: Adjacency) -> Iterator[Cycle]:
    """Все простые циклы через start внутри компоненты comp."""
    path: List[CounterpartyId] = [start]
    blocked: Set[CounterpartyId] = {start}
    closed: Set[CounterpartyId] = set()
    b_lists: Dict[CounterpartyId, Set[CounterpartyId]] = defaultdict(set)

    def unblock(node: CounterpartyId) -> None:
        pending = {node}
        while pending:
            current = pending.pop()
            if current in blocked:
                blocked.discard(current)
                pending.update(b_lists[current])
                b_lists[current].clear()

    # pending-списки развёрнуты: pop() отдаёт наименьший id
    stack = [(start, list(reversed(comp[start])))]
    while stack:
        node, pending_nbrs = stack[-1]
        if pending_nbrs:
            nbr = pending_nbrs.pop()
            if nbr == start:
                yield tuple(path)
                closed.update(path)
            elif nbr not in blocked:
                path.append(nbr)
                stack.append((nbr, list(reversed(comp[nbr]))))
                closed.discard(nbr)
                blocked.add(nbr)
                continue

        if not pending_nbrs:
            if node in closed:
                unblock(node)
            else:
                for nbr in comp[node]:
                    b_lists[nbr].add(node)
            stack.pop()
            path.pop()


class CycleEnumerator:
    """Перечисление элементарных циклов ClaimGraph.

    Снимает список смежности при создании; последующие изменения графа
    на перечисление не влияют.
    """

    def __init__(self, graph: ClaimGraph) -> None:
        self._adj: Adjacency = graph.adjacency()

    def iter_cycles(self) -> Iterator[Cycle]:
        for start in sorted(self._adj):
            sub = {
                node: [nbr for nbr in successors if nbr >= start]
                for node, successors in self._adj.items()
                if node >= start
            }
            if not sub[start]:
                continue
            comp = _component_of(start, sub)
            if len(comp) < 2:
                continue
            yield from _circuits_through(start, comp)

    def cycles(self) -> List[Cycle]:
        found = list(self.iter_cycles())
        logger.debug("Enumerated %d elementary cycles over %d counterparties", len(found), len(self._adj))
        return found

    def count(self) -> int:
        return sum(1 for _ in self.iter_cycles())
