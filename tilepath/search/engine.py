"""
Incremental A* over an ObstacleGrid.

Searches never run to completion in one call. ``calculate()`` spends a fixed
budget of node expansions, handing them out one at a time to each pending
query in round-robin order, and resolves each query's future as soon as it
reaches a terminal state. Queries therefore finish in order of search cost,
not registration order.

Query lifecycle::

    queued -> expanding -> found | unreachable | failed

A found query resolves to the list of grid cells from start to end
(inclusive). An unreachable query resolves to ``None``; a query whose start
equals its end resolves to ``[start]``. A query that raises while expanding is
failed and its future carries the exception.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import math
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, Iterator, List, Optional, Set, Tuple

from ..config import Config
from ..grid.obstacles import ObstacleGrid
from ..logging_utils import log_debug, log_error

Cell = Tuple[int, int]

SQRT2 = math.sqrt(2)

# (dx, dy, cost); cardinals first so equal-cost ties prefer straight moves
DIRECTIONS: Tuple[Tuple[int, int, float], ...] = (
    (0, -1, 1.0),
    (1, 0, 1.0),
    (0, 1, 1.0),
    (-1, 0, 1.0),
    (1, -1, SQRT2),
    (1, 1, SQRT2),
    (-1, 1, SQRT2),
    (-1, -1, SQRT2),
)


class QueryState(str, Enum):
    QUEUED = "queued"
    EXPANDING = "expanding"
    FOUND = "found"
    UNREACHABLE = "unreachable"
    FAILED = "failed"


@dataclass
class PathQuery:
    """Search state for one outstanding request."""

    query_id: int
    start: Cell
    end: Cell
    future: asyncio.Future
    state: QueryState = QueryState.QUEUED
    open_heap: List[Tuple[float, float, int, Cell]] = field(default_factory=list)
    g_score: Dict[Cell, float] = field(default_factory=dict)
    came_from: Dict[Cell, Cell] = field(default_factory=dict)
    closed: Set[Cell] = field(default_factory=set)
    expansions: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.state in (
            QueryState.FOUND,
            QueryState.UNREACHABLE,
            QueryState.FAILED,
        )


def octile_distance(a: Cell, b: Cell) -> float:
    """Admissible, consistent heuristic for 8-connected grids."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return (dx + dy) + (SQRT2 - 2) * min(dx, dy)


class PathSearchEngine:
    """Budgeted multi-query A* with corner cutting disabled."""

    def __init__(
        self,
        grid: ObstacleGrid,
        iterations_per_calculation: Optional[int] = None,
    ):
        self.grid = grid
        self.iterations_per_calculation = (
            iterations_per_calculation
            if iterations_per_calculation is not None
            else Config.ITERATIONS_PER_CALCULATION
        )
        if self.iterations_per_calculation <= 0:
            raise ValueError("iterations_per_calculation must be >= 1")

        self._pending: Deque[PathQuery] = deque()
        self._query_ids = itertools.count(1)
        self._push_order = itertools.count()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def find_path(self, start: Cell, end: Cell) -> asyncio.Future:
        """Register a query and return the future it will resolve.

        Must be called from a running event loop. Endpoints outside the grid,
        or an end cell that is blocked, resolve unreachable immediately.
        """
        future = asyncio.get_running_loop().create_future()
        query = PathQuery(
            query_id=next(self._query_ids), start=start, end=end, future=future
        )

        if not (self.grid.in_bounds(*start) and self.grid.in_bounds(*end)):
            self._resolve(query, None)
        elif not self.grid.is_walkable(*end):
            self._resolve(query, None)
        elif start == end:
            self._resolve(query, [start])
        else:
            query.g_score[start] = 0.0
            self._push(query, start, 0.0)
            self._pending.append(query)

        return future

    def calculate(self) -> int:
        """Run one work slice. Returns the number of queries still pending."""
        budget = self.iterations_per_calculation

        while budget > 0 and self._pending:
            query = self._pending.popleft()

            if query.future.done():
                # Cancelled by its caller; nothing is waiting for the result.
                log_debug(f"[Search] Dropping cancelled query #{query.query_id}")
                continue

            try:
                self._expand(query)
            except Exception as exc:
                log_error(
                    f"[Search] Query #{query.query_id} {query.start}->{query.end} "
                    f"failed after {query.expansions} expansions: {exc}"
                )
                query.state = QueryState.FAILED
                query.future.set_exception(exc)
                continue

            budget -= 1
            if not query.is_terminal:
                self._pending.append(query)

        return len(self._pending)

    # ------------------------------------------------------------------
    # A* internals
    # ------------------------------------------------------------------

    def _push(self, query: PathQuery, cell: Cell, g: float) -> None:
        h = octile_distance(cell, query.end)
        heapq.heappush(query.open_heap, (g + h, h, next(self._push_order), cell))

    def _expand(self, query: PathQuery) -> None:
        """Expand one node of ``query``, resolving it if that makes it terminal."""
        query.state = QueryState.EXPANDING

        while query.open_heap:
            _, _, _, current = heapq.heappop(query.open_heap)
            if current in query.closed:
                continue

            query.expansions += 1

            if current == query.end:
                self._resolve(query, self._reconstruct(query, current))
                return

            query.closed.add(current)
            current_g = query.g_score[current]

            for neighbor, cost in self._neighbors(current):
                if neighbor in query.closed:
                    continue
                tentative = current_g + cost
                if tentative < query.g_score.get(neighbor, math.inf):
                    query.g_score[neighbor] = tentative
                    query.came_from[neighbor] = current
                    self._push(query, neighbor, tentative)

            return

        self._resolve(query, None)

    def _neighbors(self, cell: Cell) -> Iterator[Tuple[Cell, float]]:
        x, y = cell
        walkable = self.grid.is_walkable

        for dx, dy, cost in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if not walkable(nx, ny):
                continue
            # Diagonals need both flanking cells open.
            if dx and dy and not (walkable(x + dx, y) and walkable(x, y + dy)):
                continue
            yield (nx, ny), cost

    @staticmethod
    def _reconstruct(query: PathQuery, current: Cell) -> List[Cell]:
        path = [current]
        while current in query.came_from:
            current = query.came_from[current]
            path.append(current)
        path.reverse()
        return path

    def _resolve(self, query: PathQuery, path: Optional[List[Cell]]) -> None:
        query.state = QueryState.FOUND if path is not None else QueryState.UNREACHABLE
        log_debug(
            f"[Search] Query #{query.query_id} {query.start}->{query.end} "
            f"{query.state.value} after {query.expansions} expansions"
        )
        if not query.future.done():
            query.future.set_result(path)
