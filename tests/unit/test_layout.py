"""Tests for the grid layout engine.

Covers:
  - column assignment by dependency depth
  - row ordering (dependents count, barycenter, nearest free row)
  - pixel rects for fixed cells and variable-size containers
  - completeness / no-overlap / monotone columns / determinism
  - empty input, duplicate ids, dependency cycles
"""

from __future__ import annotations

import itertools
import math

import pytest

from epic_layout.config import BatchLayoutConfig, LayoutConfig
from epic_layout.errors import CyclicDependencyError, LayoutConfigError, LayoutError
from epic_layout.ir.epic import Task
from epic_layout.layout.connections import build_connections
from epic_layout.layout.engine import layout_batches, layout_tasks
from epic_layout.layout.graph import DependencyGraph
from epic_layout.layout.grid import assign_columns, assign_rows
from epic_layout.layout.sizing import ContainerSizing, FixedCellSizing, container_size
from epic_layout.layout.types import Connection, GraphNode, LayoutResult, NodeLayout

# ─── Helpers ──────────────────────────────────────────────────────────────────


def nodes(deps_by_id: dict[int, list[int]]) -> list[GraphNode]:
    """Build GraphNodes from {id: depends_on}, keeping dict order."""
    return [GraphNode(node_id, deps) for node_id, deps in deps_by_id.items()]


def cells(result: LayoutResult) -> dict[int, tuple[int, int]]:
    """Map node id to (col, row)."""
    return {node_id: (nl.col, nl.row) for node_id, nl in result.nodes.items()}


# A wider graph used by the invariant tests.
WIDE = {
    1: [],
    2: [],
    3: [1],
    4: [1, 2],
    5: [3],
    6: [3, 4],
    7: [],
    8: [5, 6, 7],
    9: [2],
    10: [9, 8],
}


# ─── Column Assignment ───────────────────────────────────────────────────────


class TestColumns:
    def test_roots_in_column_zero(self):
        result = layout_tasks(nodes({1: [], 2: [], 3: []}))
        assert {nl.col for nl in result.nodes.values()} == {0}

    def test_column_is_one_past_deepest_dependency(self):
        graph = DependencyGraph.from_connections(
            [1, 2, 3, 4], build_connections(nodes({1: [], 2: [1], 3: [2], 4: [1, 3]}))
        )
        assert assign_columns(graph) == {1: 0, 2: 1, 3: 2, 4: 3}

    def test_columns_independent_of_input_order(self):
        forward = layout_tasks(nodes({1: [], 2: [1], 3: [2]}))
        backward = layout_tasks(nodes({3: [2], 2: [1], 1: []}))
        assert {k: v.col for k, v in forward.nodes.items()} == {k: v.col for k, v in backward.nodes.items()}

    def test_out_of_scope_dependency_ignored(self):
        result = layout_tasks(nodes({1: [500], 2: [1]}))
        assert cells(result) == {1: (0, 0), 2: (1, 0)}

    def test_explicit_connections_override_dependency_lists(self):
        result = layout_tasks(nodes({1: [], 2: []}), [Connection(2, 1)])
        assert result.nodes[1].col == 1
        assert result.nodes[2].col == 0

    def test_connections_to_unknown_nodes_ignored(self):
        result = layout_tasks(nodes({1: [], 2: []}), [Connection(1, 2), Connection(1, 99)])
        assert cells(result) == {1: (0, 0), 2: (1, 0)}


# ─── Row Assignment ──────────────────────────────────────────────────────────


class TestRows:
    def test_first_column_most_dependents_first(self):
        result = layout_tasks(nodes({1: [], 2: [], 3: [2], 4: [2]}))
        assert result.nodes[2].row == 0
        assert result.nodes[1].row == 1

    def test_first_column_ties_keep_input_order(self):
        result = layout_tasks(nodes({7: [], 3: [], 5: []}))
        assert [result.nodes[n].row for n in (7, 3, 5)] == [0, 1, 2]

    def test_rows_follow_dependency_barycenter(self):
        result = layout_tasks(nodes({1: [], 2: [], 3: [2], 4: [1]}))
        assert cells(result) == {1: (0, 0), 2: (0, 1), 3: (1, 1), 4: (1, 0)}

    def test_collision_takes_next_free_row(self):
        result = layout_tasks(nodes({1: [], 2: [], 3: [2], 4: [2]}))
        assert result.nodes[3].row == 0
        assert result.nodes[4].row == 1

    def test_barycenter_rounds_half_up(self):
        # 4 depends on rows 0 and 1 -> ideal 0.5 -> row 1
        graph = DependencyGraph.from_connections(
            [1, 2, 3, 4], build_connections(nodes({1: [], 2: [], 3: [], 4: [1, 2]}))
        )
        rows = assign_rows(graph, assign_columns(graph))
        assert rows[4] == 1

    def test_rows_unique_within_column(self):
        result = layout_tasks(nodes(WIDE))
        seen: set[tuple[int, int]] = set()
        for nl in result.nodes.values():
            assert (nl.col, nl.row) not in seen
            seen.add((nl.col, nl.row))

    def test_rows_contiguous(self):
        result = layout_tasks(nodes(WIDE))
        used = {nl.row for nl in result.nodes.values()}
        assert used == set(range(result.grid_height))


# ─── Coordinates ─────────────────────────────────────────────────────────────


class TestCoordinates:
    def test_fixed_cell_formula(self):
        cfg = LayoutConfig()
        result = layout_tasks(nodes(WIDE), config=cfg)
        for nl in result.nodes.values():
            assert nl.x == nl.col * (cfg.cell_width + cfg.horizontal_gap)
            assert nl.y == nl.row * (cfg.cell_height + cfg.vertical_gap)
            assert (nl.width, nl.height) == (cfg.cell_width, cfg.cell_height)

    def test_padding_shifts_everything(self):
        result = layout_tasks(nodes({1: [], 2: [1]}), config=LayoutConfig(padding=16))
        assert (result.nodes[1].x, result.nodes[1].y) == (16, 16)
        assert result.nodes[2].x == 16 + 210

    def test_canvas_size(self):
        result = layout_tasks(nodes({1: [], 2: [1], 3: []}))
        assert (result.grid_width, result.grid_height) == (2, 2)
        assert result.canvas_width == 160 * 2 + 50
        assert result.canvas_height == 65 * 2 + 16

    def test_single_node_canvas_is_one_cell(self):
        result = layout_tasks(nodes({1: []}), config=LayoutConfig(padding=10))
        assert (result.canvas_width, result.canvas_height) == (180, 85)

    def test_layout_mapping_keeps_input_order(self):
        result = layout_tasks(nodes({3: [], 1: [3], 2: []}))
        assert list(result.nodes) == [3, 1, 2]

    def test_accepts_task_objects(self):
        result = layout_tasks([Task(1), Task(2, depends_on=[1])])
        assert cells(result) == {1: (0, 0), 2: (1, 0)}


class TestContainers:
    def test_variable_sizes_use_column_widths_and_row_heights(self):
        sizes = {1: (500, 300), 3: (380, 250)}
        result = layout_batches(nodes({1: [], 2: [1], 3: []}), sizes=sizes)
        assert result.nodes[1] == NodeLayout(id=1, row=0, col=0, x=0, y=0, width=500, height=300)
        assert result.nodes[3] == NodeLayout(id=3, row=1, col=0, x=0, y=340, width=380, height=250)
        # stretched to the row height
        assert result.nodes[2] == NodeLayout(id=2, row=0, col=1, x=580, y=0, width=380, height=300)
        assert (result.canvas_width, result.canvas_height) == (960, 590)
        assert result.column_widths == [500, 380]
        assert result.row_heights == [300, 250]

    def test_sizes_floored_at_minimum(self):
        sizing = ContainerSizing(BatchLayoutConfig(), {1: (10, 10)})
        assert sizing.node_size(1) == (380, 200)
        assert sizing.node_size(2) == (380, 200)

    def test_non_positive_size_rejected(self):
        with pytest.raises(ValueError):
            ContainerSizing(BatchLayoutConfig(), {1: (0, 100)})

    @pytest.mark.parametrize("size", [(math.nan, 300), (380, math.inf), (-math.inf, 300), (True, 300), ("380", 300)])
    def test_non_finite_or_non_numeric_size_rejected(self, size):
        with pytest.raises(LayoutConfigError, match="of node 1"):
            ContainerSizing(BatchLayoutConfig(), {1: size})

    def test_infinite_size_never_reaches_coordinates(self):
        with pytest.raises(LayoutConfigError):
            layout_batches([GraphNode(1), GraphNode(2, [1])], sizes={1: (math.inf, 300)})

    def test_container_size_encloses_task_grid(self):
        tasks = layout_tasks(nodes({1: [], 2: [1], 3: [2]}))
        w, h = container_size(tasks, BatchLayoutConfig())
        assert w == 160 * 3 + 50 * 2 + 24
        assert h == 200

    def test_container_size_grows_with_rows(self):
        tasks = layout_tasks(nodes({n: [] for n in range(1, 5)}))
        _, h = container_size(tasks, BatchLayoutConfig())
        assert h == 40 + 24 + 65 * 4 + 16 * 3

    def test_fixed_sizing_reports_cell(self):
        sizing = FixedCellSizing(LayoutConfig(cell_width=100, cell_height=40))
        assert sizing.node_size(123) == (100, 40)
        assert sizing.stretch_rows is False


# ─── Invariants ──────────────────────────────────────────────────────────────


class TestInvariants:
    @pytest.mark.parametrize("level", ["tasks", "batches"])
    def test_completeness(self, level):
        ns = nodes(WIDE)
        result = layout_tasks(ns) if level == "tasks" else layout_batches(ns, sizes={4: (600, 420), 8: (390, 260)})
        assert set(result.nodes) == set(WIDE)
        assert all(node_id == nl.id for node_id, nl in result.nodes.items())

    @pytest.mark.parametrize("level", ["tasks", "batches"])
    def test_no_overlap(self, level):
        ns = nodes(WIDE)
        result = layout_tasks(ns) if level == "tasks" else layout_batches(ns, sizes={4: (600, 420), 8: (390, 260)})
        for a, b in itertools.combinations(result.nodes.values(), 2):
            assert not a.overlaps(b), f"{a} overlaps {b}"

    def test_no_overlap_with_zero_gaps(self):
        result = layout_tasks(nodes(WIDE), config=LayoutConfig(horizontal_gap=0, vertical_gap=0))
        for a, b in itertools.combinations(result.nodes.values(), 2):
            assert not a.overlaps(b)

    def test_columns_monotone_along_edges(self):
        ns = nodes(WIDE)
        result = layout_tasks(ns)
        for conn in build_connections(ns):
            assert result.nodes[conn.to_id].col > result.nodes[conn.from_id].col

    def test_non_negative_coordinates(self):
        result = layout_tasks(nodes(WIDE))
        for nl in result.nodes.values():
            assert min(nl.x, nl.y, nl.row, nl.col) >= 0

    def test_deterministic(self):
        first = layout_tasks(nodes(WIDE))
        second = layout_tasks(nodes(WIDE))
        assert first == second
        assert first.to_dict() == second.to_dict()


# ─── Edge Cases ──────────────────────────────────────────────────────────────


class TestEdgeCases:
    def test_empty_input(self):
        result = layout_tasks([])
        assert result.nodes == {}
        assert (result.grid_width, result.grid_height) == (0, 0)
        assert (result.canvas_width, result.canvas_height) == (0, 0)

    def test_empty_batches(self):
        assert layout_batches([]).nodes == {}

    def test_duplicate_ids_rejected(self):
        with pytest.raises(LayoutError):
            layout_tasks([GraphNode(1), GraphNode(1)])

    def test_cycle_raises(self):
        with pytest.raises(CyclicDependencyError) as exc:
            layout_tasks(nodes({1: [3], 2: [1], 3: [2]}))
        assert sorted(exc.value.cycle) == [1, 2, 3]

    def test_self_dependency_raises(self):
        with pytest.raises(CyclicDependencyError):
            layout_tasks(nodes({1: [1]}))


# ─── NodeLayout ──────────────────────────────────────────────────────────────


class TestNodeLayout:
    def test_anchors(self):
        nl = NodeLayout(id=1, row=0, col=0, x=10, y=20, width=100, height=50)
        assert nl.right_center() == (110, 45)
        assert nl.left_center() == (10, 45)
        assert nl.top_center() == (60, 20)
        assert nl.bottom_center() == (60, 70)

    def test_touching_rects_do_not_overlap(self):
        a = NodeLayout(id=1, row=0, col=0, x=0, y=0, width=10, height=10)
        b = NodeLayout(id=2, row=0, col=1, x=10, y=0, width=10, height=10)
        assert not a.overlaps(b)
        assert a.overlaps(NodeLayout(id=3, row=0, col=0, x=5, y=5, width=10, height=10))

    def test_translated(self):
        nl = NodeLayout(id=1, row=2, col=3, x=0, y=0, width=10, height=10).translated(5, 7)
        assert (nl.x, nl.y, nl.row, nl.col) == (5, 7, 2, 3)

    def test_to_dict(self):
        nl = NodeLayout(id=1, row=0, col=1, x=210, y=0, width=160, height=65)
        assert nl.to_dict() == {"x": 210, "y": 0, "width": 160, "height": 65, "row": 0, "col": 1}
