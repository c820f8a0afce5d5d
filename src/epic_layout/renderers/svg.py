"""SVG renderer — paints an EpicLayout as an SVG document."""

from __future__ import annotations

from epic_layout.ir.epic import Batch, Epic, Task
from epic_layout.layout.epic import EpicLayout
from epic_layout.layout.path import fmt
from epic_layout.layout.types import ArrowPath, NodeLayout
from epic_layout.types import IssueStatus, PathType

# ─── Constants ──────────────────────────────────────────────────────────────

FONT_SIZE = 12
FONT_FAMILY = "sans-serif"
TITLE_LIMIT = 28  # characters of a title shown on a card

# (fill, text, border)
STATUS_COLORS: dict[IssueStatus, tuple[str, str, str]] = {
    IssueStatus.DONE: ("#22c55e", "#ffffff", "#16a34a"),
    IssueStatus.IN_PROGRESS: ("#facc15", "#1f2937", "#eab308"),
    IssueStatus.PLANNED: ("#3b82f6", "#ffffff", "#2563eb"),
    IssueStatus.NOT_PLANNED: ("#9ca3af", "#ffffff", "#6b7280"),
}

_ARROW_STROKES: dict[PathType, str] = {
    PathType.Horizontal: 'stroke="#64748b"',
    PathType.Vertical: 'stroke="#64748b"',
    PathType.Complex: 'stroke="#64748b" stroke-dasharray="6 4"',
}

_BATCH_STROKE = 'fill="#f8fafc" stroke="#cbd5e1" stroke-width="1.5"'


def _escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _font(size: int = FONT_SIZE) -> str:
    return f'font-family="{FONT_FAMILY}" font-size="{size}"'


def _truncate(title: str) -> str:
    return title if len(title) <= TITLE_LIMIT else title[: TITLE_LIMIT - 1] + "…"


def _rect_attrs(nl: NodeLayout) -> str:
    return f'x="{fmt(nl.x)}" y="{fmt(nl.y)}" width="{fmt(nl.width)}" height="{fmt(nl.height)}"'


# ─── Element Rendering ──────────────────────────────────────────────────────


def _render_batch(batch: Batch, nl: NodeLayout) -> str:
    _, _, border = STATUS_COLORS[batch.status]
    label = _escape(f"#{batch.number} {_truncate(batch.title)}".strip())
    return "\n".join(
        [
            f'<rect {_rect_attrs(nl)} rx="8" {_BATCH_STROKE}/>',
            f'<rect x="{fmt(nl.x)}" y="{fmt(nl.y)}" width="6" height="{fmt(nl.height)}" fill="{border}"/>',
            f'<text x="{fmt(nl.x + 16)}" y="{fmt(nl.y + 24)}" {_font(FONT_SIZE + 2)} font-weight="bold">{label}</text>',
            f'<text x="{fmt(nl.right - 12)}" y="{fmt(nl.y + 24)}" text-anchor="end" {_font()} fill="#64748b">'
            f"{batch.progress}%</text>",
        ]
    )


def _render_task(task: Task, nl: NodeLayout) -> str:
    fill, text, border = STATUS_COLORS[task.status]
    cx = nl.x + nl.width / 2
    cy = nl.y + nl.height / 2
    return "\n".join(
        [
            f'<rect {_rect_attrs(nl)} rx="6" fill="{fill}" stroke="{border}" stroke-width="1.5"/>',
            f'<text x="{fmt(cx)}" y="{fmt(cy - 8)}" text-anchor="middle" dominant-baseline="central" '
            f'{_font(FONT_SIZE - 1)} fill="{text}">#{task.number}</text>',
            f'<text x="{fmt(cx)}" y="{fmt(cy + 8)}" text-anchor="middle" dominant-baseline="central" '
            f'{_font()} fill="{text}">{_escape(_truncate(task.title))}</text>',
        ]
    )


def _render_arrow(arrow: ArrowPath) -> str:
    stroke = _ARROW_STROKES[arrow.path_type]
    return (
        f'<path d="{arrow.path}" fill="none" {stroke} stroke-width="1.5" '
        f'data-from="{arrow.from_id}" data-to="{arrow.to_id}" marker-end="url(#arrowhead)"/>'
    )


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG renderer — consumes an EpicLayout, produces an SVG string."""

    def render(self, epic: Epic, layout: EpicLayout) -> str:
        w, h = fmt(layout.canvas_width), fmt(layout.canvas_height)
        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">',
            "<defs>",
            '  <marker id="arrowhead" markerWidth="10" markerHeight="7" refX="10" refY="3.5" orient="auto">',
            '    <polygon points="0 0, 10 3.5, 0 7" fill="#64748b"/>',
            "  </marker>",
            "</defs>",
            f'<rect width="{w}" height="{h}" fill="white"/>',
        ]

        # Containers first, then batch arrows, then tasks and their arrows on top
        for batch in epic.batches:
            parts.append(_render_batch(batch, layout.batches.nodes[batch.number]))
        for arrow in layout.batch_arrows:
            parts.append(_render_arrow(arrow))

        for batch in epic.batches:
            placed = layout.tasks.get(batch.number, {})
            for arrow in layout.task_arrows.get(batch.number, []):
                parts.append(_render_arrow(arrow))
            for task in batch.tasks:
                nl = placed.get(task.number)
                if nl is not None:
                    parts.append(_render_task(task, nl))

        parts.append("</svg>")
        return "\n".join(parts)
