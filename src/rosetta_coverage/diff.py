"""Line-level diff between remote and local task code."""

from __future__ import annotations

from difflib import SequenceMatcher

import click

from rosetta_coverage.models import DiffSegment, DiffTag

_PREFIXES = {
    DiffTag.SAME: " ",
    DiffTag.ADDED: "+",
    DiffTag.REMOVED: "-",
}
_COLORS = {
    DiffTag.ADDED: "green",
    DiffTag.REMOVED: "red",
}


def split_lines(text: str) -> list[str]:
    """Split on newlines; the empty text has no lines."""

    if not text:
        return []
    return text.split("\n")


def compute_diff(before: str, after: str) -> list[DiffSegment]:
    """Align two texts line by line.

    Unchanged lines come back as one ``SAME`` segment each; removed and added
    runs are kept together so a renderer can colour them as blocks.
    """

    before_lines = split_lines(before)
    after_lines = split_lines(after)
    matcher = SequenceMatcher(a=before_lines, b=after_lines, autojunk=False)

    segments: list[DiffSegment] = []
    for opcode, a_start, a_end, b_start, b_end in matcher.get_opcodes():
        if opcode == "equal":
            segments.extend(
                DiffSegment(tag=DiffTag.SAME, lines=(line,))
                for line in before_lines[a_start:a_end]
            )
            continue
        if opcode in {"delete", "replace"}:
            segments.append(
                DiffSegment(tag=DiffTag.REMOVED, lines=tuple(before_lines[a_start:a_end])),
            )
        if opcode in {"insert", "replace"}:
            segments.append(
                DiffSegment(tag=DiffTag.ADDED, lines=tuple(after_lines[b_start:b_end])),
            )
    return segments


def render_segments(segments: list[DiffSegment]) -> list[str]:
    lines: list[str] = []
    for segment in segments:
        prefix = _PREFIXES[segment.tag]
        color = _COLORS.get(segment.tag)
        for line in segment.lines:
            text = f"{prefix}{line}"
            lines.append(click.style(text, fg=color) if color else text)
    return lines


def render_diff(before: str, after: str) -> list[str]:
    """Render a coloured diff, ``before`` being the remote text."""

    return render_segments(compute_diff(before, after))
