"""
Diff Engine - Line-level LCS diff between two versions of a file
"""

from __future__ import annotations

from models.diff import DiffKind, DiffLine, DiffStats

PREFIXES = {
    DiffKind.ADDED: "+",
    DiffKind.REMOVED: "-",
    DiffKind.COMMON: " ",
}


def split_lines(text: str) -> list[str]:
    """Split on newlines only. "" gives [""], a trailing newline gives a trailing "" line"""
    return text.split("\n")


def build_alignment_table(old_lines: list[str], new_lines: list[str]) -> list[list[int]]:
    """table[i][j] is the LCS length of old_lines[:i] and new_lines[:j]"""
    n, m = len(old_lines), len(new_lines)
    table = [[0] * (m + 1) for _ in range(n + 1)]

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            if old_lines[i - 1] == new_lines[j - 1]:
                table[i][j] = table[i - 1][j - 1] + 1
            else:
                table[i][j] = max(table[i - 1][j], table[i][j - 1])

    return table


def compute_diff(old_text: str, new_text: str) -> list[DiffLine]:
    """
    Compute a line diff of old_text -> new_text.

    Lines are listed in new-text order with removed lines placed where they
    sat relative to the surrounding common lines. When both directions keep
    the same LCS length the line is classified as added first, so a changed
    line comes out as removed followed by added.
    """
    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)
    table = build_alignment_table(old_lines, new_lines)

    i, j = len(old_lines), len(new_lines)
    reversed_lines: list[DiffLine] = []

    # Each step decrements i + j
    while i > 0 or j > 0:
        if i > 0 and j > 0 and old_lines[i - 1] == new_lines[j - 1]:
            reversed_lines.append(DiffLine(content=old_lines[i - 1], kind=DiffKind.COMMON))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i][j - 1] >= table[i - 1][j]):
            reversed_lines.append(DiffLine(content=new_lines[j - 1], kind=DiffKind.ADDED))
            j -= 1
        else:
            reversed_lines.append(DiffLine(content=old_lines[i - 1], kind=DiffKind.REMOVED))
            i -= 1

    reversed_lines.reverse()
    return reversed_lines


def summarize_diff(lines: list[DiffLine]) -> DiffStats:
    """Count lines per kind"""
    stats = DiffStats()
    for line in lines:
        if line.kind == DiffKind.ADDED:
            stats.added += 1
        elif line.kind == DiffKind.REMOVED:
            stats.removed += 1
        else:
            stats.common += 1
    return stats


def render_unified(lines: list[DiffLine]) -> str:
    """Render as prefixed lines: '+' added, '-' removed, ' ' common"""
    return "\n".join(f"{PREFIXES[line.kind]}{line.content}" for line in lines)
