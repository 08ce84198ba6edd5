"""
Line-level change summary between original and rewritten text.
"""

from typing import List, Tuple

from ..models.results import DiffSummary
from .scoring import round_half_up, structural_delta


def diff_lines(original_text: str, transformed_text: str) -> List[Tuple[str, str]]:
    """
    Pair lines by index and classify them.

    Returns a list of (kind, content) where kind is "context", "remove" or
    "add". A differing pair yields a remove followed by an add.
    """
    original_lines = original_text.split("\n")
    transformed_lines = transformed_text.split("\n")

    lines = []
    for index in range(max(len(original_lines), len(transformed_lines))):
        old = original_lines[index] if index < len(original_lines) else None
        new = transformed_lines[index] if index < len(transformed_lines) else None

        if old is not None and old == new:
            lines.append(("context", old))
            continue
        if old is not None:
            lines.append(("remove", old))
        if new is not None:
            lines.append(("add", new))
    return lines


def summarize_diff(original_text: str, transformed_text: str) -> DiffSummary:
    """
    Summarize how many lines the rewrite touched.

    Args:
        original_text: Text before rewriting
        transformed_text: Text after rewriting

    Returns:
        Diff summary with whole-number percentages
    """
    lines = diff_lines(original_text, transformed_text)
    added = sum(1 for kind, _ in lines if kind == "add")
    removed = sum(1 for kind, _ in lines if kind == "remove")
    changed = max(added, removed)
    total = max(len(original_text.split("\n")), len(transformed_text.split("\n")))

    return DiffSummary(
        added_lines=added,
        removed_lines=removed,
        changed_lines=changed,
        total_lines=total,
        change_percentage=round_half_up(changed / total * 100),
        character_change_percentage=round_half_up(
            structural_delta(original_text, transformed_text) * 100
        )
    )
