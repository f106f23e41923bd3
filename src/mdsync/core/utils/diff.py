"""Unified diffs and line counts between the current and merged text of a document"""

import difflib

from mdsync.core.metadata import split_lines


def _lines(text: str) -> list[str]:
    return split_lines(text) if text else []


def diff_summary(old: str, new: str) -> dict[str, int]:
    """Return added/deleted/unchanged line counts."""
    matcher = difflib.SequenceMatcher(None, _lines(old), _lines(new), autojunk=False)
    counts = {"added": 0, "deleted": 0, "unchanged": 0}

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            counts["unchanged"] += i2 - i1
        if tag in ("replace", "delete"):
            counts["deleted"] += i2 - i1
        if tag in ("replace", "insert"):
            counts["added"] += j2 - j1
    return counts


def unified_diff(
    old: str,
    new: str,
    from_label: str = "current",
    to_label: str = "merged",
    context: int = 3,
    ) -> list[str]:
    """Return unified diff lines comparing old to new. Empty list if identical.

    Lines end with a newline; join with '' for display.
    """
    return list(difflib.unified_diff(
        [f"{line}\n" for line in _lines(old)],
        [f"{line}\n" for line in _lines(new)],
        fromfile=from_label,
        tofile=to_label,
        n=context,
    ))
