"""Managed-region splicing and frontmatter helpers.

A managed region is the text between ``START_MARKER`` and the first
``END_MARKER`` that follows it. Everything outside that region belongs to the
user and is carried through every rewrite byte for byte.
"""

from __future__ import annotations

from typing import Any, Optional

START_MARKER = "<!-- ai-scaffold:START -->"
END_MARKER = "<!-- ai-scaffold:END -->"


def wrap_region(content: str, start: str = START_MARKER, end: str = END_MARKER) -> str:
    return f"{start}\n{content}\n{end}"


def find_region(
    text: str, start: str = START_MARKER, end: str = END_MARKER
) -> Optional[tuple[int, int]]:
    """Return ``(start_index, end_index)`` of the canonical marker pair, or None.

    The end marker is only searched for after the start marker, so an end
    marker sitting before the first start marker never forms a pair.
    """
    i0 = text.find(start)
    if i0 == -1:
        return None
    j = text.find(end, i0 + len(start))
    if j == -1:
        return None
    return i0, j


def merge_region(
    existing: str,
    content: str,
    start: str = START_MARKER,
    end: str = END_MARKER,
) -> str:
    """Splice *content* into the managed region of *existing*.

    With no complete marker pair (including a lone start or end marker) the
    region is appended after a blank line instead.
    """
    span = find_region(existing, start, end)
    if span is None:
        return existing + "\n\n" + wrap_region(content, start, end) + "\n"
    i0, j = span
    return existing[:i0] + wrap_region(content, start, end) + existing[j + len(end):]


def new_region_file(content: str, start: str = START_MARKER, end: str = END_MARKER) -> str:
    return wrap_region(content, start, end) + "\n"


# ---------------------------------------------------------------------------
# Frontmatter (minimal YAML subset)
# ---------------------------------------------------------------------------


def has_frontmatter(text: str) -> bool:
    return text.strip().startswith("---")


def build_frontmatter(meta: dict[str, Any]) -> str:
    lines = ["---"]
    for k, v in meta.items():
        if isinstance(v, bool):
            lines.append(f"{k}: {'true' if v else 'false'}")
        elif isinstance(v, str):
            if ": " in v or v.startswith(("'", '"', "#")) or '"' in v:
                escaped = v.replace("\\", "\\\\").replace('"', '\\"')
                lines.append(f'{k}: "{escaped}"')
            else:
                lines.append(f"{k}: {v}")
        else:
            lines.append(f"{k}: {v}")
    lines.append("---")
    return "\n".join(lines)


def prepend_frontmatter(text: str, frontmatter: str) -> str:
    """Put *frontmatter* at the top of *text* unless it already has one."""
    if not frontmatter or has_frontmatter(text):
        return text
    return frontmatter.strip() + "\n\n" + text
