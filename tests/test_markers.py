"""Tests for managed-region splicing and frontmatter helpers."""

from ai_scaffold.markers import (
    END_MARKER as END,
    START_MARKER as START,
    build_frontmatter,
    find_region,
    has_frontmatter,
    merge_region,
    new_region_file,
    prepend_frontmatter,
)


class TestFindRegion:
    def test_pair(self):
        text = f"a\n{START}\nx\n{END}\nb"
        i0, j = find_region(text)
        assert text[i0:].startswith(START)
        assert text[j:].startswith(END)

    def test_no_markers(self):
        assert find_region("plain text") is None

    def test_start_only(self):
        assert find_region(f"{START}\nx\n") is None

    def test_end_before_start_is_ignored(self):
        assert find_region(f"{END}\nx\n{START}\ny\n") is None

    def test_end_before_start_with_later_end(self):
        text = f"{END}\n{START}\ny\n{END}\n"
        i0, j = find_region(text)
        assert i0 == text.index(START)
        assert j == text.rindex(END)


class TestMergeRegion:
    def test_new_file(self):
        assert new_region_file("Hello") == f"{START}\nHello\n{END}\n"

    def test_splice_preserves_surroundings(self):
        existing = f"# Title\n\n{START}\nOld\n{END}\n## Footer"
        merged = merge_region(existing, "New")
        assert merged == f"# Title\n\n{START}\nNew\n{END}\n## Footer"

    def test_append_when_absent(self):
        merged = merge_region("user notes", "C")
        assert merged == f"user notes\n\n{START}\nC\n{END}\n"

    def test_append_on_lone_start_marker(self):
        existing = f"intro\n{START}\nleft open"
        merged = merge_region(existing, "C")
        assert merged.startswith(existing)
        assert merged.endswith(f"\n\n{START}\nC\n{END}\n")

    def test_append_on_lone_end_marker(self):
        existing = f"intro\n{END}\n"
        merged = merge_region(existing, "C")
        assert merged == existing + f"\n\n{START}\nC\n{END}\n"

    def test_splice_uses_first_end_after_start(self):
        existing = f"{START}\nold\n{END}\nmiddle\n{END}\ntail"
        merged = merge_region(existing, "new")
        assert merged == f"{START}\nnew\n{END}\nmiddle\n{END}\ntail"

    def test_idempotent(self):
        once = merge_region("notes\n", "C")
        assert merge_region(once, "C") == once

    def test_crlf_outside_region_survives(self):
        existing = f"line one\r\nline two\r\n{START}\nold\n{END}\r\nafter\r\n"
        merged = merge_region(existing, "new")
        assert merged.startswith("line one\r\nline two\r\n")
        assert merged.endswith(f"{END}\r\nafter\r\n")


# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------


class TestFrontmatter:
    def test_plain_description(self):
        fm = build_frontmatter({"description": "Do the thing."})
        assert fm == "---\ndescription: Do the thing.\n---"

    def test_quotes_colon_values(self):
        fm = build_frontmatter({"description": "Note: careful"})
        assert 'description: "Note: careful"' in fm

    def test_escapes_embedded_quotes(self):
        fm = build_frontmatter({"description": 'say "hi"'})
        assert 'description: "say \\"hi\\""' in fm

    def test_bool_values(self):
        fm = build_frontmatter({"alwaysApply": True})
        assert "alwaysApply: true" in fm

    def test_has_frontmatter_ignores_leading_whitespace(self):
        assert has_frontmatter("\n\n  ---\na: b\n---\n")
        assert not has_frontmatter("# heading\n---\n")

    def test_prepend_when_missing(self):
        out = prepend_frontmatter("body\n", "---\na: b\n---")
        assert out == "---\na: b\n---\n\nbody\n"

    def test_prepend_keeps_leading_blank_lines(self):
        out = prepend_frontmatter("\n\nbody\n", "---\na: b\n---")
        assert out == "---\na: b\n---\n\n\n\nbody\n"

    def test_prepend_keeps_existing(self):
        text = "---\ndescription: mine\n---\nbody\n"
        assert prepend_frontmatter(text, "---\ndescription: theirs\n---") == text
