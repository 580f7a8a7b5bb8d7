"""
Declaration scanner tests.
"""

import pytest

from calcguard.css import SourceLocator, apply_value_edits, find_declarations

pytestmark = pytest.mark.fast


def props_and_values(css):
    return [(decl.prop, decl.value) for decl in find_declarations(css)]


class TestFindDeclarations:
    """Test declaration discovery and offsets."""

    def test_simple_rule(self):
        css = "a { color: red; width: calc(1px + 1px) }"
        declarations = find_declarations(css)

        assert [(d.prop, d.value) for d in declarations] == [
            ("color", "red"),
            ("width", "calc(1px + 1px)"),
        ]
        assert declarations[0].value_index == 11
        for declaration in declarations:
            assert css[declaration.value_index:declaration.value_end] == declaration.value

    def test_value_offset_within_declaration(self):
        declaration = find_declarations("a { color:red }")[0]

        assert declaration.between == ":"
        assert declaration.value_offset == len("color:")

    def test_statements_outside_blocks_are_skipped(self):
        css = "@charset 'utf-8';\n@import url(x.css);\na { top: 0 }"

        assert props_and_values(css) == [("top", "0")]

    def test_nested_blocks(self):
        css = "@media (min-width: 10px) { a { top: 0; } .b { .c { left: 1px } } }"

        assert props_and_values(css) == [("top", "0"), ("left", "1px")]

    def test_selector_with_pseudo_class(self):
        assert props_and_values("a:hover { top: calc(1px+1px) }") == [("top", "calc(1px+1px)")]

    def test_important_is_not_part_of_value(self):
        declaration = find_declarations("a { top: 1px !important; }")[0]

        assert declaration.value == "1px"
        assert declaration.important is True

    def test_semicolons_in_strings_and_parentheses(self):
        css = "a { content: 'a;b'; background: url(data:image/png;base64,xx); top: 0 }"

        assert props_and_values(css) == [
            ("content", "'a;b'"),
            ("background", "url(data:image/png;base64,xx)"),
            ("top", "0"),
        ]

    def test_comments_are_skipped(self):
        assert props_and_values("a { /* top: 1px; */ left: 0 }") == [("left", "0")]

    def test_comment_inside_value_is_kept(self):
        assert props_and_values("a { top: 1px /* x */ }") == [("top", "1px /* x */")]

    def test_line_comment_before_declaration(self):
        css = ".a {\n  // don't touch: 1px;\n  width: calc(1px+1px);\n}\n"

        assert props_and_values(css) == [("width", "calc(1px+1px)")]

    def test_line_comment_between_declarations(self):
        css = ".a {\n  top: 0;\n  // left: 1px;\n  left: 2px;\n}"

        assert props_and_values(css) == [("top", "0"), ("left", "2px")]

    def test_double_slash_inside_parentheses(self):
        assert props_and_values("a { background: url(//cdn.example/x.png); top: 0 }") == [
            ("background", "url(//cdn.example/x.png)"),
            ("top", "0"),
        ]

    def test_line_comments_disabled(self):
        css = ".a {\n  // note\n  width: 1px;\n}"

        assert find_declarations(css, line_comments=False) == []

    def test_custom_property(self):
        assert props_and_values("a { --gap: calc(1px+2px); }") == [("--gap", "calc(1px+2px)")]

    def test_vendor_prefixed_property(self):
        assert props_and_values("a { -webkit-margin-start: 0 }") == [("-webkit-margin-start", "0")]

    def test_multiline_value(self):
        css = "a {\n  width: calc(\n    1px +\n    2px\n  );\n}"

        assert props_and_values(css) == [("width", "calc(\n    1px +\n    2px\n  )")]

    @pytest.mark.parametrize("css, expected", [
        ("a { width: calc(1px", [("width", "calc(1px")]),
        ("}}} a { top: 0", [("top", "0")]),
        ("a { : 1px; top: 0 }", [("top", "0")]),
        ("", []),
    ])
    def test_malformed_input(self, css, expected):
        assert props_and_values(css) == expected


class TestEdits:
    """Test writing values back."""

    def test_apply_value_edits(self):
        css = "a { width: calc(1px+1px); height: calc(2px-1px) }"
        width, height = find_declarations(css)

        result = apply_value_edits(css, [(width, "calc(1px + 1px)"), (height, "calc(2px - 1px)")])

        assert result == "a { width: calc(1px + 1px); height: calc(2px - 1px) }"

    def test_no_edits(self):
        assert apply_value_edits("a { top: 0 }", []) == "a { top: 0 }"


class TestSourceLocator:
    """Test offset to line/column conversion."""

    def test_line_columns(self):
        locator = SourceLocator("a\nbc\r\nd")

        assert locator.line_column(0) == (1, 1)
        assert locator.line_column(2) == (2, 1)
        assert locator.line_column(3) == (2, 2)
        assert locator.line_column(6) == (3, 1)
