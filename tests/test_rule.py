"""
Rule tests: stylesheet-level linting, fix write-back and option handling.
"""

import pytest

import calcguard.quality.rule as rule_module
from calcguard.quality import OperatorSpacingRule, lint_css
from calcguard.quality.config import RULE_NAME

pytestmark = pytest.mark.fast


def messages(css, **kwargs):
    _, result = lint_css(css, **kwargs)
    return [diagnostic.message for diagnostic in result.diagnostics]


class TestCheckMode:
    """Diagnostics anchored to the stylesheet."""

    def test_glued_operator(self):
        css = "a { width: calc(1px+1px); }"
        output, result = lint_css(css)

        assert output == css
        assert result.fixed is False
        assert [(d.index, d.end_index, d.line, d.column) for d in result.diagnostics] == [
            (19, 20, 1, 20),
            (20, 21, 1, 21),
        ]
        assert result.diagnostics[0].message == (
            f'Expected single space before "+" operator ({RULE_NAME})'
        )
        assert result.diagnostics[1].message == (
            f'Expected single space after "+" operator ({RULE_NAME})'
        )
        assert result.diagnostics[0].rule == RULE_NAME
        assert result.diagnostics[0].severity == "error"

    def test_missing_operator_on_later_line(self):
        css = "a {\n  width: calc(10px -2);\n}"
        _, result = lint_css(css)

        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.issue_type == "expected_operator_before_sign"
        assert diagnostic.message == f'Expected an operator before sign "-" ({RULE_NAME})'
        assert (diagnostic.index, diagnostic.line, diagnostic.column) == (23, 2, 20)

    def test_correct_stylesheet(self):
        css = "a {\n  width: calc(100% - 10px);\n  margin: calc(10px * -2) -1px;\n}"
        _, result = lint_css(css)

        assert result.diagnostics == []
        assert result.ok

    def test_nested_rules(self):
        assert len(messages("@media screen { a { width: calc(1px+1px) } }")) == 2

    def test_scss_variables_are_ignored(self):
        assert messages("a { width: calc($a+$b) }") == []

    def test_configured_function_names(self):
        assert messages("a { width: min(1px-1px) }") == []
        assert len(messages("a { width: min(1px-1px) }", function_names=["min"])) == 2

    def test_declaration_after_line_comment(self):
        css = ".a {\n  // spacing\n  width: calc(1px+1px);\n}\n"
        _, result = lint_css(css, source="styles/main.scss")

        assert len(result.diagnostics) == 2
        assert (result.diagnostics[0].line, result.diagnostics[0].column) == (3, 18)
        assert len(messages(css)) == 2

    def test_fix_after_line_comment(self):
        css = ".a {\n  // it's fine\n  width: calc(1px+1px);\n}\n"
        output, _ = lint_css(css, fix=True, source="main.less")

        assert output == ".a {\n  // it's fine\n  width: calc(1px + 1px);\n}\n"

    def test_plain_css_has_no_line_comments(self):
        css = ".a {\n  // spacing\n  width: calc(1px+1px);\n}\n"
        _, result = lint_css(css, source="main.css")

        assert result.diagnostics == []

    def test_values_without_candidates_are_not_tokenized(self, monkeypatch):
        calls = []
        real_parse = rule_module.parse

        def counting_parse(value, *args, **kwargs):
            calls.append(value)
            return real_parse(value, *args, **kwargs)

        monkeypatch.setattr(rule_module, "parse", counting_parse)
        css = (
            "a { color: red; width: calc(100%); margin: -1px; "
            "padding: foo(1px-1px); top: calc(1px + 1px) }"
        )
        _, result = lint_css(css)

        assert calls == ["calc(1px + 1px)"]
        assert result.diagnostics == []


class TestFixMode:
    """Values rewritten in place."""

    def test_fix_rewrites_value(self):
        output, result = lint_css("a { width: calc(1px+1px); }", fix=True)

        assert output == "a { width: calc(1px + 1px); }"
        assert result.fixed is True
        assert result.diagnostics == []

    def test_fix_several_declarations(self):
        css = "a { width: calc(1px+1px); height: calc(10px -2); top: calc(1px  + 2px) }"
        output, _ = lint_css(css, fix=True)

        assert output == "a { width: calc(1px + 1px); height: calc(10px - 2); top: calc(1px + 2px) }"

    def test_fix_keeps_important_and_surroundings(self):
        output, _ = lint_css("a{width:calc(1px+1px)!important}", fix=True)

        assert output == "a{width:calc(1px + 1px)!important}"

    def test_fix_preserves_line_breaks(self):
        css = "a {\n  width: calc(1px  \n    + 2px);\n}"
        output, _ = lint_css(css, fix=True)

        assert output == "a {\n  width: calc(1px\n    + 2px);\n}"

    def test_fix_is_idempotent(self):
        css = "a { width: calc(1px+1px); height: sin(1deg -2deg) }"
        once, first = lint_css(css, fix=True)
        twice, second = lint_css(once, fix=True)
        _, check = lint_css(once)

        assert first.fixed is True
        assert second.fixed is False
        assert twice == once
        assert check.diagnostics == []

    def test_nothing_to_fix(self):
        css = "a { width: calc(1px + 1px) }"
        output, result = lint_css(css, fix=True)

        assert output == css
        assert result.fixed is False


class TestOptions:
    """Primary and secondary option validation."""

    @pytest.mark.parametrize("primary", [False, None, "always", 1])
    def test_invalid_primary_disables_rule(self, primary):
        rule = OperatorSpacingRule(primary)
        output, result = rule.lint("a { width: calc(1px+1px) }")

        assert not rule.valid
        assert output == "a { width: calc(1px+1px) }"
        assert result.diagnostics == []
        assert result.warnings == [f'Invalid option value "{primary}" for rule "{RULE_NAME}"']
        assert not result.ok

    def test_empty_function_names_rejected(self):
        rule = OperatorSpacingRule(True, function_names=[])
        _, result = rule.lint("a { width: calc(1px+1px) }")

        assert not rule.valid
        assert len(result.warnings) == 1

    def test_meta(self):
        assert OperatorSpacingRule.meta["fixable"] is True
        assert OperatorSpacingRule.meta["url"].endswith(RULE_NAME)
        assert OperatorSpacingRule.rule_name == RULE_NAME

    def test_default_function_names(self):
        rule = OperatorSpacingRule(True)

        assert "calc" in rule.options.function_names
        assert "min" not in rule.options.function_names
