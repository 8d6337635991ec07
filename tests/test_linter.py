#!/usr/bin/env python3
"""
Comprehensive test suite for ListLinter.

This test suite validates the linter rules and ensures they catch
list definitions that would produce a bad IN-list while allowing valid ones.

Test organization:
1. TestRequireValuesRule - values must hold at least one token
2. TestIrregularSpacingRule - warns about whitespace that gets normalized
3. TestEmbeddedQuotesRule - quotes inside tokens
4. TestValidCaseRule - optional case field
5. TestOutputLengthRule - configured length limits
6. TestRoundTripRule - quoted output parses back to the tokens
7. TestListLinter - validates main linter functionality
8. TestExistingLists - regression test for all lists in repository
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
import yaml
from quotelist import lint_lists
from quotelist.lint_lists import (
    EmbeddedQuotesRule,
    IrregularSpacingRule,
    ListLinter,
    OutputLengthRule,
    RequireValuesRule,
    RoundTripRule,
    ValidCaseRule,
)
from quotelist.quoter import QuoteJoinConfig


class TestRequireValuesRule:
    """Test the RequireValuesRule for missing or empty values."""

    def setup_method(self):
        """Initialize rule before each test."""
        self.rule = RequireValuesRule()

    def test_values_with_tokens_passes(self):
        """Test that a normal token list passes."""
        data = {"values": "cars class air"}
        errors, warnings = self.rule.check(Path("test.yaml"), data)

        assert len(errors) == 0
        assert len(warnings) == 0

    def test_missing_values_fails(self):
        """Test that a missing values field is an error."""
        data = {"name": "MYLIST"}
        errors, warnings = self.rule.check(Path("test.yaml"), data)

        assert len(errors) == 1
        assert "missing" in errors[0].lower()

    def test_blank_values_fails(self):
        """Test that whitespace-only values are an error."""
        data = {"values": "   "}
        errors, warnings = self.rule.check(Path("test.yaml"), data)

        assert len(errors) == 1
        assert "empty" in errors[0].lower()

    def test_non_string_values_fails(self):
        """Test that a YAML list instead of a string is an error."""
        data = {"values": ["cars", "class"]}
        errors, warnings = self.rule.check(Path("test.yaml"), data)

        assert len(errors) == 1
        assert "must be a string" in errors[0]


class TestIrregularSpacingRule:
    """Test the IrregularSpacingRule for whitespace that will be normalized."""

    def setup_method(self):
        """Initialize rule before each test."""
        self.rule = IrregularSpacingRule()

    def test_single_spaces_pass(self):
        """Test that single-spaced values pass."""
        data = {"values": "a b c"}
        errors, warnings = self.rule.check(Path("test.yaml"), data)

        assert len(errors) == 0
        assert len(warnings) == 0

    def test_trailing_newline_from_block_scalar_passes(self):
        """Test that the newline a YAML block scalar adds is ignored."""
        data = {"values": "a b c\n"}
        errors, warnings = self.rule.check(Path("test.yaml"), data)

        assert len(warnings) == 0

    def test_repeated_spaces_warn(self):
        """Test that runs of spaces produce a warning, not an error."""
        data = {"values": "  a   b  c "}
        errors, warnings = self.rule.check(Path("test.yaml"), data)

        assert len(errors) == 0
        assert len(warnings) == 1
        assert "'a b c'" in warnings[0]

    def test_tabs_warn(self):
        """Test that tab separators produce a warning."""
        data = {"values": "a\tb"}
        errors, warnings = self.rule.check(Path("test.yaml"), data)

        assert len(warnings) == 1

    def test_blank_values_skipped(self):
        """Test that blank values are left to require-values."""
        data = {"values": "   "}
        errors, warnings = self.rule.check(Path("test.yaml"), data)

        assert len(errors) == 0
        assert len(warnings) == 0


class TestEmbeddedQuotesRule:
    """Test the EmbeddedQuotesRule for double quotes inside tokens."""

    def test_plain_tokens_pass(self):
        """Test that tokens without quotes pass."""
        rule = EmbeddedQuotesRule(QuoteJoinConfig())
        errors, warnings = rule.check(Path("test.yaml"), {"values": "a b"})

        assert len(errors) == 0
        assert len(warnings) == 0

    def test_quote_warns_when_escaping(self):
        """Test that an embedded quote only warns when it will be escaped."""
        rule = EmbeddedQuotesRule(QuoteJoinConfig(escape_quotes=True))
        errors, warnings = rule.check(Path("test.yaml"), {"values": 'a"b c'})

        assert len(errors) == 0
        assert len(warnings) == 1
        assert 'a"b' in warnings[0]

    def test_quote_fails_without_escaping(self):
        """Test that an embedded quote is an error when escaping is disabled."""
        rule = EmbeddedQuotesRule(QuoteJoinConfig(escape_quotes=False))
        errors, warnings = rule.check(Path("test.yaml"), {"values": 'a"b c'})

        assert len(errors) == 1
        assert "malformed" in errors[0]
        assert len(warnings) == 0


class TestValidCaseRule:
    """Test the ValidCaseRule for the optional case field."""

    def setup_method(self):
        """Initialize rule before each test."""
        self.rule = ValidCaseRule()

    @pytest.mark.parametrize("case", ["upper", "lower"])
    def test_known_case_passes(self, case):
        """Test that upper and lower are accepted."""
        errors, warnings = self.rule.check(Path("test.yaml"), {"case": case})

        assert len(errors) == 0

    def test_missing_case_passes(self):
        """Test that case is optional."""
        errors, warnings = self.rule.check(Path("test.yaml"), {"values": "a"})

        assert len(errors) == 0

    def test_unknown_case_fails(self):
        """Test that other values are rejected."""
        errors, warnings = self.rule.check(Path("test.yaml"), {"case": "title"})

        assert len(errors) == 1
        assert "title" in errors[0]


class TestOutputLengthRule:
    """Test the OutputLengthRule against configured limits."""

    def test_short_list_passes(self):
        """Test that a list within the limit passes."""
        rule = OutputLengthRule(QuoteJoinConfig())
        errors, warnings = rule.check(Path("test.yaml"), {"values": "cars class air"})

        assert len(errors) == 0

    def test_long_list_fails(self):
        """Test that a list over max_output_length is an error with both lengths."""
        rule = OutputLengthRule(QuoteJoinConfig(max_output_length=10))
        errors, warnings = rule.check(Path("test.yaml"), {"values": "cars class air"})

        assert len(errors) == 1
        assert "20" in errors[0]
        assert "10" in errors[0]

    def test_length_checked_after_case_change(self):
        """Test that the upper-cased form must also fit."""
        rule = OutputLengthRule(QuoteJoinConfig(max_output_length=3))

        errors, _ = rule.check(Path("test.yaml"), {"values": "\u00df"})
        assert errors == []

        errors, _ = rule.check(Path("test.yaml"), {"values": "\u00df", "case": "upper"})
        assert len(errors) == 1
        assert "length 4 exceeds the maximum of 3" in errors[0]

    def test_long_input_fails(self):
        """Test that raw input over max_input_length is reported too."""
        rule = OutputLengthRule(QuoteJoinConfig(max_input_length=3))
        errors, warnings = rule.check(Path("test.yaml"), {"values": "cars"})

        assert len(errors) == 1
        assert "input" in errors[0]


class TestRoundTripRule:
    """Test the RoundTripRule for well-formed quoted output."""

    def test_plain_tokens_pass(self):
        """Test that ordinary tokens round-trip."""
        rule = RoundTripRule(QuoteJoinConfig())
        errors, warnings = rule.check(Path("test.yaml"), {"values": "cars  class air"})

        assert len(errors) == 0

    def test_escaped_quotes_pass(self):
        """Test that escaped quotes round-trip."""
        rule = RoundTripRule(QuoteJoinConfig(escape_quotes=True))
        errors, warnings = rule.check(Path("test.yaml"), {"values": 'say "hi"'})

        assert len(errors) == 0

    def test_unescaped_quotes_fail(self):
        """Test that unescaped quotes produce a malformed list."""
        rule = RoundTripRule(QuoteJoinConfig(escape_quotes=False))
        errors, warnings = rule.check(Path("test.yaml"), {"values": 'a"b c'})

        assert len(errors) == 1
        assert "malformed" in errors[0]

    def test_length_limit_is_not_this_rules_concern(self):
        """Test that an over-long list still round-trips without error here."""
        rule = RoundTripRule(QuoteJoinConfig(max_output_length=5))
        errors, warnings = rule.check(Path("test.yaml"), {"values": "cars class air"})

        assert len(errors) == 0


class TestListLinter:
    """Test the main ListLinter functionality."""

    def setup_method(self):
        """Initialize linter before each test."""
        self.linter = ListLinter()

    def test_linter_has_all_rules(self):
        """Test that every rule is registered."""
        rule_names = [rule.name for rule in self.linter.rules]
        assert rule_names == [
            "require-values",
            "irregular-spacing",
            "embedded-quotes",
            "valid-case",
            "output-length",
            "round-trip",
        ]

    def test_lint_valid_file(self, tmp_path):
        """Test linting a valid YAML file."""
        path = tmp_path / "good.yaml"
        path.write_text(
            yaml.dump({"name": "GOOD", "description": "Valid list", "values": "a b c"}),
            encoding="utf-8",
        )

        errors, warnings = self.linter.lint_file(path)

        assert len(errors) == 0
        assert len(warnings) == 0

    def test_lint_invalid_file(self, tmp_path):
        """Test linting a file that breaks several rules."""
        path = tmp_path / "bad.yaml"
        path.write_text(
            yaml.dump({"name": "BAD", "values": "", "case": "title"}),
            encoding="utf-8",
        )

        errors, warnings = self.linter.lint_file(path)

        assert len(errors) == 2

    def test_lint_invalid_yaml(self, tmp_path):
        """Test that YAML syntax errors are reported, not raised."""
        path = tmp_path / "broken.yaml"
        path.write_text("values: [a, b\n", encoding="utf-8")

        errors, warnings = self.linter.lint_file(path)

        assert len(errors) == 1
        assert "YAML parsing error" in errors[0]

    def test_lint_non_mapping(self, tmp_path):
        """Test that a YAML file that isn't a mapping is reported."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        errors, warnings = self.linter.lint_file(path)

        assert len(errors) == 1
        assert "expected dictionary" in errors[0]

    def test_linter_uses_given_config(self, tmp_path):
        """Test that the configured limits reach the rules."""
        path = tmp_path / "long.yaml"
        path.write_text(yaml.dump({"values": "cars class air"}), encoding="utf-8")

        errors, warnings = ListLinter(QuoteJoinConfig(max_output_length=10)).lint_file(path)

        assert len(errors) == 1

    def test_lint_all_counts(self, tmp_path):
        """Test that lint_all aggregates every file in the directory."""
        (tmp_path / "a.yaml").write_text(yaml.dump({"values": "a  b"}), encoding="utf-8")
        (tmp_path / "b.yaml").write_text(yaml.dump({"values": ""}), encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

        files_checked, error_count, warning_count, errors, warnings = self.linter.lint_all(
            tmp_path
        )

        assert files_checked == 2
        assert error_count == 1
        assert warning_count == 1

    def test_main_reports_success(self, tmp_path, monkeypatch, capsys):
        """Test that main returns 0 when every file passes."""
        lists_dir = tmp_path / "lists"
        lists_dir.mkdir()
        (lists_dir / "ok.yaml").write_text(yaml.dump({"values": "a b"}), encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert lint_lists.main() == 0
        assert "passed lint checks" in capsys.readouterr().out

    def test_main_reports_failure(self, tmp_path, monkeypatch, capsys):
        """Test that main returns 1 when a file has errors."""
        lists_dir = tmp_path / "lists"
        lists_dir.mkdir()
        (lists_dir / "bad.yaml").write_text(yaml.dump({"values": " "}), encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert lint_lists.main() == 1
        assert "Found 1 error(s)" in capsys.readouterr().out

    def test_main_rejects_bad_config(self, tmp_path, monkeypatch, capsys):
        """Test that an invalid quotelist.yaml stops the linter."""
        (tmp_path / "quotelist.yaml").write_text("empty_policy: skip\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert lint_lists.main() == 1
        assert "Configuration error" in capsys.readouterr().err


class TestExistingLists:
    """Regression test for all lists in the repository."""

    def test_all_existing_lists_pass(self):
        """Test that every list in lists/ passes the linter."""
        root_dir = Path(__file__).parent.parent
        lists_dir = root_dir / "lists"

        if not lists_dir.exists():
            pytest.skip("Lists directory not found")

        linter = ListLinter()
        files_checked, error_count, warning_count, errors, warnings = linter.lint_all(lists_dir)

        assert files_checked > 0
        assert error_count == 0, "\n".join(errors)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
