#!/usr/bin/env python3
"""
List YAML Linter

Validates the token lists in lists/*.yaml against defined rules so every
list produces a well-formed quoted IN-list. Designed to be extensible for
future validation rules.

Usage:
    lint-lists
    python -m quotelist.lint_lists

Exit codes:
    0: All checks passed
    1: One or more lint errors found
"""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pyparsing import ParseException

from quotelist.config import ValidationError, find_config
from quotelist.list_parser import QuotedListParser
from quotelist.quoter import (
    CASES,
    LengthExceeded,
    QuoteJoinConfig,
    apply_case,
    check_output_length,
    normalize_whitespace,
    quote_join,
    tokenize,
)


def _values(data: Dict[str, Any]) -> Optional[str]:
    """Return the values field if it is a string, else None."""
    values = data.get("values")
    return values if isinstance(values, str) else None


class LintRule:
    """Base class for lint rules."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description

    def check(self, file_path: Path, data: Dict[str, Any]) -> Tuple[List[str], List[str]]:
        """
        Check the rule against a YAML file.

        Args:
            file_path: Path to the YAML file
            data: Parsed YAML data

        Returns:
            Tuple of (errors, warnings) - both are lists of messages
        """
        raise NotImplementedError("Subclasses must implement check()")


class RequireValuesRule(LintRule):
    """Rule: The values field must contain at least one token."""

    def __init__(self):
        super().__init__(
            name="require-values", description="Values field must contain at least one token"
        )

    def check(self, file_path: Path, data: Dict[str, Any]) -> Tuple[List[str], List[str]]:
        errors = []
        warnings = []

        if "values" not in data:
            errors.append(f"{file_path}: Missing 'values' field.")
            return errors, warnings

        values = _values(data)
        if values is None:
            errors.append(
                f"{file_path}: Field 'values' must be a string of whitespace-separated tokens."
            )
        elif not tokenize(values):
            errors.append(
                f"{file_path}: Field 'values' is empty. "
                f"Provide at least one token (e.g., 'cars class air')."
            )

        return errors, warnings


class IrregularSpacingRule(LintRule):
    """Rule: Values should already be separated by single spaces."""

    def __init__(self):
        super().__init__(
            name="irregular-spacing",
            description="Values should be separated by single spaces without padding",
        )

    def check(self, file_path: Path, data: Dict[str, Any]) -> Tuple[List[str], List[str]]:
        errors = []
        warnings = []

        values = _values(data)
        if values is None:
            return errors, warnings  # Caught by require-values

        normalized = normalize_whitespace(values)
        # Block scalars end with a newline; that alone isn't worth a warning
        if normalized and values.rstrip("\n") != normalized:
            warnings.append(
                f"{file_path}: Values contain irregular whitespace and will be "
                f"normalized to '{normalized}'."
            )

        return errors, warnings


class EmbeddedQuotesRule(LintRule):
    """Rule: Tokens should not contain double-quote characters."""

    def __init__(self, config: QuoteJoinConfig):
        super().__init__(
            name="embedded-quotes",
            description="Tokens should not contain double-quote characters",
        )
        self.config = config

    def check(self, file_path: Path, data: Dict[str, Any]) -> Tuple[List[str], List[str]]:
        errors = []
        warnings = []

        values = _values(data)
        if values is None:
            return errors, warnings

        quoted_tokens = [token for token in tokenize(values) if '"' in token]
        if not quoted_tokens:
            return errors, warnings

        listing = ", ".join(quoted_tokens)
        if self.config.escape_quotes:
            warnings.append(
                f"{file_path}: Token(s) {listing} contain '\"' and will be escaped by doubling."
            )
        else:
            errors.append(
                f"{file_path}: Token(s) {listing} contain '\"' but escape_quotes is disabled. "
                f"The quoted list would be malformed."
            )

        return errors, warnings


class ValidCaseRule(LintRule):
    """Rule: The optional case field must name a known transformation."""

    def __init__(self):
        super().__init__(name="valid-case", description="Case field must be 'upper' or 'lower'")

    def check(self, file_path: Path, data: Dict[str, Any]) -> Tuple[List[str], List[str]]:
        errors = []
        warnings = []

        if "case" in data and data["case"] not in CASES:
            errors.append(
                f"{file_path}: Unknown case '{data['case']}'. Use one of: {', '.join(CASES)}."
            )

        return errors, warnings


class OutputLengthRule(LintRule):
    """Rule: The quoted list must fit within the configured limits."""

    def __init__(self, config: QuoteJoinConfig):
        super().__init__(
            name="output-length",
            description="Quoted list must fit within max_output_length",
        )
        self.config = config

    def check(self, file_path: Path, data: Dict[str, Any]) -> Tuple[List[str], List[str]]:
        errors = []
        warnings = []

        values = _values(data)
        if values is None or not tokenize(values):
            return errors, warnings

        try:
            quoted = quote_join(values, self.config)
            # Invalid case values are reported by valid-case
            if data.get("case") in CASES:
                check_output_length(apply_case(quoted, data["case"]), self.config)
        except LengthExceeded as e:
            errors.append(
                f"{file_path}: {e.subject.capitalize()} is too long: {e}. "
                f"Split the list or raise the limit in quotelist.yaml."
            )

        return errors, warnings


class RoundTripRule(LintRule):
    """Rule: The quoted list must parse back to the original tokens."""

    def __init__(self, config: QuoteJoinConfig):
        super().__init__(
            name="round-trip",
            description="Quoted list must parse back to the original tokens",
        )
        self.config = config
        self.parser = QuotedListParser()

    def check(self, file_path: Path, data: Dict[str, Any]) -> Tuple[List[str], List[str]]:
        errors = []
        warnings = []

        values = _values(data)
        if values is None or not tokenize(values):
            return errors, warnings

        # Length problems belong to output-length
        unlimited = replace(self.config, max_output_length=None, max_input_length=None)
        quoted = quote_join(values, unlimited)

        try:
            parsed = self.parser.split(quoted)
        except ParseException as e:
            errors.append(
                f"{file_path}: Quoted list is malformed at position {e.loc}: {e.msg}\n"
                f"  Output: {quoted}"
            )
            return errors, warnings

        if parsed != tokenize(values):
            errors.append(
                f"{file_path}: Quoted list parses to {parsed} instead of {tokenize(values)}."
            )

        return errors, warnings


class ListLinter:
    """Main linter class that runs all validation rules."""

    def __init__(self, config: Optional[QuoteJoinConfig] = None):
        if config is None:
            config = QuoteJoinConfig()
        self.config = config
        self.rules: List[LintRule] = [
            RequireValuesRule(),
            IrregularSpacingRule(),
            EmbeddedQuotesRule(config),
            ValidCaseRule(),
            OutputLengthRule(config),
            RoundTripRule(config),
        ]

    def lint_file(self, file_path: Path) -> Tuple[List[str], List[str]]:
        """
        Lint a single YAML file.

        Args:
            file_path: Path to the YAML file to lint

        Returns:
            Tuple of (errors, warnings)
        """
        errors = []
        warnings = []

        try:
            with open(file_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            errors.append(f"{file_path}: YAML parsing error: {e}")
            return errors, warnings
        except OSError as e:
            errors.append(f"{file_path}: Error reading file: {e}")
            return errors, warnings

        if not isinstance(data, dict):
            errors.append(f"{file_path}: Invalid YAML structure (expected dictionary)")
            return errors, warnings

        # Run all rules
        for rule in self.rules:
            rule_errors, rule_warnings = rule.check(file_path, data)
            errors.extend(rule_errors)
            warnings.extend(rule_warnings)

        return errors, warnings

    def lint_all(self, directory: Path = None) -> Tuple[int, int, int, List[str], List[str]]:
        """
        Lint all YAML files in the lists directory.

        Args:
            directory: Directory to search for YAML files (defaults to lists/ subdirectory)

        Returns:
            Tuple of (files_checked, error_count, warning_count, errors, warnings)
        """
        if directory is None:
            directory = Path.cwd() / "lists"

        yaml_files = sorted(Path(directory).glob("*.yaml"))

        all_errors = []
        all_warnings = []
        files_checked = 0

        for yaml_file in yaml_files:
            files_checked += 1
            errors, warnings = self.lint_file(yaml_file)
            all_errors.extend(errors)
            all_warnings.extend(warnings)

        return files_checked, len(all_errors), len(all_warnings), all_errors, all_warnings


def main():
    """Main entry point for the linter."""
    print("🔍 Linting list YAML files...")
    print()

    try:
        config = find_config()
    except (ValidationError, ValueError) as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 1

    linter = ListLinter(config)

    # Print registered rules
    print(f"Running {len(linter.rules)} lint rule(s):")
    for rule in linter.rules:
        print(f"  • {rule.name}: {rule.description}")
    print()

    files_checked, error_count, warning_count, errors, warnings = linter.lint_all()

    # Report warnings
    if warning_count > 0:
        print(f"⚠️  Found {warning_count} warning(s):")
        print()
        for warning in warnings:
            print(f"  {warning}")
        print()

    # Report results
    if error_count == 0:
        if warning_count > 0:
            print(f"✅ All {files_checked} file(s) passed lint checks (with warnings above)")
        else:
            print(f"✅ All {files_checked} file(s) passed lint checks!")
        return 0
    print(f"❌ Found {error_count} error(s) in {files_checked} file(s):")
    print()
    for error in errors:
        print(f"  {error}")
    print()
    print("Please fix the errors above and run the linter again.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
