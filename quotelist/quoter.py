#!/usr/bin/env python3
"""
Quoter module for building SQL IN-list literals.

This module provides:
- quote_join: Turn a whitespace-separated token list into "t1","t2",...,"tn"
- QuoteJoinConfig: Length limits and edge-case policies for quote_join
- normalize_whitespace / tokenize: The preprocessing steps quote_join uses
- apply_case: Optional caller-side case transformation of a result

Example:
    >>> quote_join("cars  class air")
    '"cars","class","air"'
"""

from dataclasses import dataclass
from typing import List, Optional

EMPTY_POLICIES = ("empty", "quotes", "error")
CASES = ("upper", "lower")

DEFAULT_MAX_OUTPUT_LENGTH = 200
DEFAULT_MAX_INPUT_LENGTH = 32767

TokenStream = List[str]


class QuoterError(Exception):
    """Base class for quote_join failures."""


class EmptyInput(QuoterError):
    """Raised when the input holds no tokens and the empty policy is 'error'."""


class LengthExceeded(QuoterError):
    """Raised when the input or the quoted result is longer than its configured limit."""

    def __init__(self, subject: str, length: int, limit: int):
        self.subject = subject
        self.length = length
        self.limit = limit
        super().__init__(f"{subject} length {length} exceeds the maximum of {limit} characters")


def _check_limit(name: str, value: Optional[int]) -> None:
    if value is None:
        return
    # bool is an int subclass, but "max_output_length: true" is never intended
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer or None (got {value!r})")
    if value <= 0:
        raise ValueError(f"{name} must be positive (got {value})")


@dataclass(frozen=True)
class QuoteJoinConfig:
    """
    Settings for quote_join.

    Attributes:
        max_output_length: Maximum length of the quoted result, or None for no cap
        max_input_length: Maximum length of the raw input, or None for no cap
        empty_policy: What an input without tokens produces:
            "empty" returns an empty string, "quotes" returns a lone pair
            of double quotes, "error" raises EmptyInput
        escape_quotes: Double any " found inside a token
    """

    max_output_length: Optional[int] = DEFAULT_MAX_OUTPUT_LENGTH
    max_input_length: Optional[int] = DEFAULT_MAX_INPUT_LENGTH
    empty_policy: str = "empty"
    escape_quotes: bool = True

    def __post_init__(self):
        _check_limit("max_output_length", self.max_output_length)
        _check_limit("max_input_length", self.max_input_length)
        if self.empty_policy not in EMPTY_POLICIES:
            raise ValueError(
                f"empty_policy must be one of {', '.join(EMPTY_POLICIES)} "
                f"(got {self.empty_policy!r})"
            )
        if not isinstance(self.escape_quotes, bool):
            raise ValueError(f"escape_quotes must be a boolean (got {self.escape_quotes!r})")


def normalize_whitespace(text: str) -> str:
    """
    Collapse every run of whitespace into a single space.

    Tabs, newlines and other whitespace count as separators too. Leading and
    trailing whitespace is dropped, so "  a   b  c " becomes "a b c".

    Args:
        text: Freeform token list

    Returns:
        The tokens separated by single spaces
    """
    return " ".join(text.split())


def tokenize(text: str) -> TokenStream:
    """Return the tokens of text in order. No token is empty."""
    return text.split()


def _quote(token: str, escape_quotes: bool) -> str:
    if escape_quotes:
        token = token.replace('"', '""')
    return f'"{token}"'


def quote_join(text: str, config: Optional[QuoteJoinConfig] = None) -> str:
    """
    Quote every token in text and join the quoted tokens with commas.

    The result is ready to be placed inside a SQL IN(...) predicate:
    "cars class air" becomes "cars","class","air".

    Args:
        text: Whitespace-separated tokens; spacing may be irregular
        config: Limits and policies (defaults to QuoteJoinConfig())

    Returns:
        The quoted, comma-joined token list. For an input without tokens,
        what config.empty_policy prescribes.

    Raises:
        EmptyInput: If there are no tokens and empty_policy is "error"
        LengthExceeded: If the input or the result is longer than allowed
    """
    if config is None:
        config = QuoteJoinConfig()

    if config.max_input_length is not None and len(text) > config.max_input_length:
        raise LengthExceeded("input", len(text), config.max_input_length)

    tokens = tokenize(text)
    if not tokens:
        if config.empty_policy == "error":
            raise EmptyInput("input contains no tokens")
        return '""' if config.empty_policy == "quotes" else ""

    result = ",".join(_quote(token, config.escape_quotes) for token in tokens)
    check_output_length(result, config)
    return result


def check_output_length(text: str, config: QuoteJoinConfig) -> None:
    """Raise LengthExceeded if text is longer than config.max_output_length.

    Callers that post-process a quote_join result (apply_case can turn one
    character into two) check the final text again with this.
    """
    if config.max_output_length is not None and len(text) > config.max_output_length:
        raise LengthExceeded("output", len(text), config.max_output_length)


def apply_case(text: str, case: Optional[str]) -> str:
    """
    Apply a caller-chosen case transformation to a quote_join result.

    Args:
        text: Text to transform
        case: None to leave text unchanged, "upper" or "lower"

    Returns:
        The transformed text
    """
    if case is None:
        return text
    if case == "upper":
        return text.upper()
    if case == "lower":
        return text.lower()
    raise ValueError(f"case must be one of {', '.join(CASES)} or None (got {case!r})")
