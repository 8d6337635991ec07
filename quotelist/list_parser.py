#!/usr/bin/env python3
"""
Parser for quoted, comma-joined token lists.

This module provides:
- QuotedListParser: A pyparsing-based parser for "t1","t2",...,"tn" lists
- split_quoted: Convenience function returning the unescaped tokens

The parser supports:
- Double-quoted tokens with doubled-quote escaping ("" within a token is a single ")
- Empty tokens ("")
- Whitespace around the separating commas
"""

from typing import List

from pyparsing import DelimitedList, ParseResults, Regex


class QuotedListParser:
    """Parser for quoted lists using pyparsing."""

    def __init__(self):
        """Initialize the parser with grammar definition."""
        # Match double-quoted tokens: opening ", content (with "" escapes), closing "
        # Pattern: " (?: [^"] | "" )* "
        quoted_token = Regex(r'"(?:[^"]|"")*"')

        def process_token(t):
            """Strip the surrounding quotes and unescape doubled quotes."""
            return t[0][1:-1].replace('""', '"')

        quoted_token.set_parse_action(process_token)

        # Tabs inside a token are content, so don't let pyparsing expand them
        self.grammar = DelimitedList(quoted_token, delim=",").parse_with_tabs()

    def parse(self, text: str) -> ParseResults:
        """
        Parse a quoted list.

        Args:
            text: Quoted list such as "a","b"

        Returns:
            ParseResults holding one unescaped string per token

        Raises:
            ParseException: If text is not a well-formed quoted list
        """
        return self.grammar.parse_string(text.strip(), parse_all=True)

    def split(self, text: str) -> List[str]:
        """Return the unescaped tokens of text, or [] when text is blank."""
        if not text.strip():
            return []
        return list(self.parse(text))


_PARSER = QuotedListParser()


def split_quoted(text: str) -> List[str]:
    """
    Split a quote_join result back into its tokens.

    Args:
        text: Quoted list such as "cars","class","air"

    Returns:
        List of tokens, e.g. ["cars", "class", "air"]

    Raises:
        ParseException: If text is not a well-formed quoted list
    """
    return _PARSER.split(text)
