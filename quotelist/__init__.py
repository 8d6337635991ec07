"""
quotelist package.

This package turns whitespace-separated token lists into quoted IN-lists:
- quoter: Core quote_join function, its settings and errors
- list_parser: Parsing quoted lists back into tokens
- config: Loading settings from quotelist.yaml
- lint_lists: Validates list YAML files
- generate_readme: Generates README from list YAML files
- cli: The quote-join command
"""
