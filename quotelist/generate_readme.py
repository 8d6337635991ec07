#!/usr/bin/env python3
"""
Generate README.md from list YAML files.

This script:
1. Reads all .yaml files in the lists directory
2. Validates them against the list schema
3. Generates README.md with each list and its quoted IN-list form
"""

import sys
from pathlib import Path
from typing import Any, Dict, List

import yaml

from quotelist.config import ValidationError, find_config
from quotelist.quoter import (
    CASES,
    QuoteJoinConfig,
    QuoterError,
    apply_case,
    check_output_length,
    quote_join,
)

START_MARKER = "<!-- AUTO-GENERATED CONTENT START -->"
END_MARKER = "<!-- AUTO-GENERATED CONTENT END -->"


def validate_list_yaml(data: Dict[str, Any], filename: str) -> None:
    """
    Validate that a YAML file meets the list schema.

    Required fields:
    - name: string
    - description: string
    - values: string

    Optional fields:
    - case: upper or lower
    - notes: string

    Args:
        data: Parsed YAML data
        filename: Name of the file being validated (for error messages)

    Raises:
        ValidationError: If validation fails
    """
    required_fields = ['name', 'description', 'values']
    optional_fields = ['case', 'notes']

    non_string_keys = [key for key in data if not isinstance(key, str)]
    if non_string_keys:
        raise ValidationError(
            f"{filename}: Field names must be strings (got {', '.join(repr(k) for k in non_string_keys)})"
        )

    # Check required fields exist and are not empty
    for field in required_fields:
        if field not in data:
            raise ValidationError(f"{filename}: Missing required field '{field}'")
        if data[field] is None or (isinstance(data[field], str) and not data[field].strip()):
            raise ValidationError(f"{filename}: Required field '{field}' is empty")

    # Validate field types
    for field in required_fields:
        if not isinstance(data[field], str):
            raise ValidationError(f"{filename}: Field '{field}' must be a string")

    if 'case' in data and data['case'] not in CASES:
        raise ValidationError(f"{filename}: Field 'case' must be one of {', '.join(CASES)}")

    if 'notes' in data and not isinstance(data['notes'], str):
        raise ValidationError(f"{filename}: Field 'notes' must be a string")

    # Check for unexpected fields
    all_allowed_fields = set(required_fields + optional_fields)
    unexpected_fields = set(data.keys()) - all_allowed_fields
    if unexpected_fields:
        print(f"Warning: {filename} contains unexpected fields: {', '.join(sorted(unexpected_fields))}")


def find_duplicate_names(lists: List[Dict[str, Any]]) -> List[str]:
    """
    Find list names used by more than one file.

    Names are compared case-insensitively since they usually end up as
    upper-cased identifiers.

    Args:
        lists: List dictionaries with 'name' and 'filename'

    Returns:
        List of duplicate descriptions (empty if names are unique)
    """
    seen: Dict[str, List[str]] = {}
    for entry in lists:
        seen.setdefault(entry['name'].lower(), []).append(entry['filename'])

    return [
        f"{key.upper()} ({', '.join(filenames)})"
        for key, filenames in seen.items()
        if len(filenames) > 1
    ]


def load_and_validate_lists(root_dir: Path, config: QuoteJoinConfig = None) -> List[Dict[str, Any]]:
    """
    Load all .yaml files from the lists directory, validate and quote them.

    Args:
        root_dir: Path to the repository root
        config: quote_join settings (defaults to QuoteJoinConfig())

    Returns:
        List of validated list dictionaries with 'filename' and 'quoted' added

    Raises:
        ValidationError: If any file fails validation
    """
    if config is None:
        config = QuoteJoinConfig()

    lists = []
    lists_dir = Path(root_dir) / 'lists'
    yaml_files = sorted(lists_dir.glob('*.yaml'))

    if not yaml_files:
        print("Warning: No .yaml files found in lists directory")
        return lists

    for yaml_file in yaml_files:
        try:
            with open(yaml_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError(f"{yaml_file.name}: Invalid YAML syntax - {e}")
        except OSError as e:
            raise ValidationError(f"{yaml_file.name}: Error reading file - {e}")

        if data is None:
            raise ValidationError(f"{yaml_file.name}: File is empty")
        if not isinstance(data, dict):
            raise ValidationError(f"{yaml_file.name}: Invalid YAML structure (expected dictionary)")

        validate_list_yaml(data, yaml_file.name)

        try:
            quoted = apply_case(quote_join(data['values'], config), data.get('case'))
            check_output_length(quoted, config)
        except QuoterError as e:
            raise ValidationError(f"{yaml_file.name}: Cannot quote values - {e}")

        data['filename'] = yaml_file.name
        data['quoted'] = quoted
        lists.append(data)

        print(f"✓ Validated {yaml_file.name}")

    duplicates = find_duplicate_names(lists)
    if duplicates:
        duplicate_desc = "\n".join(f"  - {d}" for d in duplicates)
        raise ValidationError(f"Duplicate list names detected:\n{duplicate_desc}")

    return lists


def generate_list_section(lists: List[Dict[str, Any]]) -> str:
    """
    Generate markdown with a list summary and detailed expandable sections.

    Args:
        lists: List of validated list dictionaries (with 'quoted')

    Returns:
        Markdown string with quick reference and detailed sections
    """
    if not lists:
        return "_No lists available yet._\n"

    sorted_lists = sorted(lists, key=lambda entry: entry['name'].lower())

    lines = ["### Quick Reference\n"]
    for entry in sorted_lists:
        name = entry['name']
        description_clean = ' '.join(entry['description'].split())
        # GitHub auto-generates anchors from headers
        anchor = name.lower().replace(' ', '-')
        lines.append(f"- **[{name}](#{anchor})** - {description_clean}")

    lines.append("")
    lines.append("### Detailed Lists\n")

    for entry in sorted_lists:
        name = entry['name']
        description_clean = ' '.join(entry['description'].split())
        values_clean = ' '.join(entry['values'].split())
        quoted = entry['quoted']
        notes = entry.get('notes', '')

        lines.append("<details>")
        lines.append(f"<summary><strong>{name}</strong></summary>\n")

        lines.append(f"### {name}\n")

        lines.append("**Description**\n")
        lines.append("```")
        lines.append(description_clean)
        lines.append("```\n")

        lines.append("**Values**\n")
        lines.append("```")
        lines.append(values_clean)
        lines.append("```\n")

        lines.append("**Quoted**\n")
        lines.append("```")
        lines.append(quoted)
        lines.append("```\n")

        lines.append("**Usage**\n")
        lines.append("```sql")
        lines.append(f"WHERE column IN ({quoted})")
        lines.append("```\n")

        if notes:
            notes_clean = ' '.join(notes.strip().split())
            lines.append("**Notes**\n")
            lines.append("```")
            lines.append(notes_clean)
            lines.append("```\n")

        lines.append("</details>\n")

    return '\n'.join(lines)


def generate_readme(template_path: Path, lists: List[Dict[str, Any]]) -> str:
    """Render the template with the list section between its markers.

    Raises:
        ValueError: If the template lacks either AUTO-GENERATED CONTENT marker
    """
    template = Path(template_path).read_text(encoding='utf-8')

    head, start, rest = template.partition(START_MARKER)
    _, end, tail = rest.partition(END_MARKER)
    if not start or not end:
        raise ValueError(f"{Path(template_path).name}: Template missing AUTO-GENERATED CONTENT markers")

    body = "\n".join([
        "<!-- Edit lists/*.yaml and run generate-readme instead of editing this section -->",
        "",
        generate_list_section(lists),
    ])
    return f"{head}{START_MARKER}\n{body}\n{END_MARKER}{tail}"


def main(root_dir: Path = None):
    """Main entry point."""
    if root_dir is None:
        root_dir = Path.cwd()
    template_path = root_dir / '.readme-template.md'
    readme_path = root_dir / 'README.md'

    try:
        config = find_config(root_dir)

        print("Loading and validating list files...")
        lists = load_and_validate_lists(root_dir, config)
        print(f"\nFound {len(lists)} valid list(s)")

        print("\nGenerating README from template...")
        readme_content = generate_readme(template_path, lists)

        with open(readme_path, 'w', encoding='utf-8') as f:
            f.write(readme_content)

        print("✓ README.md generated successfully")
        return 0

    except ValidationError as e:
        print(f"❌ Validation Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
