"""Template token parsing utilities."""

import re
from typing import Any

# {{ path }} - the inner text may not contain braces, so tokens never nest
TEMPLATE_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")


def extract_templates(text: str) -> list[str]:
    """Extract all {{ }} template paths from text, in order, with repeats.

    Args:
        text: Text to search

    Returns:
        List of trimmed inner paths (without {{ }})
    """
    return [match.group(1).strip() for match in TEMPLATE_PATTERN.finditer(text)]


def extract_variables(text: Any) -> list[str]:
    """Extract the unique template paths referenced by a string.

    Args:
        text: String to search; any other value yields no variables

    Returns:
        Unique paths in order of first appearance
    """
    if not isinstance(text, str) or not text:
        return []

    variables: list[str] = []
    for path in extract_templates(text):
        if path not in variables:
            variables.append(path)
    return variables


def has_templates(text: Any) -> bool:
    """Check if a string contains any {{ }} tokens.

    Args:
        text: Value to check

    Returns:
        True if templates found
    """
    return isinstance(text, str) and bool(TEMPLATE_PATTERN.search(text))


def extract_all_references(value: Any) -> list[str]:
    """Extract unique template paths from a value (recursively).

    Args:
        value: str, dict, list, or primitive

    Returns:
        Unique paths in order of first appearance
    """
    references: list[str] = []

    def collect(item: Any) -> None:
        if isinstance(item, str):
            for path in extract_variables(item):
                if path not in references:
                    references.append(path)
        elif isinstance(item, dict):
            for v in item.values():
                collect(v)
        elif isinstance(item, (list, tuple)):
            for v in item:
                collect(v)

    collect(value)
    return references
