"""
Flattening of dictionary glossaries.

A glossary item is a plain string, a list of items, or a structured-content
node ``{"type": "structured-content", "content": ...}``. Structured content is
itself a string, a list, or an HTML-like tag node::

    {"tag": "ul", "data": {"content": "glossary"}, "content": [...]}

Only strings below a ``glossary`` node count as meanings. Example sentences
live below ``examples`` / ``example-sentence`` nodes; their text is rendered
with ruby annotations turned into bracket furigana (`` 食[た]べる``).
"""

import re
from typing import Any, List, Optional, Tuple

EXAMPLE_NODES = ("examples", "example-sentence")

_BRACKET_SPACE_PATTERN = re.compile(r"\] ")


# =============================================================================
# Shape checks
# =============================================================================

def is_structured_content(value: Any) -> bool:
    """Check for a ``{"type": ..., "content": ...}`` glossary node."""
    return (
        isinstance(value, dict)
        and isinstance(value.get("type"), str)
        and "content" in value
        and is_content(value["content"])
    )


def is_content(value: Any) -> bool:
    """Check that a value is valid structured content."""
    if isinstance(value, str):
        return True
    if isinstance(value, list):
        return all(is_content(item) for item in value)
    if isinstance(value, dict):
        return "content" not in value or value["content"] is None or is_content(value["content"])
    return False


def is_glossary(value: Any) -> bool:
    """Check that a value is a valid glossary item."""
    if isinstance(value, str):
        return True
    if isinstance(value, list):
        return all(is_glossary(item) for item in value)
    return is_structured_content(value)


# =============================================================================
# Meanings
# =============================================================================

def get_glossary(item: Any) -> List[str]:
    """
    Extract the meanings of a glossary item.

    Top-level strings are meanings as they are. Inside structured content a
    string only counts below a node whose ``data.content`` is ``glossary``;
    an ``examples`` node switches collection off again.

    Example:
        >>> get_glossary(["to eat", {"type": "structured-content", "content": {
        ...     "tag": "li", "data": {"content": "glossary"}, "content": "to live on"}}])
        ['to eat', 'to live on']
    """
    if isinstance(item, str):
        return [item]
    if isinstance(item, list):
        return [meaning for child in item for meaning in get_glossary(child)]
    return _content_glossary(item["content"], False)


def _content_glossary(content: Any, in_glossary: bool) -> List[str]:
    if isinstance(content, str):
        return [content] if in_glossary else []
    if isinstance(content, list):
        return [meaning for child in content for meaning in _content_glossary(child, in_glossary)]

    inner = content.get("content")
    if inner is None:
        return []

    node = _data_content(content)
    if node == "glossary":
        return _content_glossary(inner, True)
    if node == "examples":
        return _content_glossary(inner, False)
    return _content_glossary(inner, in_glossary)


# =============================================================================
# Examples
# =============================================================================

def get_example(item: Any) -> List[Tuple[str, str]]:
    """
    Extract ``(japanese, english)`` example pairs from a glossary item.

    An example node with exactly two children yields the rendered text of
    both; any other example node yields its whole text with no translation.
    """
    if isinstance(item, str):
        return []
    if isinstance(item, list):
        return [pair for child in item for pair in get_example(child)]
    return _content_example(item["content"])


def _content_example(content: Any) -> List[Tuple[str, str]]:
    if isinstance(content, str):
        return []
    if isinstance(content, list):
        return [pair for child in content for pair in _content_example(child)]

    inner = content.get("content")
    if inner is None:
        return []

    if _data_content(content) in EXAMPLE_NODES:
        if isinstance(inner, list) and len(inner) == 2:
            return [(_clean(get_text(inner[0])), _clean(get_text(inner[1])))]
        return [(_clean(get_text(inner)), "")]

    return _content_example(inner)


def _clean(text: str) -> str:
    return _BRACKET_SPACE_PATTERN.sub("]", text.strip())


# =============================================================================
# Text rendering
# =============================================================================

def get_text(content: Any) -> str:
    """
    Render structured content as text.

    Attribution footnotes are dropped, example keywords are wrapped in
    ``<b>`` and two-child ruby nodes become `` base[reading]``.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(get_text(child) for child in content)

    node = _data_content(content)
    if node == "attribution-footnote":
        return ""

    inner = content.get("content")
    if inner is None:
        return ""

    if node == "example-keyword":
        return f"<b>{get_text(inner)}</b>"

    if content.get("tag") == "ruby" and isinstance(inner, list) and len(inner) == 2:
        return f" {get_text(inner[0])}[{get_text(inner[1])}]"

    return get_text(inner)


def _data_content(node: dict) -> Optional[str]:
    data = node.get("data")
    if not isinstance(data, dict):
        return None
    value = data.get("content")
    return value if isinstance(value, str) else None
