"""Depth-first search over untyped JSON trees.

Pages often embed their application state as one big JSON document whose
layout changes between releases. Instead of hard-coding a path into that
document, we *sniff* for shapes:

- a term list is any list whose **first** element is a mapping with both a
  ``"word"`` and a ``"definition"`` key;
- a title is ``set.title`` or a plain ``title`` string found anywhere.

Search order
------------
Traversal is depth-first, left to right, first match wins; results from
different branches are never merged. For mappings, the values under
``"terms"`` and ``"studiableItems"`` are searched before any other key.

Preconditions
-------------
The tree must be acyclic (anything produced by :func:`json.loads` is). There
is no cycle or depth guard; a cyclic structure will recurse until Python's
recursion limit is hit.

Both functions are pure and never raise for "not found": an empty list and
``None`` are ordinary answers.
"""

from __future__ import annotations

from typing import Any, TypeAlias

from cardharvest.core.contracts.cards import TermPair

#: Anything :func:`json.loads` can return.
JsonValue: TypeAlias = dict[str, Any] | list[Any] | str | int | float | bool | None

_PRIORITY_KEYS: tuple[str, ...] = ("terms", "studiableItems")


def _as_text(value: Any) -> str:
    """Render a leaf value as text; ``None`` and missing become ``""``."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _looks_like_term_list(node: list[Any]) -> bool:
    first = node[0] if node else None
    return isinstance(first, dict) and "word" in first and "definition" in first


def _to_term_pair(item: Any) -> TermPair:
    # Only the first element was sniffed; later ones may be anything.
    if not isinstance(item, dict):
        return TermPair(term="", definition="")
    return TermPair(term=_as_text(item.get("word")), definition=_as_text(item.get("definition")))


def find_terms_in_object(node: JsonValue) -> list[TermPair]:
    """Return the first term list found in ``node``, or ``[]``.

    Parameters
    ----------
    node:
        A decoded JSON value.

    Returns
    -------
    list[TermPair]
        One pair per element of the matched list (same length, same order).
        Elements lacking ``word``/``definition`` map to empty strings.

    Examples
    --------
    >>> find_terms_in_object({"a": [{"word": "x", "definition": "y"}]})
    [TermPair(term='x', definition='y')]
    >>> find_terms_in_object({"a": 1})
    []
    """
    if isinstance(node, list):
        if _looks_like_term_list(node):
            return [_to_term_pair(item) for item in node]
        for item in node:
            found = find_terms_in_object(item)
            if found:
                return found
        return []

    if isinstance(node, dict):
        for key in _PRIORITY_KEYS:
            if key in node:
                found = find_terms_in_object(node[key])
                if found:
                    return found
        for value in node.values():
            found = find_terms_in_object(value)
            if found:
                return found

    return []


def find_title_in_object(node: JsonValue) -> str | None:
    """Return the first set title found in ``node``, or ``None``.

    At any mapping, a nested ``set.title`` beats a sibling ``title``; both
    beat anything found deeper in the tree.

    Examples
    --------
    >>> find_title_in_object({"title": "Outer", "set": {"title": "Inner"}})
    'Inner'
    >>> find_title_in_object([{"x": {"title": "Deep"}}])
    'Deep'
    """
    if isinstance(node, dict):
        nested_set = node.get("set")
        if isinstance(nested_set, dict):
            set_title = nested_set.get("title")
            if isinstance(set_title, str) and set_title:
                return set_title
        title = node.get("title")
        if isinstance(title, str) and title:
            return title
        children: list[Any] = list(node.values())
    elif isinstance(node, list):
        children = node
    else:
        return None

    for child in children:
        found = find_title_in_object(child)
        if found:
            return found
    return None


__all__ = ["JsonValue", "find_terms_in_object", "find_title_in_object"]
