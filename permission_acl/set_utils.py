"""Ordered set helpers over plain lists.

Mutating helpers never modify their input: they return a new list when
something changes and the same list otherwise. Lists handed out earlier
(for example in an export record) therefore never change underneath
their holder.
"""

from __future__ import annotations

from collections.abc import Iterable


def contains(items: list[str], item: str) -> bool:
    """Check whether item is present."""
    return item in items


def add_unique(items: list[str], item: str) -> list[str]:
    """Return items with item appended, unless already present."""
    if contains(items, item):
        return items
    return [*items, item]


def remove_item(items: list[str], item: str) -> list[str]:
    """Return items without item, or items itself when item is absent."""
    if not contains(items, item):
        return items
    return [existing for existing in items if existing != item]


def unique(items: Iterable[str]) -> list[str]:
    """Copy items into a new list, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))
