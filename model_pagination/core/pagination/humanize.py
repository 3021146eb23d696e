"""Human-readable rendering of filter predicate trees.

Operator tokens are enum members, which makes a raw ``where`` mapping awkward
to log or audit: ``{Op.gte: 10}`` serializes as an opaque identity. These
helpers translate a whole tree between the token form and the human form.

Usage:
    from model_pagination.core.pagination import Op, from_human, to_human

    to_human({"age": {Op.gte: 18}})
    # {"age": {"greater then or equal": 18}}

    from_human({"age": {"greater then or equal": 18}})
    # {"age": {Op.gte: 18}}

Keys are visited field names first, then operator keys, each group in its
original order. The position of a key in that combined order is used to label
operator tokens outside the vocabulary (``<unknown3>``), so nothing is dropped.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from typing import Any, TypeAlias

from model_pagination.core.pagination.operators import (
    DEHUMANIZED_OPERATORS,
    HUMANIZED_OPERATORS,
    Op,
)

PredicateTree: TypeAlias = Mapping[Hashable, Any]


def _ordered_keys(tree: Mapping[Hashable, Any]) -> list[Hashable]:
    fields = [key for key in tree if isinstance(key, str)]
    operators = [key for key in tree if not isinstance(key, str)]
    return [*fields, *operators]


def _humanize_key(key: Hashable, index: int) -> Hashable:
    if isinstance(key, str):
        return key
    if isinstance(key, Op):
        return HUMANIZED_OPERATORS[key]
    return f"<unknown{index}>"


def _dehumanize_key(key: Hashable, _index: int) -> Hashable:
    if isinstance(key, str):
        return DEHUMANIZED_OPERATORS.get(key, key)
    return key


def _translate(
    tree: Mapping[Hashable, Any] | None,
    rename: Callable[[Hashable, int], Hashable],
) -> dict[Hashable, Any] | None:
    if tree is None:
        return None

    def convert(value: Any) -> Any:
        if value is None:
            return value
        if isinstance(value, list):
            return [convert(item) for item in value]
        if isinstance(value, tuple):
            return tuple(convert(item) for item in value)
        if isinstance(value, Mapping):
            return _translate(value, rename)
        return value

    return {
        rename(key, index): convert(tree[key])
        for index, key in enumerate(_ordered_keys(tree))
    }


def to_human(tree: PredicateTree | None) -> dict[Hashable, Any] | None:
    """Replace operator tokens in a predicate tree with their human names.

    Args:
        tree: Predicate tree keyed by field names and ``Op`` tokens, or None

    Returns:
        A new tree with the same shape, or None when ``tree`` is None.
        Tokens outside the vocabulary become ``<unknown{index}>``.
    """
    return _translate(tree, _humanize_key)


def from_human(tree: PredicateTree | None) -> dict[Hashable, Any] | None:
    """Replace human operator names in a predicate tree with their tokens.

    Keys that are not a known human name are kept as they are. The name
    ``"like"`` always resolves to ``Op.like``.

    Args:
        tree: Predicate tree produced by :func:`to_human` (or written by hand)

    Returns:
        A new tree with the same shape, or None when ``tree`` is None.
    """
    return _translate(tree, _dehumanize_key)


__all__ = ["PredicateTree", "from_human", "to_human"]
