"""Operator vocabulary for filter predicate trees.

Predicate trees mix two kinds of mapping keys: field names (plain ``str``)
and operator tokens. Operator tokens are members of the :class:`Op`
enumeration, which does not subclass ``str``, so a token can never
be mistaken for a field called ``"and"`` or ``"in"``.

Example:
    from model_pagination.core.pagination.operators import Op

    where = {
        "status": {Op.in_: ["active", "pending"]},
        Op.or_: [{"rank": {Op.gte: 10}}, {"rank": None}],
    }
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class Op(Enum):
    """Logical and comparison operator tokens."""

    not_ = "not"
    is_ = "is"
    and_ = "and"
    or_ = "or"
    eq = "eq"
    ne = "ne"
    gt = "gt"
    gte = "gte"
    lt = "lt"
    lte = "lte"
    between = "between"
    not_between = "notBetween"
    in_ = "in"
    not_in = "notIn"
    like = "like"
    not_like = "notLike"
    starts_with = "startsWith"
    ends_with = "endsWith"
    substring = "substring"
    regexp = "regexp"
    not_regexp = "notRegexp"
    col = "col"

    def __repr__(self) -> str:
        return f"Op.{self.name}"


# Human names are part of the public output format; keep spellings stable.
HUMANIZED_OPERATORS: MappingProxyType[Op, str] = MappingProxyType(
    {
        Op.not_: "not",
        Op.is_: "is",
        Op.and_: "and",
        Op.or_: "or",
        Op.eq: "equal",
        Op.ne: "not equal",
        Op.gt: "greater then",
        Op.gte: "greater then or equal",
        Op.lt: "less then",
        Op.lte: "less then or equal",
        Op.between: "between",
        Op.not_between: "not between",
        Op.in_: "in",
        Op.not_in: "not in",
        Op.like: "like",
        Op.not_like: "like",
        Op.starts_with: "starts with",
        Op.ends_with: "ends with",
        Op.substring: "contains string",
        Op.regexp: "match to regexp",
        Op.not_regexp: "not match to regexp",
        Op.col: "table column",
    }
)


def _build_reverse_table() -> dict[str, Op]:
    """Invert HUMANIZED_OPERATORS, keeping the first token that owns a name.

    ``Op.like`` and ``Op.not_like`` share the name ``"like"``; the reverse
    lookup always yields ``Op.like`` and ``Op.not_like`` is not recoverable
    from its human form.
    """
    reverse: dict[str, Op] = {}
    for token, name in HUMANIZED_OPERATORS.items():
        reverse.setdefault(name, token)
    return reverse


DEHUMANIZED_OPERATORS: MappingProxyType[str, Op] = MappingProxyType(_build_reverse_table())

# Names shared by more than one token; the reverse mapping is lossy for these.
AMBIGUOUS_NAMES: frozenset[str] = frozenset(
    name
    for name in DEHUMANIZED_OPERATORS
    if sum(1 for owned in HUMANIZED_OPERATORS.values() if owned == name) > 1
)


__all__ = [
    "AMBIGUOUS_NAMES",
    "DEHUMANIZED_OPERATORS",
    "HUMANIZED_OPERATORS",
    "Op",
]
