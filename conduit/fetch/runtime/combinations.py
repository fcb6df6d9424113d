"""Expansion of an argument pool into concrete request contexts."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..core.types import Context

logger = logging.getLogger(__name__)


def compute_arg_combinations(
    possible_args: Mapping[str, Iterable[Any]],
    relevant_roots: Iterable[str] | None = None,
) -> list[Context]:
    """Cartesian product of candidate values over the relevant argument roots.

    Roots in the pool that are not relevant are never varied, which keeps the
    number of contexts bounded by what the definition actually consumes.

    Args:
        possible_args: Candidate values per argument root
        relevant_roots: Roots to vary; None varies every root in the pool

    Returns:
        One context per combination, candidates taken as given and in
        order. A relevant root without candidates yields no contexts; no
        relevant roots yields a single empty context.

    Examples:
        >>> compute_arg_combinations({"parent": [1, 2], "sibling": [9]}, ["parent"])
        [{'parent': 1}, {'parent': 2}]
    """
    roots = list(possible_args) if relevant_roots is None else list(dict.fromkeys(relevant_roots))
    candidates: list[list[Any]] = []
    for root in roots:
        values = list(possible_args.get(root) or ())
        if not values:
            logger.debug("no candidate values for argument root %s", root)
            return []
        candidates.append(values)
    return [dict(zip(roots, combination)) for combination in itertools.product(*candidates)]
