"""Normalization of caller containers into dense zero-based arrays.

Host scripting layers hand tables over as mappings keyed by 1-based
integer indices, possibly with holes. These helpers turn such tables, as
well as ordinary sequences and arrays, into the dense 0-based form the
rest of the package works with.
"""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Real
from typing import List

import numpy as np


def _one_based_items(table: Mapping):
    for key, value in table.items():
        if isinstance(key, bool) or not isinstance(key, Real):
            continue
        index = int(key)
        if index > 0:
            yield index - 1, value


def densify(table) -> np.ndarray:
    """Return ``table`` as a dense float array.

    Parameters
    ----------
    table : Mapping or array_like
        A mapping is read as a 1-based host table: key ``k >= 1`` lands at
        index ``k - 1``, keys ``<= 0`` and non-numeric keys are ignored and
        holes are filled with ``0.0``. Anything else is converted with
        ``numpy.asarray``.

    Examples
    --------
    >>> densify({1: 0.5, 3: 2.0}).tolist()
    [0.5, 0.0, 2.0]
    >>> densify([1, 2]).tolist()
    [1.0, 2.0]
    """
    if not isinstance(table, Mapping):
        return np.asarray(table, dtype=float)
    items = list(_one_based_items(table))
    size = max((index + 1 for index, _ in items), default=0)
    dense = np.zeros(size)
    for index, value in items:
        dense[index] = float(value)
    return dense


def densify_groups(groups) -> List:
    """Normalize an outer container of tables into a 0-based list.

    The outer container follows the same rules as :func:`densify`, except
    that holes become empty groups. Inner tables are densified too.
    """
    if isinstance(groups, Mapping):
        items = list(_one_based_items(groups))
        size = max((index + 1 for index, _ in items), default=0)
        ordered: List = [[] for _ in range(size)]
        for index, value in items:
            ordered[index] = value
    else:
        ordered = list(groups)
    return [densify(group) for group in ordered]
