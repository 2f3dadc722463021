from __future__ import annotations

from collections import Counter
from typing import Iterable

from .errors import ColumnCountError


def infer_column_count(field_counts: Iterable[int]) -> int:
    """
    Return the most common number of fields per line.

    Ties go to the smallest field count so the answer does not depend on
    line order.
    """
    frequencies = Counter(field_counts)
    if not frequencies:
        raise ColumnCountError()
    return min(frequencies, key=lambda count: (-frequencies[count], count))
