"""View API: the filter -> sort -> paginate pipeline over a row snapshot.

Everything here is pure. Inputs are never mutated and each call returns
new lists.
"""

import math
from functools import cmp_to_key
from typing import Any, List, Sequence

from ..table.models import Row, ViewQuery, ViewResult, cell_text


def _matches(row: Row, needle: str) -> bool:
    for value in row.values():
        text = cell_text(value)
        if text is not None and needle in text.lower():
            return True
    return False


def filter_rows(rows: Sequence[Row], search_text: str) -> List[Row]:
    """Keep rows where any field's text contains the trimmed, lower-cased search."""
    needle = search_text.strip().lower()
    if not needle:
        return list(rows)
    return [row for row in rows if _matches(row, needle)]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float))


def _utf16_key(text: str) -> bytes:
    # Big-endian UTF-16 bytes order the same way as UTF-16 code units
    return text.encode("utf-16-be", "surrogatepass")


def compare_values(a: Any, b: Any) -> int:
    """
    Ascending comparison of two cell values.

    Absent (None) sorts before anything present. Numbers compare numerically,
    strings by UTF-16 code unit, and mixed types by their text.
    """
    if a == b and type(a) is type(b):
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    if _is_number(a) and _is_number(b):
        left, right = a, b
    elif isinstance(a, str) and isinstance(b, str):
        left, right = _utf16_key(a), _utf16_key(b)
    else:
        left, right = _utf16_key(cell_text(a) or ""), _utf16_key(cell_text(b) or "")
    if left == right:
        return 0
    return 1 if left > right else -1


def sort_rows(rows: Sequence[Row], sort_key: str | None, direction: str = "asc") -> List[Row]:
    """Sort rows by one field; no key means the original order is kept."""
    if not sort_key:
        return list(rows)
    sign = -1 if direction == "desc" else 1

    def compare(left: Row, right: Row) -> int:
        return sign * compare_values(left.get(sort_key), right.get(sort_key))

    return sorted(rows, key=cmp_to_key(compare))


def paginate(rows: Sequence[Row], page_index: int, page_size: int) -> List[Row]:
    start = page_index * page_size
    return list(rows[start:start + page_size])


def filter_and_sort(rows: Sequence[Row], query: ViewQuery) -> List[Row]:
    """The view before pagination (what export uses)."""
    filtered = filter_rows(rows, query.search_text)
    return sort_rows(filtered, query.sort_key, query.sort_direction)


def compute_view(rows: Sequence[Row], query: ViewQuery) -> ViewResult:
    """
    Compute one page of the table.

    Args:
        rows: Row snapshot
        query: Search, sort and page state

    Returns:
        ViewResult whose total_count is the filtered size before pagination
    """
    ordered = filter_and_sort(rows, query)
    return ViewResult(
        items=paginate(ordered, query.page_index, query.page_size),
        total_count=len(ordered),
    )


def page_count(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size) if total_count > 0 else 0


def toggle_sort(query: ViewQuery, key: str) -> ViewQuery:
    """Header click: flip direction on the active column, else sort ascending by ``key``."""
    if query.sort_key == key:
        direction = "desc" if query.sort_direction == "asc" else "asc"
        return query.model_copy(update={"sort_direction": direction})
    return query.model_copy(update={"sort_key": key, "sort_direction": "asc"})


def with_search(query: ViewQuery, search_text: str) -> ViewQuery:
    """New search text always starts again from the first page."""
    return query.model_copy(update={"search_text": search_text, "page_index": 0})
