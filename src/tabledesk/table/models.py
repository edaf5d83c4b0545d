"""Table data model: rows, column definitions, and view queries.

Rows are plain string-keyed dicts. Only ``id``, ``name`` and ``email`` are
guaranteed; every other key is dynamic and schema-free.
"""

from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field

Row = Dict[str, Any]

SortDirection = Literal["asc", "desc"]


def make_row(data: Mapping[str, Any]) -> Row:
    """
    Build a Row from a mapping, enforcing the guaranteed keys.

    Args:
        data: Field mapping; must carry a non-empty ``id``

    Returns:
        New dict with ``name`` and ``email`` defaulted to ``""`` when absent

    Raises:
        ValueError: If ``id`` is missing or empty
    """
    row_id = data.get("id")
    if row_id is None or row_id == "":
        raise ValueError("Row must have id")
    row = dict(data)
    row["id"] = str(row_id)
    row.setdefault("name", "")
    row.setdefault("email", "")
    return row


def cell_text(value: Any) -> Optional[str]:
    """
    Render a cell value as text, or None when the cell is empty.

    Booleans render lower-case and integral floats drop their ``.0`` so
    search and CSV export see the same text a user typed.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ColumnDef(BaseModel):
    """One display column. Registry position is its display order."""

    key: str = Field(..., min_length=1, description="Row field this column shows")
    label: str = Field(..., description="Header text")
    visible: bool = Field(default=True, description="Whether the column is shown and exported")


class ViewQuery(BaseModel):
    """Transient search/sort/page state feeding the view computation."""

    search_text: str = ""
    sort_key: Optional[str] = None
    sort_direction: SortDirection = "asc"
    page_index: int = Field(default=0, ge=0)
    page_size: int = Field(default=5, ge=1)


class ViewResult(BaseModel):
    """One page of the filtered, sorted rows."""

    items: List[Row]
    total_count: int  # filtered count, before pagination


class ParseResult(BaseModel):
    """Rows reconciled from CSV text plus the non-fatal problems found."""

    rows: List[Row] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    complete: bool = Field(default=True, description="False when a syntax error stopped parsing early")
