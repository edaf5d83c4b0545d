"""Built-in snapshots used when nothing usable is persisted."""

from typing import Any, Dict, List

ROWS_KEY = "table_rows"
COLUMNS_KEY = "table_columns"

DEFAULT_ROLE = "Viewer"
DEFAULT_AGE = 0

SAMPLE_ROWS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Alice",
        "email": "alice@example.com",
        "age": 27,
        "role": "Admin",
    },
    {
        "id": "2",
        "name": "John",
        "email": "john@example.com",
        "age": 28,
        "role": "IT",
    },
    {
        "id": "3",
        "name": "Doby",
        "email": "doby@example.com",
        "age": 29,
        "role": "Operations",
    },
]

DEFAULT_COLUMNS: List[Dict[str, Any]] = [
    {"key": "name", "label": "Name", "visible": True},
    {"key": "email", "label": "Email", "visible": True},
    {"key": "age", "label": "Age", "visible": True},
    {"key": "role", "label": "Role", "visible": True},
]
