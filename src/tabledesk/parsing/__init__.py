from .csv_codec import parse_csv, reconcile_row, serialize_csv

__all__ = ["parse_csv", "reconcile_row", "serialize_csv"]
