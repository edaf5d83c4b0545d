import time

_last_stamp = 0


def next_import_stamp() -> int:
    """Millisecond timestamp, strictly increasing across calls in this process."""
    global _last_stamp
    stamp = max(int(time.time() * 1000), _last_stamp + 1)
    _last_stamp = stamp
    return stamp


def new_row_id(index: int, stamp: int | None = None) -> str:
    return f"{stamp if stamp is not None else next_import_stamp()}-{index}"
