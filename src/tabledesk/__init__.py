"""tabledesk: persisted, editable, dynamically-schemed record tables."""

__version__ = "0.1.0"
