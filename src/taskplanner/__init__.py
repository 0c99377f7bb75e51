"""Task planner: an in-memory task collection with CSV / JSON-like persistence."""

__version__ = "1.0.0"
