"""Table Progress Tracking: per-user checkboxes for authored tables."""

__version__ = "0.1.0"
