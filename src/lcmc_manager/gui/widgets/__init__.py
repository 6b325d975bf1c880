"""Reusable GUI widgets for the application.

Widgets:
    PathSelector: A compound widget combining a label, text entry, and browse
                  button for directory selection. Includes a status indicator
                  showing whether the path passes a validity check.
"""

from .path_selector import PathSelector

__all__ = [
    "PathSelector",
]
