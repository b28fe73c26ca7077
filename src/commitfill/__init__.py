"""commitfill package.

Creates backdated commits in a local working copy and pushes them so the
hosted activity graph shows them on their fabricated dates.
"""

__all__ = [
    "cli",
    "config",
    "dates",
    "driver",
    "errors",
    "git",
    "record",
]
