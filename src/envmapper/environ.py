"""Process environment as a source mapping."""

from __future__ import annotations

import os


def environ_source() -> dict[str, str]:
    """
    Return a snapshot of the process environment.

    The copy keeps a mapping call consistent even if another thread changes
    os.environ while it runs.
    """
    return dict(os.environ)
