from __future__ import annotations

from enum import Enum


class BackendKind(str, Enum):
    """Which persistence variant serves the store for this process."""

    REMOTE = "remote"
    FALLBACK = "fallback"
