"""Unique identifiers for layers."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass

_counter = itertools.count(1)
_lock = threading.Lock()


@dataclass(frozen=True, order=True)
class LayerId:
    """Process-wide unique, increasing layer identifier, starting at 1."""

    value: int

    @classmethod
    def new(cls) -> "LayerId":
        with _lock:
            return cls(next(_counter))