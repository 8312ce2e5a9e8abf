"""Named diagnostic fields for periodic output.

Components register the fields they can produce once, at construction,
and overwrite them on every transform. The host decides when to
`record` a snapshot and how to persist the history.
"""

from typing import Any, Dict, List, Optional
import logging
import re

from jax import Array

log = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_+]*$")


class DiagnosticOutput:
    """Registry of repeated (time-dependent) diagnostic fields."""

    def __init__(self):
        self.docs: Dict[str, str] = {}
        self.fields: Dict[str, Optional[Array]] = {}
        self.history: Dict[str, List[Optional[Array]]] = {}
        self.times: List[float] = []

    def add_repeat(self, name: str, doc: str = "") -> None:
        """Register a field to be written at every output.

        Raises:
            ValueError: If the name is malformed or already registered
        """
        if not _NAME_PATTERN.match(name):
            raise ValueError(f"Invalid diagnostic name: {name!r}")
        if name in self.docs:
            raise ValueError(f"Diagnostic '{name}' is already registered")

        self.docs[name] = doc
        self.fields[name] = None
        self.history[name] = []
        log.debug("Registered diagnostic %s", name)

    def set(self, name: str, value: Array) -> None:
        """Overwrite the current value of a registered field."""
        if name not in self.docs:
            raise KeyError(f"Diagnostic '{name}' is not registered")
        self.fields[name] = value

    def get(self, name: str) -> Optional[Array]:
        """Current value of a field (None until first set)."""
        if name not in self.docs:
            raise KeyError(f"Diagnostic '{name}' is not registered")
        return self.fields[name]

    def names(self) -> List[str]:
        return list(self.docs)

    def __contains__(self, name: str) -> bool:
        return name in self.docs

    def __len__(self) -> int:
        return len(self.docs)

    def snapshot(self) -> Dict[str, Array]:
        """Current values of all fields that have been set."""
        return {k: v for k, v in self.fields.items() if v is not None}

    def record(self, time: float) -> Dict[str, Array]:
        """Append the current values to the time history.

        Every registered field gets one entry per recorded time; fields not
        yet set are stored as None so histories stay aligned with `times`.
        """
        self.times.append(float(time))
        for name, value in self.fields.items():
            self.history[name].append(value)
        return self.snapshot()

    def get_history(self) -> Dict[str, Any]:
        """Get full time history as dictionary."""
        return {
            "time": self.times,
            **self.history
        }
