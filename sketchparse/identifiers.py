"""Session-scoped numeric ids for node labels and ``:N`` reference resolution."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import UnresolvedReferenceError

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = ":"
_REFERENCE_DIGITS = re.compile(r"[0-9]+")


def is_reference(text: str) -> bool:
    return text.startswith(REFERENCE_PREFIX)


def reference_number(ref: str) -> Optional[int]:
    """Return ``N`` for a well-formed ``:N`` (ASCII digits only), else ``None``."""
    digits = ref[len(REFERENCE_PREFIX):] if is_reference(ref) else ""
    if not _REFERENCE_DIGITS.fullmatch(digits):
        return None
    return int(digits)


class IdentifierManager:
    """Stable, auto-incrementing ids that persist across parses.

    The mapping is only reset by :meth:`clear`; re-parsing text never resets
    it, so a label keeps the same ``:N`` for the whole session. Not safe to
    share between threads without external locking.
    """

    def __init__(self) -> None:
        self._label_to_id: Dict[str, int] = {}
        self._id_to_label: Dict[int, str] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._label_to_id)

    @property
    def next_id(self) -> int:
        return self._next_id

    def assign_id(self, label: str) -> int:
        existing = self._label_to_id.get(label)
        if existing is not None:
            return existing
        numeric_id = self._next_id
        self._next_id += 1
        self._label_to_id[label] = numeric_id
        self._id_to_label[numeric_id] = label
        logger.debug("Assigned id %d to %r", numeric_id, label)
        return numeric_id

    def resolve_reference(self, ref: str) -> str:
        """Return the label ``ref`` names.

        ``:N`` is looked up by numeric id; anything else is already a label.
        """

        if not is_reference(ref):
            return ref
        numeric_id = reference_number(ref)
        if numeric_id is None:
            raise UnresolvedReferenceError(ref, f"Invalid ID reference: {ref}")
        label = self._id_to_label.get(numeric_id)
        if label is None:
            raise UnresolvedReferenceError(ref, f"Node with ID {numeric_id} not found")
        logger.debug("Resolved %s -> %r", ref, label)
        return label

    def get_numeric_id(self, label: str) -> Optional[int]:
        return self._label_to_id.get(label)

    def has_label(self, label: str) -> bool:
        return label in self._label_to_id

    def entries(self) -> List[Tuple[str, int]]:
        return sorted(self._label_to_id.items(), key=lambda item: item[1])

    def clear(self) -> None:
        logger.debug("Clearing %d id mapping(s)", len(self._label_to_id))
        self._label_to_id.clear()
        self._id_to_label.clear()
        self._next_id = 1

    def state(self) -> Dict[str, Any]:
        return {
            "totalNodes": len(self._label_to_id),
            "nextId": self._next_id,
            "nodes": [{"label": label, "id": numeric_id} for label, numeric_id in self.entries()],
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "labelToId": dict(self._label_to_id),
            "idToLabel": {str(numeric_id): label for numeric_id, label in self._id_to_label.items()},
            "nextId": self._next_id,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "IdentifierManager":
        manager = cls()
        if not data:
            return manager
        for label, numeric_id in (data.get("labelToId") or {}).items():
            manager._label_to_id[label] = int(numeric_id)
            manager._id_to_label[int(numeric_id)] = label
        highest = max(manager._id_to_label, default=0)
        manager._next_id = max(int(data.get("nextId") or 1), highest + 1)
        logger.debug("Loaded %d id mapping(s)", len(manager._label_to_id))
        return manager
