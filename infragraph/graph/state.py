"""
Explicit store of realized resources, keyed by resource address.

The authoritative state lives in the Pulumi backend. This store only records
what the current program run has realized so references between resources can
be resolved.
"""

import logging
from typing import Any, Dict, Iterator, List

from .model import Reference

logger = logging.getLogger(__name__)


class StateStore:
    """Records realized objects (Pulumi resources or lookup results) by address."""

    def __init__(self):
        self._records: Dict[str, Any] = {}

    def record(self, address: str, obj: Any) -> None:
        if address in self._records:
            raise ValueError(f"State already holds a record for {address}")
        self._records[address] = obj
        logger.debug("Recorded %s", address)

    def get(self, address: str) -> Any:
        try:
            return self._records[address]
        except KeyError:
            raise KeyError(f"No state recorded for {address}") from None

    def attribute(self, reference: Reference) -> Any:
        """Resolve a reference to the attribute of a realized object."""
        obj = self.get(reference.address)
        if not hasattr(obj, reference.attribute):
            raise AttributeError(f"{reference.address} has no attribute '{reference.attribute}'")
        return getattr(obj, reference.attribute)

    def discard(self, address: str) -> None:
        self._records.pop(address, None)
        logger.debug("Discarded %s", address)

    def addresses(self) -> List[str]:
        return list(self._records)

    def __contains__(self, address: str) -> bool:
        return address in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
