"""Interfaces module - Abstract base classes and dataclasses."""

from asngate.interfaces.asn_record import ASNRecord
from asngate.interfaces.asn_resolver import ASNResolver

__all__ = [
    "ASNRecord",
    "ASNResolver",
]
