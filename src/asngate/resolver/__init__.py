"""Resolver module - ASN lookup database implementations."""

from asngate.interfaces.asn_resolver import ASNResolver
from asngate.resolver.maxmind_resolver import MaxMindASNResolver

__all__ = [
    "ASNResolver",
    "MaxMindASNResolver",
]
