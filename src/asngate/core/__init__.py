"""Core module - Address parsing, organization policy and request matching."""

from asngate.core.address import parse_client_address
from asngate.core.asn_matcher import ASNMatcher
from asngate.core.aso_policy import AsoPolicy, decide

__all__ = [
    "ASNMatcher",
    "AsoPolicy",
    "decide",
    "parse_client_address",
]
