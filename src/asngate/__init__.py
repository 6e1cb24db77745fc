"""asngate - Admit or reject clients by the organization behind their ASN."""

from asngate.config import MatcherConfig, load_config
from asngate.core.asn_matcher import ASNMatcher
from asngate.core.aso_policy import AsoPolicy, decide
from asngate.errors import (
    AddressParseError,
    AddressSplitError,
    AsnGateError,
    CloseFailedError,
    ConfigError,
    DatabaseOpenError,
    LookupFailedError,
)
from asngate.interfaces.asn_record import ASNRecord
from asngate.interfaces.asn_resolver import ASNResolver
from asngate.middleware import ASNGateMiddleware
from asngate.resolver.maxmind_resolver import MaxMindASNResolver

__version__ = "0.1.0"

__all__ = [
    "ASNGateMiddleware",
    "ASNMatcher",
    "ASNRecord",
    "ASNResolver",
    "AddressParseError",
    "AddressSplitError",
    "AsnGateError",
    "AsoPolicy",
    "CloseFailedError",
    "ConfigError",
    "DatabaseOpenError",
    "LookupFailedError",
    "MatcherConfig",
    "MaxMindASNResolver",
    "decide",
    "load_config",
]
