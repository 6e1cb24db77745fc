"""Exception types raised by asngate."""


class AsnGateError(Exception):
    """Base class for all asngate errors."""


class ConfigError(AsnGateError):
    """Configuration could not be loaded or is invalid."""


class DatabaseOpenError(AsnGateError):
    """The ASN database could not be opened.

    Fatal to provisioning: a matcher cannot start without its database.
    """


class CloseFailedError(AsnGateError):
    """Releasing the ASN database failed."""


class AddressSplitError(AsnGateError):
    """The address could not be split into host and port."""


class AddressParseError(AsnGateError):
    """The host part is not a valid IP address."""


class LookupFailedError(AsnGateError):
    """The database lookup itself failed (not the same as "no record")."""
