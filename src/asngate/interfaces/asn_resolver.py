"""ASN resolver interface - Abstract base class for lookup database backends."""

from abc import ABC, abstractmethod
from ipaddress import IPv4Address, IPv6Address

from asngate.interfaces.asn_record import ASNRecord


class ASNResolver(ABC):
    """Abstract base class for IP-to-ASN resolvers.

    A resolver owns its open database for its whole lifetime. Lookups are
    read-only and may be issued from many threads at once; close() is
    called once, after the last lookup.
    """

    @abstractmethod
    def lookup(self, address: IPv4Address | IPv6Address) -> ASNRecord | None:
        """Resolve an address to its autonomous system.

        Args:
            address: A parsed IP address

        Returns:
            The most specific matching ASNRecord, or None when the address
            is not in the database

        Raises:
            LookupFailedError: If the database could not be read
        """

    @abstractmethod
    def close(self) -> None:
        """Release the underlying database.

        Raises:
            CloseFailedError: If the database could not be released
        """

    @property
    @abstractmethod
    def is_closed(self) -> bool:
        """Check if the resolver has been closed."""
