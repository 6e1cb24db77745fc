"""MaxMind GeoLite2-ASN resolver backed by geoip2."""

import logging
from ipaddress import IPv4Address, IPv6Address
from pathlib import Path

import geoip2.database
import geoip2.errors
import maxminddb

from asngate.errors import CloseFailedError, DatabaseOpenError, LookupFailedError
from asngate.interfaces.asn_record import ASNRecord
from asngate.interfaces.asn_resolver import ASNResolver

logger = logging.getLogger(__name__)


class MaxMindASNResolver(ASNResolver):
    """Resolves addresses against a MaxMind ASN database (.mmdb).

    The database is memory-mapped when possible, so a single instance can
    serve lookups from any number of threads without locking.
    """

    def __init__(self, db_path: str | Path, mode: int = maxminddb.MODE_AUTO) -> None:
        """Open the database.

        Args:
            db_path: Path to a GeoLite2-ASN / GeoIP2-ISP style .mmdb file
            mode: maxminddb open mode (MODE_AUTO picks mmap when available)

        Raises:
            DatabaseOpenError: If the file is missing, unreadable or malformed
        """
        self._db_path = str(db_path)
        try:
            self._reader = geoip2.database.Reader(self._db_path, mode=mode)
        except (OSError, ValueError, maxminddb.InvalidDatabaseError) as e:
            raise DatabaseOpenError(f"cannot open database file {self._db_path}: {e}") from e
        self._closed = False

        metadata = self._reader.metadata()
        logger.debug(
            f"Opened {metadata.database_type} database {self._db_path} "
            f"(ip_version={metadata.ip_version}, build_epoch={metadata.build_epoch})"
        )

    def lookup(self, address: IPv4Address | IPv6Address) -> ASNRecord | None:
        """Resolve an address to its autonomous system.

        Args:
            address: A parsed IP address

        Returns:
            ASNRecord for the address, or None if the database has no entry

        Raises:
            LookupFailedError: If the database is closed, corrupt, or of the
                wrong type for ASN lookups
        """
        if self._closed:
            raise LookupFailedError(f"lookup of {address} on closed database {self._db_path}")

        try:
            response = self._reader.asn(address)
        except geoip2.errors.AddressNotFoundError:
            return None
        except (maxminddb.InvalidDatabaseError, TypeError, ValueError, OSError) as e:
            raise LookupFailedError(f"cannot lookup {address}: {e}") from e

        return ASNRecord(
            number=response.autonomous_system_number or 0,
            organization=response.autonomous_system_organization or "",
        )

    def close(self) -> None:
        """Close the database. Further calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        try:
            self._reader.close()
        except (OSError, ValueError) as e:
            raise CloseFailedError(f"cannot close database file {self._db_path}: {e}") from e
        logger.debug(f"Closed database {self._db_path}")

    @property
    def db_path(self) -> str:
        """Get the path of the open database."""
        return self._db_path

    @property
    def is_closed(self) -> bool:
        """Check if the database has been closed."""
        return self._closed
