"""ASN matcher - Per-request admission decision from a client address."""

import logging
from typing import TYPE_CHECKING

from asngate.core.address import parse_client_address
from asngate.core.aso_policy import AsoPolicy
from asngate.errors import AddressParseError, LookupFailedError
from asngate.interfaces.asn_resolver import ASNResolver
from asngate.resolver.maxmind_resolver import MaxMindASNResolver

if TYPE_CHECKING:
    from asngate.config import MatcherConfig

logger = logging.getLogger(__name__)


class ASNMatcher:
    """Admits or rejects client addresses by their AS organization.

    Per request:
    1. Unconfigured policy (no fragments at all) never admits
    2. Address is split from its port and parsed (unparseable → reject)
    3. Resolver looks up the AS record (lookup error → reject)
    4. Policy decides on the organization ("" when there is no record)

    Per-request errors never escape matches(); they are logged and turned
    into a rejection. The matcher does not own the order of lookups and
    close(): callers stop issuing requests before calling close().
    """

    def __init__(self, policy: AsoPolicy, resolver: ASNResolver) -> None:
        """Initialize the matcher.

        Args:
            policy: Allow/deny organization policy
            resolver: Open ASN resolver, owned by the matcher from now on
        """
        self._policy = policy
        self._resolver = resolver

    @classmethod
    def provision(cls, config: "MatcherConfig") -> "ASNMatcher":
        """Open the configured database and build a matcher.

        Args:
            config: Matcher configuration

        Returns:
            A ready matcher

        Raises:
            DatabaseOpenError: If the database cannot be opened
        """
        resolver = MaxMindASNResolver(config.db_path)
        policy = config.to_policy()
        logger.info(
            f"Provisioned ASN matcher: db={config.db_path}, "
            f"allowed_asos={len(policy.allow)}, denied_asos={len(policy.deny)}"
        )
        return cls(policy=policy, resolver=resolver)

    def matches(self, address: str) -> bool:
        """Check if a client address is admitted.

        Args:
            address: Client address, optionally in host:port form

        Returns:
            True if the request is admitted, False otherwise
        """
        if not self._policy.is_configured:
            return False

        try:
            ip = parse_client_address(address)
        except AddressParseError as e:
            logger.warning(f"Cannot parse IP address {address!r}: {e}")
            return False

        try:
            record = self._resolver.lookup(ip)
        except LookupFailedError as e:
            logger.warning(f"Cannot lookup IP address {address!r}: {e}")
            return False

        if record is None:
            logger.debug(f"No ASN record for {ip}")
            return self._policy.is_allowed("")

        logger.debug(
            f"Detected ASN data for {ip}: "
            f"autonomous_system_number={record.number}, "
            f"autonomous_system_organization={record.organization!r}"
        )
        return self._policy.is_allowed(record.organization)

    def close(self) -> None:
        """Release the resolver.

        Raises:
            CloseFailedError: If the resolver cannot be closed
        """
        self._resolver.close()

    @property
    def policy(self) -> AsoPolicy:
        """Get the organization policy."""
        return self._policy

    @property
    def resolver(self) -> ASNResolver:
        """Get the resolver."""
        return self._resolver
