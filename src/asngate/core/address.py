"""Client address splitting and parsing."""

import ipaddress
import logging
from ipaddress import IPv4Address, IPv6Address

from asngate.errors import AddressParseError, AddressSplitError

logger = logging.getLogger(__name__)

IPAddress = IPv4Address | IPv6Address


def split_host_port(address: str) -> tuple[str, str]:
    """Split "host:port" or "[host]:port" into host and port.

    Args:
        address: Address in host:port form

    Returns:
        Tuple of (host, port); the port is not validated

    Raises:
        AddressSplitError: If the address has no port, too many colons,
            or unbalanced brackets
    """
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise AddressSplitError(f"missing ']' in address {address!r}")
        rest = address[end + 1 :]
        if not rest:
            raise AddressSplitError(f"missing port in address {address!r}")
        if not rest.startswith(":") or ":" in rest[1:]:
            raise AddressSplitError(f"unexpected text after host in address {address!r}")
        return address[1:end], rest[1:]

    host, sep, port = address.rpartition(":")
    if not sep:
        raise AddressSplitError(f"missing port in address {address!r}")
    if ":" in host:
        raise AddressSplitError(f"too many colons in address {address!r}")
    if "[" in host or "]" in host:
        raise AddressSplitError(f"unexpected bracket in address {address!r}")
    return host, port


def parse_ip(host: str) -> IPAddress:
    """Parse a host string into an IP address.

    Args:
        host: Bare IPv4 or IPv6 address (IPv6 may be bracketed)

    Returns:
        The parsed address

    Raises:
        AddressParseError: If the host is empty or not an IP address
    """
    host = host.strip()
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not host:
        raise AddressParseError("empty address")
    try:
        return ipaddress.ip_address(host)
    except ValueError as e:
        raise AddressParseError(str(e)) from e


def parse_client_address(address: str) -> IPAddress:
    """Parse a client address that may carry a port.

    Splitting is tolerant: when the input is not in host:port form a warning
    is logged and the whole input is parsed as a bare address.

    Args:
        address: Client address, "ip", "ip:port" or "[ipv6]:port"

    Returns:
        The parsed address

    Raises:
        AddressParseError: If no IP address can be parsed from the input
    """
    try:
        host, _ = split_host_port(address)
    except AddressSplitError as e:
        logger.warning(f"Cannot split IP address {address!r}: {e}")
        host = address
    return parse_ip(host)
