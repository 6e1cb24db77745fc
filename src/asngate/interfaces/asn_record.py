"""ASN record - Resolved autonomous-system identity of an address."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ASNRecord:
    """Autonomous-system identity of a network address.

    Attributes:
        number: Autonomous system number (0 when unknown)
        organization: Name of the AS holder (empty when unknown)
    """

    number: int = 0
    organization: str = ""

    @property
    def is_known(self) -> bool:
        """Check if the record carries an organization name."""
        return bool(self.organization)
