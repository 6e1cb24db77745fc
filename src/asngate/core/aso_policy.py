"""Organization-name policy for allow/deny fragment enforcement."""

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def decide(organization: str, allow: Iterable[str], deny: Iterable[str]) -> bool:
    """Decide whether an AS organization is admitted.

    Fragments are expected in lowercase; the organization is lowercased here.

    Args:
        organization: Resolved AS organization name ("" when unknown)
        allow: Allow fragments
        deny: Deny fragments

    Returns:
        True if the organization is admitted, False otherwise
    """
    # Unknown identity is not treated as hostile
    if not organization:
        return True

    allow = tuple(allow)
    deny = tuple(deny)
    name = organization.lower()

    # Deny list is authoritative when present; allow list is not consulted
    if deny:
        return not any(fragment in name for fragment in deny)

    if allow:
        return any(fragment in name for fragment in allow)

    return True


class AsoPolicy:
    """Filters AS organizations based on allow and deny fragments.

    Filtering logic:
    1. Unknown (empty) organization is always admitted
    2. If any deny fragments exist, admit unless one of them matches
    3. Otherwise, if any allow fragments exist, admit only if one matches

    Fragments match as case-insensitive substrings of the organization name.
    A policy with no fragments at all is "unconfigured"; see is_configured.
    """

    def __init__(
        self,
        allow: Iterable[str] | None = None,
        deny: Iterable[str] | None = None,
    ) -> None:
        """Initialize the policy.

        Args:
            allow: Organization fragments to admit
            deny: Organization fragments to reject (takes precedence when set)
        """
        self._allow: frozenset[str] = frozenset(f.lower() for f in allow) if allow else frozenset()
        self._deny: frozenset[str] = frozenset(f.lower() for f in deny) if deny else frozenset()

    def is_allowed(self, organization: str) -> bool:
        """Check if an AS organization is admitted.

        Args:
            organization: Resolved AS organization name ("" when unknown)

        Returns:
            True if the organization is admitted, False otherwise
        """
        allowed = decide(organization, self._allow, self._deny)
        if not allowed:
            logger.debug(f"Organization {organization!r} not allowed")
        return allowed

    @property
    def is_configured(self) -> bool:
        """Check if at least one allow or deny fragment is set."""
        return bool(self._allow or self._deny)

    @property
    def allow(self) -> frozenset[str]:
        """Get the allow fragments."""
        return self._allow

    @property
    def deny(self) -> frozenset[str]:
        """Get the deny fragments."""
        return self._deny
