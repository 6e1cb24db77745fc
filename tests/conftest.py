"""Shared test fixtures for pytest."""

from collections.abc import Iterator

import pytest

from asngate.core.asn_matcher import ASNMatcher
from asngate.core.aso_policy import AsoPolicy
from asngate.interfaces.asn_record import ASNRecord
from tests.mocks import FakeReader, MockResolver

GOOGLE = ASNRecord(number=15169, organization="GOOGLE LLC")
AMAZON = ASNRecord(number=16509, organization="Amazon.com, Inc.")
SPAM_ISP = ASNRecord(number=64512, organization="Spam-ISP Networks")
ACME_CLOUD = ASNRecord(number=64513, organization="Acme Cloud Services")
ACME_HOSTING = ASNRecord(number=64514, organization="Acme Hosting")


@pytest.fixture
def records() -> dict[str, ASNRecord]:
    """Address to ASN record table used by the mock resolver."""
    return {
        "8.8.8.8": GOOGLE,
        "2001:4860:4860::8888": GOOGLE,
        "52.94.236.248": AMAZON,
        "198.51.100.7": SPAM_ISP,
        "203.0.113.10": ACME_CLOUD,
        "203.0.113.20": ACME_HOSTING,
        "192.0.2.99": ASNRecord(number=64515, organization=""),
    }


@pytest.fixture
def mock_resolver(records: dict[str, ASNRecord]) -> MockResolver:
    """Create a MockResolver over the shared record table."""
    return MockResolver(records)


@pytest.fixture
def make_matcher(mock_resolver: MockResolver):
    """Factory building a matcher with the mock resolver."""

    def _make(allow: list[str] | None = None, deny: list[str] | None = None) -> ASNMatcher:
        return ASNMatcher(policy=AsoPolicy(allow=allow, deny=deny), resolver=mock_resolver)

    return _make


@pytest.fixture
def fake_reader(monkeypatch: pytest.MonkeyPatch) -> Iterator[type[FakeReader]]:
    """Replace geoip2.database.Reader with FakeReader and reset its state."""
    monkeypatch.setattr(FakeReader, "records", {
        "8.8.8.8": (15169, "GOOGLE"),
        "198.51.100.7": (64512, "Spam-ISP Networks"),
        "192.0.2.99": (None, None),
    })
    monkeypatch.setattr(FakeReader, "open_error", None)
    monkeypatch.setattr(FakeReader, "lookup_error", None)
    monkeypatch.setattr(FakeReader, "close_error", None)
    monkeypatch.setattr(FakeReader, "instances", [])
    monkeypatch.setattr("geoip2.database.Reader", FakeReader)
    yield FakeReader
