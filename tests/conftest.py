"""Shared test fixtures."""

from pathlib import Path
from typing import Any

import pytest

from abn_search.client import AbnSearchClient
from abn_search.config import ClientConfig
from abn_search.entity import Entity
from abn_search.transport import parse_envelope

FIXTURES_DIR = Path(__file__).parent / "fixtures"

GUID = "00000000-0000-0000-0000-000000000000"


def load_response(name: str) -> dict[str, Any]:
    """Parse a recorded SOAP reply from tests/fixtures."""
    return parse_envelope((FIXTURES_DIR / name).read_bytes())


class FakeTransport:
    """In-memory registry: answers per operation, records every call.

    A response may be a callable taking the request message.
    """

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def call(self, operation: str, message: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((operation, message))
        response = self.responses[operation]
        if callable(response):
            return response(message)  # type: ignore[no-any-return]
        return response  # type: ignore[no-any-return]


def abn_responder(message: dict[str, Any]) -> dict[str, Any]:
    """Answer SearchByABNv201408 from the two recorded entities."""
    by_abn = {
        "99124391073": "search_by_abn.xml",
        "46110483513": "search_by_abn_sole_trader.xml",
    }
    return load_response(by_abn[message["searchString"]])


@pytest.fixture
def registry() -> FakeTransport:
    """A fake registry with recorded answers for every operation."""
    return FakeTransport(
        {
            "SearchByABNv201408": abn_responder,
            "SearchByASICv201408": load_response("search_by_acn.xml"),
            "ABRSearchByNameAdvanced2012": load_response("search_by_name.xml"),
        }
    )


@pytest.fixture
def client(registry: FakeTransport) -> AbnSearchClient:
    return AbnSearchClient(ClientConfig(guid=GUID), transport=registry)


@pytest.fixture
def abn_detail() -> dict[str, Any]:
    """The businessEntity201408 branch of the company fixture."""
    response = load_response("search_by_abn.xml")
    return response["search_by_ab_nv201408_response"]["abr_payload_search_results"][
        "response"
    ]["business_entity201408"]


@pytest.fixture
def sample_entities(client: AbnSearchClient) -> list[Entity]:
    """Two fully enriched entities: a company and a sole trader."""
    return [client.lookup("99124391073"), client.lookup("46110483513")]
