# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""Lookup client for the Australian Business Register.

Example::

    client = AbnSearchClient(ClientConfig(guid="your-guid"))
    entity = client.lookup("56206894472")
    results = client.search_by_name("Sony", NameSearchOptions(states=frozenset({"NSW"})))
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from abn_search.config import ClientConfig
from abn_search.entity import Entity
from abn_search.errors import ConfigurationError, InvalidArgumentError, RemoteError
from abn_search.identifiers import is_valid_abn, is_valid_acn, normalize_abn, normalize_acn
from abn_search.mapping import LookupResult, dig, unwrap_response
from abn_search.transport import RegistryTransport, SoapTransport, snake_case

logger = logging.getLogger("abn_search")

OP_SEARCH_BY_ABN = "SearchByABNv201408"
OP_SEARCH_BY_ACN = "SearchByASICv201408"
OP_SEARCH_BY_NAME = "ABRSearchByNameAdvanced2012"

ENTITY_KEY = "business_entity201408"

STATES = ("NSW", "SA", "ACT", "VIC", "WA", "NT", "QLD", "TAS")


def _yn(flag: bool) -> str:
    return "Y" if flag else "N"


@dataclass(frozen=True)
class NameSearchOptions:
    """Filters for a search by name."""

    states: frozenset[str] = field(default_factory=lambda: frozenset(STATES))
    trading_name: bool = True
    legal_name: bool = True
    business_name: bool = True
    postcode: str | None = None
    search_width: str = "Typical"  # "Narrow", "Typical" or "Broad"
    minimum_score: int = 50
    max_search_results: int = 10


class AbnSearchClient:
    """Runs ABN, ACN and name searches against a registry transport."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: RegistryTransport | None = None,
    ) -> None:
        self.config = config if config is not None else ClientConfig.from_env()
        self._own_transport = transport is None
        self.transport = transport if transport is not None else self._build_transport()

    def _build_transport(self) -> RegistryTransport:
        return SoapTransport(
            self.config.endpoint, proxy=self.config.proxy, timeout=self.config.timeout
        )

    def configure(self, **changes: Any) -> "AbnSearchClient":
        """Replace settings on this client only, e.g. ``configure(guid=..., proxy=...)``."""
        self.config = self.config.with_changes(**changes)
        if self._own_transport:
            self.transport = self._build_transport()
        return self

    def check_guid(self) -> bool:
        if not self.config.guid:
            raise ConfigurationError("No GUID provided.")
        return True

    def search(self, abn: Any) -> LookupResult:
        """Search by ABN. Returns the tagged registry result."""
        if not is_valid_abn(abn):
            raise InvalidArgumentError(f"ABN {abn} is invalid")
        self.check_guid()
        return self._search_by_identifier(OP_SEARCH_BY_ABN, normalize_abn(abn))

    def search_by_acn(self, acn: Any) -> LookupResult:
        """Search by ACN (the registry's ASIC number search)."""
        if not is_valid_acn(acn):
            raise InvalidArgumentError(f"ACN {acn} is invalid")
        self.check_guid()
        return self._search_by_identifier(OP_SEARCH_BY_ACN, normalize_acn(acn))

    def lookup(self, abn: Any) -> Entity:
        return Entity(abn=abn).update_from_abr(self)

    def lookup_by_acn(self, acn: Any) -> Entity:
        return Entity(acn=acn).update_from_abr_using_acn(self)

    def search_by_name(
        self,
        name: Any,
        options: NameSearchOptions | None = None,
        *,
        enrich: bool = True,
    ) -> list[Entity]:
        """Search by name and return one entity per matching record.

        With ``enrich`` each match is looked up again by ABN, since name search
        records carry fewer fields than a full business entity. That costs one
        extra registry call per match.

        Raises:
            InvalidArgumentError: if ``name`` is not a string.
            RemoteError: if the registry answers with an exception, for the
                         search itself or for any enrichment lookup.
        """
        if not isinstance(name, str):
            raise InvalidArgumentError("No search string provided")
        self.check_guid()
        opts = options if options is not None else NameSearchOptions()

        request = {
            "externalNameSearch": {
                "authenticationGuid": self.config.guid,
                "name": name,
                "filters": {
                    "nameType": {
                        "tradingName": _yn(opts.trading_name),
                        "legalName": _yn(opts.legal_name),
                        "businessName": _yn(opts.business_name),
                    },
                    "postcode": opts.postcode,
                    "stateCode": {s: _yn(s in opts.states) for s in STATES},
                },
                "searchWidth": opts.search_width,
                "minimumScore": opts.minimum_score,
                "maxSearchResults": opts.max_search_results,
            },
            "authenticationGuid": self.config.guid,
        }

        logger.debug("Name search for %r", name)
        response = self.transport.call(OP_SEARCH_BY_NAME, request)
        body = dig(
            response,
            f"{snake_case(OP_SEARCH_BY_NAME)}_response",
            "abr_payload_search_results",
            "response",
        )
        results = dig(body, "search_results_list")
        if results is None:
            raise RemoteError(dig(body, "exception", "exception_description"))

        records = results.get("search_results_record") if isinstance(results, dict) else None
        if records is None:
            records = []
        elif not isinstance(records, list):
            records = [records]
        logger.debug("Name search returned %d record(s)", len(records))

        entities = []
        for record in records:
            entity = Entity.from_abr_detail(record)
            if enrich:
                entity.update_from_abr(self)
            entities.append(entity)
        return entities

    def _search_by_identifier(self, operation: str, identifier: str | None) -> LookupResult:
        message = {
            "authenticationGuid": self.config.guid,
            "searchString": identifier,
            "includeHistoricalDetails": _yn(self.config.include_historical_details),
        }
        logger.debug("%s for %s", operation, identifier)
        response = self.transport.call(operation, message)
        return unwrap_response(response, f"{snake_case(operation)}_response", ENTITY_KEY)
