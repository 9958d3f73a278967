# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""The business entity record and its derived names."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

from abn_search.identifiers import (
    format_abn,
    format_acn,
    is_valid_abn,
    is_valid_acn,
    normalize_abn,
    normalize_acn,
)
from abn_search.mapping import SUCCESS, LookupResult, map_abr_detail

if TYPE_CHECKING:
    from abn_search.client import AbnSearchClient


@dataclass
class Entity:
    """A business identity as known to the Australian Business Register.

    Only ``abn`` and ``acn`` are normalized on construction; neither is
    validated. Every other field is optional and filled in by enrichment.
    """

    abn: str | None = None
    acn: str | None = None
    abn_current: bool | None = None
    entity_type: str | None = None
    status: str | None = None  # e.g. "ACT", "CAN"
    main_name: str | None = None
    trading_name: str | None = None
    business_name: str | None = None
    legal_name: str | None = None  # given + family name
    legal_name2: str | None = None  # full name, sole traders
    other_trading_name: str | None = None
    active_from_date: str | None = None
    address_state_code: str | None = None
    address_post_code: str | None = None
    address_from_date: str | None = None
    last_updated: str | None = None
    gst_from_date: str | None = None

    def __post_init__(self) -> None:
        self.abn = normalize_abn(self.abn)
        self.acn = normalize_acn(self.acn)

    @classmethod
    def from_abr_detail(cls, payload: Any) -> Entity:
        """Build an entity from one raw business entity or search result record."""
        entity = cls()
        entity._apply(LookupResult(result=SUCCESS, payload=payload))
        return entity

    def names(self) -> list[str]:
        """All known names, most authoritative first."""
        candidates = [
            self.main_name,
            self.business_name,
            self.trading_name,
            self.other_trading_name,
            self.legal_name,
            self.legal_name2,
        ]
        return [n for n in candidates if n is not None]

    @property
    def primary_name(self) -> str | None:
        names = self.names()
        return names[0] if names else None

    @property
    def secondary_name(self) -> str | None:
        """First name that is not just a variant containing the primary name."""
        primary = self.primary_name
        if primary is None:
            return None
        needle = primary.lower()
        for name in self.names():
            if needle not in name.lower():
                return name
        return None

    def is_valid(self) -> bool:
        return is_valid_abn(self.abn)

    def is_valid_acn(self) -> bool:
        return is_valid_acn(self.acn)

    def formatted_abn(self) -> str:
        return format_abn(self.abn)

    def formatted_acn(self) -> str:
        return format_acn(self.acn)

    def __str__(self) -> str:
        return self.formatted_abn()

    def update_from_abr(self, client: AbnSearchClient) -> Entity:
        """Replace all registry fields with a fresh lookup by ABN."""
        self._apply(client.search(self.abn))
        return self

    def update_from_abr_using_acn(self, client: AbnSearchClient) -> Entity:
        """Replace all registry fields with a fresh lookup by ACN."""
        self._apply(client.search_by_acn(self.acn))
        return self

    def to_dict(self) -> dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["primary_name"] = self.primary_name
        d["secondary_name"] = self.secondary_name
        return d

    def _apply(self, detail: LookupResult) -> None:
        # Map first so a failed lookup leaves the entity untouched
        mapped = map_abr_detail(detail)
        for name, value in mapped.items():
            setattr(self, name, value)
        self.abn = normalize_abn(self.abn)
        self.acn = normalize_acn(self.acn)
