# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""Map nested ABR search payloads onto flat entity fields."""

from dataclasses import dataclass
from typing import Any

from abn_search.errors import RemoteError

SUCCESS = "success"
ERROR = "error"

# Entity field -> path of keys into a business entity payload
FIELD_PATHS: dict[str, tuple[str, ...]] = {
    "acn": ("asic_number",),
    "abn": ("abn", "identifier_value"),
    "abn_current": ("abn", "is_current_indicator"),
    "entity_type": ("entity_type", "entity_description"),
    "status": ("entity_status", "entity_status_code"),
    "main_name": ("main_name", "organisation_name"),
    "trading_name": ("main_trading_name", "organisation_name"),
    "business_name": ("business_name", "organisation_name"),
    "legal_name2": ("full_name",),
    "other_trading_name": ("other_trading_name", "organisation_name"),
    "active_from_date": ("entity_status", "effective_from"),
    "address_state_code": ("main_business_physical_address", "state_code"),
    "address_post_code": ("main_business_physical_address", "postcode"),
    "address_from_date": ("main_business_physical_address", "effective_from"),
    "last_updated": ("record_last_updated_date",),
    "gst_from_date": ("goods_and_services_tax", "effective_from"),
}


@dataclass(frozen=True)
class LookupResult:
    """Tagged registry answer: a business entity payload or an exception payload."""

    result: str  # SUCCESS or ERROR
    payload: Any

    @property
    def ok(self) -> bool:
        return self.result == SUCCESS


def dig(payload: Any, *path: str) -> Any:
    """Follow ``path`` through nested dicts, returning None at the first gap.

    A list met on the way (a repeated XML element) resolves to its first item.
    """
    node = payload
    for key in path:
        if isinstance(node, list):
            node = node[0] if node else None
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if isinstance(node, list):
        node = node[0] if node else None
    return node


def _flag(value: Any) -> bool | None:
    if value == "Y":
        return True
    if value == "N":
        return False
    return None


def _legal_name(body: Any) -> str | None:
    parts = [
        dig(body, "legal_name", "given_name"),
        dig(body, "legal_name", "family_name"),
    ]
    present = [p for p in parts if p]
    return " ".join(present) if present else None


def unwrap_response(response: Any, response_key: str, entity_key: str) -> LookupResult:
    """Turn a raw collaborator response into a LookupResult.

    Success when ``<response_key>.abr_payload_search_results.response.<entity_key>``
    exists, otherwise an error carrying the ``exception`` branch.
    """
    body = dig(response, response_key, "abr_payload_search_results", "response")
    entity = dig(body, entity_key)
    if entity is None:
        return LookupResult(result=ERROR, payload=dig(body, "exception"))
    return LookupResult(result=SUCCESS, payload=entity)


def map_abr_detail(detail: LookupResult) -> dict[str, Any]:
    """Build the entity field dict for a lookup result.

    Raises:
        RemoteError: if the result is an error, with the registry's own
                     exception description.
    """
    if not detail.ok:
        raise RemoteError(dig(detail.payload, "exception_description"))

    body = detail.payload
    fields: dict[str, Any] = {
        name: dig(body, *path) for name, path in FIELD_PATHS.items()
    }
    fields["abn_current"] = _flag(fields["abn_current"])
    fields["legal_name"] = _legal_name(body)
    return fields
