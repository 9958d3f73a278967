"""Validate enriched entity records."""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from abn_search.entity import Entity
from abn_search.identifiers import is_valid_abn, is_valid_acn

STATE_CODES = frozenset({"NSW", "QLD", "VIC", "SA", "WA", "TAS", "ACT", "NT"})

_RE_POSTCODE = re.compile(r"^\d{4}$")


@dataclass
class ValidationError:
    """A single validation issue (error or warning)."""

    row: int  # 1-based position in the input
    field: str
    value: str | None
    message: str

    def __str__(self) -> str:
        return f"Row {self.row} [{self.field}]: {self.message} (value={self.value!r})"


@dataclass
class ValidationResult:
    """Result of validating a batch of entities."""

    errors: list[ValidationError]
    warnings: list[ValidationError]

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0


def validate_entities(entities: Iterable[Entity]) -> ValidationResult:
    """Validate entities returned by the registry.

    Errors:
    - ABN, if present, must pass the modulus 89 checksum
    - ACN, if present, must pass the modulus 10 checksum

    Warnings (the registry omits or abbreviates these often):
    - no name at all
    - state code outside the eight states and territories
    - postcode that is not four digits
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    for row, entity in enumerate(entities, start=1):
        if entity.abn is not None and not is_valid_abn(entity.abn):
            errors.append(ValidationError(row, "abn", entity.abn, "ABN checksum mismatch"))
        if entity.acn is not None and not is_valid_acn(entity.acn):
            errors.append(ValidationError(row, "acn", entity.acn, "ACN checksum mismatch"))

        if entity.primary_name is None:
            warnings.append(ValidationError(row, "names", None, "Entity has no name"))
        state = entity.address_state_code
        if state is not None and state not in STATE_CODES:
            warnings.append(ValidationError(row, "address_state_code", state, "Unknown state code"))
        postcode = entity.address_post_code
        if postcode is not None and not _RE_POSTCODE.match(postcode):
            warnings.append(
                ValidationError(row, "address_post_code", postcode, "Expected 4 digit postcode")
            )

    return ValidationResult(errors=errors, warnings=warnings)
