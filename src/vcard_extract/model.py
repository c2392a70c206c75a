from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Field(Enum):
    """Output columns, declared in column order."""

    FULL_NAME = "FullName"
    CATEGORIES = "Categories"
    ORGANIZATION = "Organization"
    WORK_ADDRESS = "WorkAddress"
    HOME_ADDRESS = "HomeAddress"
    ADDRESS = "Address"
    CELL_PHONE = "CellPhone"
    WORK_PHONE = "WorkPhone"
    HOME_PHONE = "HomePhone"
    PHONE1 = "Phone1"
    PHONE2 = "Phone2"
    PHONE3 = "Phone3"
    WORK_EMAIL = "WorkEmail"
    HOME_EMAIL = "HomeEmail"
    EMAIL = "Email"
    NOTE = "Note"

    @property
    def column(self) -> str:
        return self.value


class Encoding(Enum):
    NONE = "none"
    TEXT = "text"
    HEX = "hex"


COLUMNS: list[str] = [f.column for f in Field]

# Slots for phones whose TYPE is missing or unrecognised, filled in order.
UNKNOWN_PHONE_SLOTS: tuple[Field, ...] = (Field.PHONE1, Field.PHONE2, Field.PHONE3)

PHONE_FIELDS: tuple[Field, ...] = (
    Field.CELL_PHONE, Field.WORK_PHONE, Field.HOME_PHONE, *UNKNOWN_PHONE_SLOTS,
)

EMAIL_FIELDS: tuple[Field, ...] = (Field.WORK_EMAIL, Field.HOME_EMAIL, Field.EMAIL)

# Multi-component values whose empty components are dropped after decoding.
STRUCTURED_FIELDS: tuple[Field, ...] = (
    Field.ORGANIZATION, Field.WORK_ADDRESS, Field.HOME_ADDRESS, Field.ADDRESS,
)


def _empty_values() -> dict[Field, str]:
    return {f: "" for f in Field}


@dataclass
class Record:
    values: dict[Field, str] = field(default_factory=_empty_values)

    def __getitem__(self, key: Field) -> str:
        if not isinstance(key, Field):
            raise TypeError(f"Record keys must be Field members, not {key!r}")
        return self.values[key]

    def __setitem__(self, key: Field, value: str) -> None:
        if not isinstance(key, Field):
            raise TypeError(f"Record keys must be Field members, not {key!r}")
        self.values[key] = value

    def as_dict(self) -> dict[str, str]:
        return {f.column: self.values[f] for f in Field}

    def as_row(self) -> list[str]:
        return [self.values[f] for f in Field]

    def label(self) -> str:
        return self.values[Field.FULL_NAME] or self.values[Field.ORGANIZATION] or "Unnamed"

    def has_phone(self) -> bool:
        return any(self.values[f] for f in PHONE_FIELDS)

    def has_email(self) -> bool:
        return any(self.values[f] for f in EMAIL_FIELDS)
