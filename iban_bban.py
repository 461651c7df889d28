"""BBAN grammar: typed, fixed-length fields laid out per country."""
from __future__ import annotations

import random
import string
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from iban_errors import IbanFormatError, IbanFormatViolation


class BbanEntryType(str, Enum):
    BANK_CODE = "bank_code"
    BRANCH_CODE = "branch_code"
    NATIONAL_CHECK_DIGIT = "national_check_digit"
    ACCOUNT_NUMBER = "account_number"
    ACCOUNT_TYPE = "account_type"
    OWNER_ACCOUNT_NUMBER = "owner_account_number"
    IDENTIFICATION_NUMBER = "identification_number"

    def __str__(self) -> str:
        return self.value


class BbanCharacterType(str, Enum):
    """Allowed alphabet of a BBAN field, keyed by the registry letter."""

    NUMERIC = "n"
    ALPHA = "a"
    ALPHANUMERIC = "c"

    @property
    def alphabet(self) -> str:
        return _ALPHABETS[self]

    def matches(self, ch: str) -> bool:
        return ch in self.alphabet

    def random_char(self, rng: Optional[random.Random] = None) -> str:
        return (rng or random).choice(self.alphabet)


_ALPHABETS = {
    BbanCharacterType.NUMERIC: string.digits,
    BbanCharacterType.ALPHA: string.ascii_uppercase,
    BbanCharacterType.ALPHANUMERIC: string.digits + string.ascii_uppercase,
}

_VIOLATIONS = {
    BbanCharacterType.NUMERIC: (IbanFormatViolation.BBAN_ONLY_DIGITS, "digits"),
    BbanCharacterType.ALPHA: (IbanFormatViolation.BBAN_ONLY_UPPER_CASE_LETTERS, "upper case letters"),
    BbanCharacterType.ALPHANUMERIC: (IbanFormatViolation.BBAN_ONLY_DIGITS_OR_LETTERS, "digits or upper case letters"),
}

CharacterTypeLike = Union[BbanCharacterType, str]


@dataclass(frozen=True)
class BbanStructureEntry:
    entry_type: BbanEntryType
    character_type: BbanCharacterType
    length: int

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError(f"BBAN entry length must be positive, got {self.length}.")

    def __str__(self) -> str:
        return f"{self.length}{self.character_type.value}"

    @classmethod
    def of(cls, entry_type: BbanEntryType, length: int, character_type: CharacterTypeLike) -> "BbanStructureEntry":
        return cls(entry_type, BbanCharacterType(character_type), length)

    @classmethod
    def bank_code(cls, length: int, character_type: CharacterTypeLike) -> "BbanStructureEntry":
        return cls.of(BbanEntryType.BANK_CODE, length, character_type)

    @classmethod
    def branch_code(cls, length: int, character_type: CharacterTypeLike) -> "BbanStructureEntry":
        return cls.of(BbanEntryType.BRANCH_CODE, length, character_type)

    @classmethod
    def account_number(cls, length: int, character_type: CharacterTypeLike) -> "BbanStructureEntry":
        return cls.of(BbanEntryType.ACCOUNT_NUMBER, length, character_type)

    @classmethod
    def national_check_digit(cls, length: int, character_type: CharacterTypeLike) -> "BbanStructureEntry":
        return cls.of(BbanEntryType.NATIONAL_CHECK_DIGIT, length, character_type)

    @classmethod
    def account_type(cls, length: int, character_type: CharacterTypeLike) -> "BbanStructureEntry":
        return cls.of(BbanEntryType.ACCOUNT_TYPE, length, character_type)

    @classmethod
    def owner_account_number(cls, length: int, character_type: CharacterTypeLike) -> "BbanStructureEntry":
        return cls.of(BbanEntryType.OWNER_ACCOUNT_NUMBER, length, character_type)

    @classmethod
    def identification_number(cls, length: int, character_type: CharacterTypeLike) -> "BbanStructureEntry":
        return cls.of(BbanEntryType.IDENTIFICATION_NUMBER, length, character_type)


@dataclass(frozen=True)
class BbanStructure:
    """Ordered BBAN entries of one country; offsets follow from the order."""

    entries: tuple[BbanStructureEntry, ...]

    @classmethod
    def of(cls, *entries: BbanStructureEntry) -> "BbanStructure":
        if not entries:
            raise ValueError("A BBAN structure needs at least one entry.")
        return cls(tuple(entries))

    def __iter__(self) -> Iterator[BbanStructureEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return self.length()

    def length(self) -> int:
        return sum(entry.length for entry in self.entries)

    def spans(self) -> Iterator[tuple[BbanStructureEntry, int, int]]:
        """Yield ``(entry, start, end)`` for each entry in BBAN order."""
        offset = 0
        for entry in self.entries:
            yield entry, offset, offset + entry.length
            offset += entry.length

    def entry_types(self) -> list[BbanEntryType]:
        return [entry.entry_type for entry in self.entries]

    @property
    def bban_format(self) -> str:
        return " ".join(str(entry) for entry in self.entries)


def validate_bban(structure: BbanStructure, bban: str) -> None:
    """Check ``bban`` against ``structure``; raise on the first violation."""
    expected_length = structure.length()
    if len(bban) != expected_length:
        raise IbanFormatError(
            IbanFormatViolation.BBAN_LENGTH,
            f"[{bban}] length is {len(bban)}, expected BBAN length is: {expected_length}",
            expected=expected_length,
            actual=len(bban),
        )

    for entry, start, end in structure.spans():
        for position in range(start, end):
            ch = bban[position]
            if entry.character_type.matches(ch):
                continue
            violation, label = _VIOLATIONS[entry.character_type]
            field = bban[start:end]
            raise IbanFormatError(
                violation,
                f"[{field}] must contain only {label}: invalid character '{ch}' "
                f"at position {position} of {entry.entry_type}.",
                actual=field,
                entry_type=entry.entry_type,
                invalid_character=ch,
                position=position,
            )


def extract_field(structure: BbanStructure, bban: str, entry_type: BbanEntryType) -> Optional[str]:
    """Return the part of ``bban`` held by ``entry_type``, or ``None``."""
    parts = [bban[start:end] for entry, start, end in structure.spans() if entry.entry_type == entry_type]
    if not parts:
        return None
    return "".join(parts)
