"""IBAN value object, builder and parser."""
from __future__ import annotations

import random
import string
from dataclasses import dataclass
from typing import Optional

import iban_utils
from iban_bban import BbanEntryType, BbanStructure, extract_field, validate_bban
from iban_countries import CountryCode
from iban_errors import IbanError, IbanFormatError, IbanFormatViolation, UnsupportedCountryError
from iban_registry import CountryLike, get_structure, supported_countries

COUNTRY_CODE_LENGTH = 2
CHECK_DIGIT_LENGTH = 2
BBAN_OFFSET = COUNTRY_CODE_LENGTH + CHECK_DIGIT_LENGTH
GROUP_SIZE = 4

# keyword names accepted by Iban.random()
FIELD_NAMES: dict[str, BbanEntryType] = {
    "bank_code": BbanEntryType.BANK_CODE,
    "branch_code": BbanEntryType.BRANCH_CODE,
    "account_number": BbanEntryType.ACCOUNT_NUMBER,
    "national_check_digit": BbanEntryType.NATIONAL_CHECK_DIGIT,
    "account_type": BbanEntryType.ACCOUNT_TYPE,
    "owner_account_type": BbanEntryType.OWNER_ACCOUNT_NUMBER,
    "identification_number": BbanEntryType.IDENTIFICATION_NUMBER,
}


def _only_digits(value: str) -> bool:
    return all(ch in string.digits for ch in value)


def _only_upper_case_letters(value: str) -> bool:
    return all(ch in string.ascii_uppercase for ch in value)


def _check_check_digit_format(check_digit: str) -> None:
    if len(check_digit) != CHECK_DIGIT_LENGTH:
        raise IbanFormatError(
            IbanFormatViolation.CHECK_DIGIT_TWO_DIGITS,
            f"Check digit must be two digits, got [{check_digit}].",
            expected=CHECK_DIGIT_LENGTH,
            actual=check_digit,
        )
    if not _only_digits(check_digit):
        raise IbanFormatError(
            IbanFormatViolation.CHECK_DIGIT_ONLY_DIGITS,
            f"Iban's check digit should contain only digits, got [{check_digit}].",
            actual=check_digit,
        )


def _require_structure(country_code: Optional[CountryLike]) -> tuple[CountryCode, BbanStructure]:
    if country_code is None:
        raise UnsupportedCountryError(None, "Country code is required.")

    if isinstance(country_code, CountryCode):
        country, code = country_code, country_code.alpha2
    else:
        code = str(country_code)
        country = CountryCode.get_by_code(code)
    structure = get_structure(country) if country is not None else None
    if country is None or structure is None:
        raise UnsupportedCountryError(code, f"Country code: {code} is not supported.")
    return country, structure


@dataclass(frozen=True, eq=False)
class Iban:
    """
    An International Bank Account Number.

    Create instances with ``Iban.value_of`` or ``IbanBuilder.build``; the
    constructor itself does not validate. Field accessors slice the BBAN
    using the country's structure and return ``None`` when the country has
    no such field. They raise ``UnsupportedCountryError`` for a country
    without an IBAN structure.
    """

    country_code: CountryCode
    check_digit: str
    bban: str

    @classmethod
    def builder(cls) -> "IbanBuilder":
        return IbanBuilder()

    @classmethod
    def value_of(cls, iban: Optional[str]) -> "Iban":
        """
        Parse and validate a canonical IBAN string (no spaces, upper case).

        Raises:
            IbanFormatError: the string is malformed.
            UnsupportedCountryError: the country has no IBAN structure.
            InvalidCheckDigitError: the check digits do not match.
        """
        if iban is None:
            raise IbanFormatError(IbanFormatViolation.IBAN_NOT_NULL, "Null can't be a valid Iban.")
        if not iban:
            raise IbanFormatError(IbanFormatViolation.IBAN_NOT_EMPTY, "Empty string can't be a valid Iban.")
        if len(iban) < COUNTRY_CODE_LENGTH:
            raise IbanFormatError(
                IbanFormatViolation.COUNTRY_CODE_TWO_LETTERS,
                f"Iban must contain 2 letter country code, got [{iban}].",
                expected=COUNTRY_CODE_LENGTH,
                actual=iban,
            )
        if len(iban) < BBAN_OFFSET:
            raise IbanFormatError(
                IbanFormatViolation.CHECK_DIGIT_TWO_DIGITS,
                f"Iban must contain 2 digit check digit, got [{iban}].",
                expected=BBAN_OFFSET,
                actual=iban,
            )

        code = iban[:COUNTRY_CODE_LENGTH]
        if not _only_upper_case_letters(code):
            raise IbanFormatError(
                IbanFormatViolation.COUNTRY_CODE_UPPER_CASE_LETTERS,
                f"Iban country code must contain upper case letters, got [{code}].",
                actual=code,
            )
        country, structure = _require_structure(code)

        check_digit = iban[COUNTRY_CODE_LENGTH:BBAN_OFFSET]
        _check_check_digit_format(check_digit)

        bban = iban[BBAN_OFFSET:]
        validate_bban(structure, bban)
        iban_utils.validate_check_digit(iban)
        return cls(country, check_digit, bban)

    @classmethod
    def is_valid(cls, iban: Optional[str]) -> bool:
        try:
            cls.value_of(iban)
        except IbanError:
            return False
        return True

    @classmethod
    def random(
        cls,
        country_code: Optional[CountryLike] = None,
        rng: Optional[random.Random] = None,
        **fields: str,
    ) -> "Iban":
        """
        A valid IBAN with random field values.

        Any field passed by keyword (``bank_code="19043"``) is kept as given.
        Without a country one of the supported countries is picked.
        """
        builder = IbanBuilder()
        if country_code is not None:
            builder.country_code(country_code)
        for name, value in fields.items():
            if name not in FIELD_NAMES:
                raise TypeError(f"Unknown IBAN field: {name}")
            builder.field(FIELD_NAMES[name], value)
        return builder.build_random(rng)

    @property
    def structure(self) -> BbanStructure:
        structure = get_structure(self.country_code)
        if structure is None:
            code = self.country_code.alpha2
            raise UnsupportedCountryError(code, f"Country code: {code} is not supported.")
        return structure

    def _field(self, entry_type: BbanEntryType) -> Optional[str]:
        return extract_field(self.structure, self.bban, entry_type)

    @property
    def bank_code(self) -> Optional[str]:
        return self._field(BbanEntryType.BANK_CODE)

    @property
    def branch_code(self) -> Optional[str]:
        return self._field(BbanEntryType.BRANCH_CODE)

    @property
    def account_number(self) -> Optional[str]:
        return self._field(BbanEntryType.ACCOUNT_NUMBER)

    @property
    def national_check_digit(self) -> Optional[str]:
        return self._field(BbanEntryType.NATIONAL_CHECK_DIGIT)

    @property
    def account_type(self) -> Optional[str]:
        return self._field(BbanEntryType.ACCOUNT_TYPE)

    @property
    def owner_account_type(self) -> Optional[str]:
        return self._field(BbanEntryType.OWNER_ACCOUNT_NUMBER)

    @property
    def identification_number(self) -> Optional[str]:
        return self._field(BbanEntryType.IDENTIFICATION_NUMBER)

    def to_string(self) -> str:
        return f"{self.country_code.alpha2}{self.check_digit}{self.bban}"

    def to_formatted_string(self) -> str:
        """Canonical form with a single space after every 4 characters."""
        value = self.to_string()
        return " ".join(value[i:i + GROUP_SIZE] for i in range(0, len(value), GROUP_SIZE))

    def __str__(self) -> str:
        return self.to_string()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Iban):
            return NotImplemented
        return self.to_string() == other.to_string()

    def __hash__(self) -> int:
        return hash(self.to_string())


class IbanBuilder:
    """
    Collects IBAN fields and turns them into an ``Iban``.

    Setters return the builder so calls can be chained::

        Iban.builder().country_code(CountryCode.AT).bank_code("19043") \\
            .account_number("00234573201").build()

    Not safe to share between threads while fields are being set.
    """

    def __init__(self) -> None:
        self._country_code: Optional[CountryLike] = None
        self._fields: dict[BbanEntryType, str] = {}
        self._check_digit: Optional[str] = None

    def country_code(self, country_code: CountryLike) -> "IbanBuilder":
        self._country_code = country_code
        return self

    def field(self, entry_type: BbanEntryType, value: str) -> "IbanBuilder":
        self._fields[BbanEntryType(entry_type)] = value
        return self

    def bank_code(self, bank_code: str) -> "IbanBuilder":
        return self.field(BbanEntryType.BANK_CODE, bank_code)

    def branch_code(self, branch_code: str) -> "IbanBuilder":
        return self.field(BbanEntryType.BRANCH_CODE, branch_code)

    def account_number(self, account_number: str) -> "IbanBuilder":
        return self.field(BbanEntryType.ACCOUNT_NUMBER, account_number)

    def national_check_digit(self, national_check_digit: str) -> "IbanBuilder":
        return self.field(BbanEntryType.NATIONAL_CHECK_DIGIT, national_check_digit)

    def account_type(self, account_type: str) -> "IbanBuilder":
        return self.field(BbanEntryType.ACCOUNT_TYPE, account_type)

    def owner_account_type(self, owner_account_type: str) -> "IbanBuilder":
        return self.field(BbanEntryType.OWNER_ACCOUNT_NUMBER, owner_account_type)

    def identification_number(self, identification_number: str) -> "IbanBuilder":
        return self.field(BbanEntryType.IDENTIFICATION_NUMBER, identification_number)

    def check_digit(self, check_digit: str) -> "IbanBuilder":
        self._check_digit = check_digit
        return self

    def build(self, validate_check_digit: bool = True) -> Iban:
        """
        Build the IBAN.

        The check digit is computed unless one was set explicitly. An explicit
        check digit is verified against the BBAN unless
        ``validate_check_digit`` is false.
        """
        country, structure = _require_structure(self._country_code)
        bban = self._assemble_bban(country, structure)
        return self._finish(country, structure, bban, validate_check_digit)

    def build_random(self, rng: Optional[random.Random] = None) -> Iban:
        """
        Build an IBAN, filling every unset field with random characters.

        The builder itself is left untouched, so each call draws fresh values.
        """
        rng = rng or random.Random()
        country_code = self._country_code
        if country_code is None:
            country_code = rng.choice(supported_countries())
        country, structure = _require_structure(country_code)
        bban = self._assemble_bban(country, structure, rng)
        return self._finish(country, structure, bban, True)

    def _assemble_bban(
        self,
        country: CountryCode,
        structure: BbanStructure,
        rng: Optional[random.Random] = None,
    ) -> str:
        parts = []
        for entry in structure:
            value = self._fields.get(entry.entry_type)
            if value is None and rng is not None:
                value = "".join(entry.character_type.random_char(rng) for _ in range(entry.length))
            if value is None:
                raise IbanFormatError(
                    IbanFormatViolation.BBAN_ENTRY_MISSING,
                    f"{entry.entry_type} is required for {country.alpha2} IBAN.",
                    expected=entry.length,
                    entry_type=entry.entry_type,
                )
            parts.append(value)
        return "".join(parts)

    def _finish(
        self,
        country: CountryCode,
        structure: BbanStructure,
        bban: str,
        validate_check_digit: bool,
    ) -> Iban:
        validate_bban(structure, bban)

        if self._check_digit is None:
            return Iban(country, iban_utils.compute_check_digits(country.alpha2, bban), bban)

        _check_check_digit_format(self._check_digit)
        iban = Iban(country, self._check_digit, bban)
        if validate_check_digit:
            iban_utils.validate_check_digit(iban.to_string())
        return iban
