"""Errors raised while parsing or building IBANs."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from iban_bban import BbanEntryType


class ErrorKind(str, Enum):
    FORMAT_VIOLATION = "format_violation"
    UNSUPPORTED_COUNTRY = "unsupported_country"
    INVALID_CHECK_DIGIT = "invalid_check_digit"


class IbanFormatViolation(str, Enum):
    UNKNOWN = "unknown"

    IBAN_NOT_NULL = "iban_not_null"
    IBAN_NOT_EMPTY = "iban_not_empty"

    CHECK_DIGIT_ONLY_DIGITS = "check_digit_only_digits"
    CHECK_DIGIT_TWO_DIGITS = "check_digit_two_digits"

    COUNTRY_CODE_TWO_LETTERS = "country_code_two_letters"
    COUNTRY_CODE_UPPER_CASE_LETTERS = "country_code_upper_case_letters"

    BBAN_LENGTH = "bban_length"
    BBAN_ONLY_DIGITS = "bban_only_digits"
    BBAN_ONLY_UPPER_CASE_LETTERS = "bban_only_upper_case_letters"
    BBAN_ONLY_DIGITS_OR_LETTERS = "bban_only_digits_or_letters"
    BBAN_ENTRY_MISSING = "bban_entry_missing"


class IbanError(ValueError):
    """Base class for every IBAN failure; ``kind`` tells the three apart."""

    kind: ErrorKind


class IbanFormatError(IbanError):
    """Raised when a string or a set of fields does not have IBAN format."""

    kind = ErrorKind.FORMAT_VIOLATION

    def __init__(
        self,
        violation: IbanFormatViolation,
        message: str,
        *,
        expected: Any = None,
        actual: Any = None,
        entry_type: Optional["BbanEntryType"] = None,
        invalid_character: Optional[str] = None,
        position: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.violation = violation
        self.expected = expected
        self.actual = actual
        self.entry_type = entry_type
        self.invalid_character = invalid_character
        self.position = position


class UnsupportedCountryError(IbanError):
    """Raised when the country is missing, unknown or has no IBAN structure."""

    kind = ErrorKind.UNSUPPORTED_COUNTRY

    def __init__(self, country_code: Optional[str], message: str) -> None:
        super().__init__(message)
        self.country_code = country_code


class InvalidCheckDigitError(IbanError):
    """Raised when the check digits do not satisfy MOD-97-10."""

    kind = ErrorKind.INVALID_CHECK_DIGIT

    def __init__(self, actual: str, expected: str, message: str) -> None:
        super().__init__(message)
        self.actual = actual
        self.expected = expected
