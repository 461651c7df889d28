# iban_utils.py
"""ISO 7064 MOD-97-10 check digits and input normalisation."""
import re

from iban_errors import IbanFormatError, IbanFormatViolation, InvalidCheckDigitError

MOD = 97
MAX_CHECK = 98


def normalize_iban(iban: str) -> str:
    """Remove spaces and make upper-case."""
    return re.sub(r"\s+", "", iban).upper()


def _char_value(ch: str) -> int:
    """Numeric value of an IBAN character: 0-9 for digits, A=10 ... Z=35."""
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "A" <= ch <= "Z":
        return ord(ch) - 55
    raise ValueError(f"Invalid character in IBAN: {ch!r}")


def iban_to_numeric(value: str) -> str:
    """
    Convert IBAN letters to numbers (A=10 ... Z=35) for MOD97 check.
    """
    return "".join(str(_char_value(ch)) for ch in value)


def calculate_mod97(value: str) -> int:
    """
    Compute value % 97 with every letter read as its two-digit number,
    using the official IBAN iterative algorithm.

    The running remainder never exceeds 96, so no big integer is built.
    """
    remainder = 0
    for ch in value:
        number = _char_value(ch)
        if number > 9:
            remainder = (remainder * 100 + number) % MOD
        else:
            remainder = (remainder * 10 + number) % MOD
    return remainder


def compute_check_digits(country_code: str, bban: str) -> str:
    """
    Check digits for a BBAN: rearrange as BBAN + country + "00" and take
    98 - (result % 97), left padded to two digits.
    """
    remainder = calculate_mod97(bban + country_code + "00")
    return f"{MAX_CHECK - remainder:02d}"


def validate_check_digit(iban: str) -> None:
    """
    Raise InvalidCheckDigitError unless the rearranged IBAN is 1 modulo 97.

    Expects canonical input (see ``normalize_iban``); any other character
    raises IbanFormatError.
    """
    country_code, check_digit, bban = iban[:2], iban[2:4], iban[4:]
    try:
        remainder = calculate_mod97(bban + country_code + check_digit)
    except ValueError as exc:
        raise IbanFormatError(
            IbanFormatViolation.UNKNOWN,
            f"[{iban}] must contain only digits and upper case letters.",
            actual=iban,
        ) from exc
    if remainder == 1:
        return

    expected = compute_check_digits(country_code, bban)
    raise InvalidCheckDigitError(
        check_digit,
        expected,
        f"[{iban}] has invalid check digit: {check_digit}, expected check digit is: {expected}",
    )
