"""Country registry: which countries use IBAN and the BBAN layout of each."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Union

from iban_bban import BbanStructure
from iban_bban import BbanStructureEntry as E
from iban_countries import CountryCode

CountryLike = Union[CountryCode, str]

# Layouts follow the SWIFT IBAN registry. n = digits, a = upper case letters,
# c = digits or upper case letters.
_STRUCTURES: dict[CountryCode, BbanStructure] = {
    CountryCode.AD: BbanStructure.of(E.bank_code(4, "n"), E.branch_code(4, "n"), E.account_number(12, "c")),
    CountryCode.AE: BbanStructure.of(E.bank_code(3, "n"), E.account_number(16, "n")),
    CountryCode.AL: BbanStructure.of(
        E.bank_code(3, "n"), E.branch_code(4, "n"), E.national_check_digit(1, "n"), E.account_number(16, "c")
    ),
    CountryCode.AT: BbanStructure.of(E.bank_code(5, "n"), E.account_number(11, "n")),
    CountryCode.AZ: BbanStructure.of(E.bank_code(4, "a"), E.account_number(20, "c")),
    CountryCode.BA: BbanStructure.of(
        E.bank_code(3, "n"), E.branch_code(3, "n"), E.account_number(8, "n"), E.national_check_digit(2, "n")
    ),
    CountryCode.BE: BbanStructure.of(E.bank_code(3, "n"), E.account_number(7, "n"), E.national_check_digit(2, "n")),
    CountryCode.BG: BbanStructure.of(
        E.bank_code(4, "a"), E.branch_code(4, "n"), E.account_type(2, "n"), E.account_number(8, "c")
    ),
    CountryCode.BH: BbanStructure.of(E.bank_code(4, "a"), E.account_number(14, "c")),
    CountryCode.BI: BbanStructure.of(
        E.bank_code(5, "n"), E.branch_code(5, "n"), E.account_number(11, "n"), E.national_check_digit(2, "n")
    ),
    CountryCode.BR: BbanStructure.of(
        E.bank_code(8, "n"),
        E.branch_code(5, "n"),
        E.account_number(10, "n"),
        E.account_type(1, "a"),
        E.owner_account_number(1, "c"),
    ),
    CountryCode.BY: BbanStructure.of(E.bank_code(4, "c"), E.branch_code(4, "n"), E.account_number(16, "c")),
    CountryCode.CH: BbanStructure.of(E.bank_code(5, "n"), E.account_number(12, "c")),
    CountryCode.CR: BbanStructure.of(E.bank_code(4, "n"), E.account_number(14, "n")),
    CountryCode.CY: BbanStructure.of(E.bank_code(3, "n"), E.branch_code(5, "n"), E.account_number(16, "c")),
    CountryCode.CZ: BbanStructure.of(E.bank_code(4, "n"), E.account_number(16, "n")),
    CountryCode.DE: BbanStructure.of(E.bank_code(8, "n"), E.account_number(10, "n")),
    CountryCode.DJ: BbanStructure.of(
        E.bank_code(5, "n"), E.branch_code(5, "n"), E.account_number(11, "n"), E.national_check_digit(2, "n")
    ),
    CountryCode.DK: BbanStructure.of(E.bank_code(4, "n"), E.account_number(10, "n")),
    CountryCode.DO: BbanStructure.of(E.bank_code(4, "c"), E.account_number(20, "n")),
    CountryCode.EE: BbanStructure.of(
        E.bank_code(2, "n"), E.branch_code(2, "n"), E.account_number(11, "n"), E.national_check_digit(1, "n")
    ),
    CountryCode.EG: BbanStructure.of(E.bank_code(4, "n"), E.branch_code(4, "n"), E.account_number(17, "n")),
    CountryCode.ES: BbanStructure.of(
        E.bank_code(4, "n"), E.branch_code(4, "n"), E.national_check_digit(2, "n"), E.account_number(10, "n")
    ),
    CountryCode.FI: BbanStructure.of(E.bank_code(6, "n"), E.account_number(7, "n"), E.national_check_digit(1, "n")),
    CountryCode.FK: BbanStructure.of(E.bank_code(2, "a"), E.account_number(12, "n")),
    CountryCode.FO: BbanStructure.of(E.bank_code(4, "n"), E.account_number(9, "n"), E.national_check_digit(1, "n")),
    CountryCode.FR: BbanStructure.of(
        E.bank_code(5, "n"), E.branch_code(5, "n"), E.account_number(11, "c"), E.national_check_digit(2, "n")
    ),
    CountryCode.GB: BbanStructure.of(E.bank_code(4, "a"), E.branch_code(6, "n"), E.account_number(8, "n")),
    CountryCode.GE: BbanStructure.of(E.bank_code(2, "a"), E.account_number(16, "n")),
    CountryCode.GI: BbanStructure.of(E.bank_code(4, "a"), E.account_number(15, "c")),
    CountryCode.GL: BbanStructure.of(E.bank_code(4, "n"), E.account_number(10, "n")),
    CountryCode.GR: BbanStructure.of(E.bank_code(3, "n"), E.branch_code(4, "n"), E.account_number(16, "c")),
    CountryCode.GT: BbanStructure.of(E.bank_code(4, "c"), E.account_number(20, "c")),
    CountryCode.HN: BbanStructure.of(E.bank_code(4, "a"), E.account_number(20, "n")),
    CountryCode.HR: BbanStructure.of(E.bank_code(7, "n"), E.account_number(10, "n")),
    CountryCode.HU: BbanStructure.of(
        E.bank_code(3, "n"), E.branch_code(4, "n"), E.account_number(16, "n"), E.national_check_digit(1, "n")
    ),
    CountryCode.IE: BbanStructure.of(E.bank_code(4, "a"), E.branch_code(6, "n"), E.account_number(8, "n")),
    CountryCode.IL: BbanStructure.of(E.bank_code(3, "n"), E.branch_code(3, "n"), E.account_number(13, "n")),
    CountryCode.IQ: BbanStructure.of(E.bank_code(4, "a"), E.branch_code(3, "n"), E.account_number(12, "n")),
    CountryCode.IS: BbanStructure.of(
        E.bank_code(4, "n"), E.branch_code(2, "n"), E.account_number(6, "n"), E.identification_number(10, "n")
    ),
    CountryCode.IT: BbanStructure.of(
        E.national_check_digit(1, "a"), E.bank_code(5, "n"), E.branch_code(5, "n"), E.account_number(12, "c")
    ),
    CountryCode.JO: BbanStructure.of(E.bank_code(4, "a"), E.branch_code(4, "n"), E.account_number(18, "c")),
    CountryCode.KW: BbanStructure.of(E.bank_code(4, "a"), E.account_number(22, "c")),
    CountryCode.KZ: BbanStructure.of(E.bank_code(3, "n"), E.account_number(13, "c")),
    CountryCode.LB: BbanStructure.of(E.bank_code(4, "n"), E.account_number(20, "c")),
    CountryCode.LC: BbanStructure.of(E.bank_code(4, "a"), E.account_number(24, "c")),
    CountryCode.LI: BbanStructure.of(E.bank_code(5, "n"), E.account_number(12, "c")),
    CountryCode.LT: BbanStructure.of(E.bank_code(5, "n"), E.account_number(11, "n")),
    CountryCode.LU: BbanStructure.of(E.bank_code(3, "n"), E.account_number(13, "c")),
    CountryCode.LV: BbanStructure.of(E.bank_code(4, "a"), E.account_number(13, "c")),
    CountryCode.LY: BbanStructure.of(E.bank_code(3, "n"), E.branch_code(3, "n"), E.account_number(15, "n")),
    CountryCode.MC: BbanStructure.of(
        E.bank_code(5, "n"), E.branch_code(5, "n"), E.account_number(11, "c"), E.national_check_digit(2, "n")
    ),
    CountryCode.MD: BbanStructure.of(E.bank_code(2, "c"), E.account_number(18, "c")),
    CountryCode.ME: BbanStructure.of(E.bank_code(3, "n"), E.account_number(13, "n"), E.national_check_digit(2, "n")),
    CountryCode.MK: BbanStructure.of(E.bank_code(3, "n"), E.account_number(10, "c"), E.national_check_digit(2, "n")),
    CountryCode.MN: BbanStructure.of(E.bank_code(4, "n"), E.account_number(12, "n")),
    CountryCode.MR: BbanStructure.of(
        E.bank_code(5, "n"), E.branch_code(5, "n"), E.account_number(11, "n"), E.national_check_digit(2, "n")
    ),
    CountryCode.MT: BbanStructure.of(E.bank_code(4, "a"), E.branch_code(5, "n"), E.account_number(18, "c")),
    CountryCode.MU: BbanStructure.of(E.bank_code(6, "c"), E.branch_code(2, "n"), E.account_number(18, "c")),
    CountryCode.NI: BbanStructure.of(E.bank_code(4, "a"), E.account_number(20, "n")),
    CountryCode.NL: BbanStructure.of(E.bank_code(4, "a"), E.account_number(10, "n")),
    CountryCode.NO: BbanStructure.of(E.bank_code(4, "n"), E.account_number(6, "n"), E.national_check_digit(1, "n")),
    CountryCode.OM: BbanStructure.of(E.bank_code(3, "n"), E.account_number(16, "c")),
    CountryCode.PK: BbanStructure.of(E.bank_code(4, "a"), E.account_number(16, "c")),
    CountryCode.PL: BbanStructure.of(
        E.bank_code(3, "n"), E.branch_code(4, "n"), E.national_check_digit(1, "n"), E.account_number(16, "n")
    ),
    CountryCode.PS: BbanStructure.of(E.bank_code(4, "a"), E.account_number(21, "c")),
    CountryCode.PT: BbanStructure.of(
        E.bank_code(4, "n"), E.branch_code(4, "n"), E.account_number(11, "n"), E.national_check_digit(2, "n")
    ),
    CountryCode.QA: BbanStructure.of(E.bank_code(4, "a"), E.account_number(21, "c")),
    CountryCode.RO: BbanStructure.of(E.bank_code(4, "a"), E.account_number(16, "c")),
    CountryCode.RS: BbanStructure.of(E.bank_code(3, "n"), E.account_number(13, "n"), E.national_check_digit(2, "n")),
    CountryCode.RU: BbanStructure.of(E.bank_code(9, "n"), E.branch_code(5, "n"), E.account_number(15, "c")),
    CountryCode.SA: BbanStructure.of(E.bank_code(2, "n"), E.account_number(18, "c")),
    CountryCode.SC: BbanStructure.of(
        E.bank_code(4, "a"), E.branch_code(4, "n"), E.account_number(16, "n"), E.account_type(3, "a")
    ),
    CountryCode.SD: BbanStructure.of(E.bank_code(2, "n"), E.account_number(12, "n")),
    CountryCode.SE: BbanStructure.of(E.bank_code(3, "n"), E.account_number(17, "n")),
    CountryCode.SI: BbanStructure.of(
        E.bank_code(2, "n"), E.branch_code(3, "n"), E.account_number(8, "n"), E.national_check_digit(2, "n")
    ),
    CountryCode.SK: BbanStructure.of(E.bank_code(4, "n"), E.account_number(16, "n")),
    CountryCode.SM: BbanStructure.of(
        E.national_check_digit(1, "a"), E.bank_code(5, "n"), E.branch_code(5, "n"), E.account_number(12, "c")
    ),
    CountryCode.SO: BbanStructure.of(E.bank_code(4, "n"), E.branch_code(3, "n"), E.account_number(12, "n")),
    CountryCode.ST: BbanStructure.of(
        E.bank_code(4, "n"), E.branch_code(4, "n"), E.account_number(11, "n"), E.national_check_digit(2, "n")
    ),
    CountryCode.SV: BbanStructure.of(E.bank_code(4, "a"), E.account_number(20, "n")),
    CountryCode.TL: BbanStructure.of(E.bank_code(3, "n"), E.account_number(14, "n"), E.national_check_digit(2, "n")),
    CountryCode.TN: BbanStructure.of(E.bank_code(2, "n"), E.branch_code(3, "n"), E.account_number(15, "c")),
    CountryCode.TR: BbanStructure.of(E.bank_code(5, "n"), E.national_check_digit(1, "n"), E.account_number(16, "c")),
    CountryCode.UA: BbanStructure.of(E.bank_code(6, "n"), E.account_number(19, "c")),
    CountryCode.VA: BbanStructure.of(E.bank_code(3, "n"), E.account_number(15, "n")),
    CountryCode.VG: BbanStructure.of(E.bank_code(4, "a"), E.account_number(16, "n")),
    CountryCode.XK: BbanStructure.of(
        E.bank_code(2, "n"), E.branch_code(2, "n"), E.account_number(10, "n"), E.national_check_digit(2, "n")
    ),
    CountryCode.YE: BbanStructure.of(E.bank_code(4, "a"), E.branch_code(4, "n"), E.account_number(18, "c")),
}

STRUCTURES: Mapping[CountryCode, BbanStructure] = MappingProxyType(_STRUCTURES)


def _resolve(country_code: Optional[CountryLike]) -> Optional[CountryCode]:
    if isinstance(country_code, CountryCode):
        return country_code
    if isinstance(country_code, str):
        return CountryCode.get_by_code(country_code)
    return None


def get_structure(country_code: Optional[CountryLike]) -> Optional[BbanStructure]:
    """Return the BBAN structure of a country, ``None`` if it has no IBAN."""
    country = _resolve(country_code)
    if country is None:
        return None
    return STRUCTURES.get(country)


def is_supported(country_code: Optional[CountryLike]) -> bool:
    return get_structure(country_code) is not None


def supported_countries() -> list[CountryCode]:
    return sorted(STRUCTURES, key=lambda country: country.alpha2)


def iban_length(country_code: CountryLike) -> Optional[int]:
    """Total IBAN length for a supported country (country + check digits + BBAN)."""
    structure = get_structure(country_code)
    if structure is None:
        return None
    return 4 + structure.length()
