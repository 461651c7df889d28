from __future__ import annotations

import pytest

from iban import Iban
from iban_bban import BbanEntryType
from iban_countries import CountryCode
from iban_errors import IbanFormatError, IbanFormatViolation
from iban_registry import STRUCTURES, get_structure, iban_length, is_supported, supported_countries

# Total IBAN lengths published in the SWIFT IBAN registry.
REGISTRY_LENGTHS = {
    "AD": 24, "AE": 23, "AL": 28, "AT": 20, "AZ": 28, "BA": 20, "BE": 16, "BG": 22,
    "BH": 22, "BR": 29, "CH": 21, "CR": 22, "CY": 28, "CZ": 24, "DE": 22, "DK": 18,
    "DO": 28, "EE": 20, "EG": 29, "ES": 24, "FI": 18, "FO": 18, "FR": 27, "GB": 22,
    "GE": 22, "GI": 23, "GL": 18, "GR": 27, "GT": 28, "HR": 21, "HU": 28, "IE": 22,
    "IL": 23, "IQ": 23, "IS": 26, "IT": 27, "JO": 30, "KW": 30, "KZ": 20, "LB": 28,
    "LC": 32, "LI": 21, "LT": 20, "LU": 20, "LV": 21, "MC": 27, "MD": 24, "ME": 22,
    "MK": 19, "MR": 27, "MT": 31, "MU": 30, "NI": 28, "NL": 18, "NO": 15, "PK": 24,
    "PL": 28, "PS": 29, "PT": 25, "QA": 29, "RO": 24, "RS": 22, "SA": 24, "SC": 31,
    "SE": 24, "SI": 19, "SK": 24, "SM": 27, "TL": 23, "TN": 24, "TR": 26, "UA": 29,
    "VA": 22, "VG": 24, "XK": 20,
}


@pytest.mark.parametrize("country, expected", sorted(REGISTRY_LENGTHS.items()))
def test_iban_length_matches_registry(country: str, expected: int) -> None:
    assert iban_length(country) == expected


def test_is_supported() -> None:
    assert is_supported(CountryCode.AT)
    assert is_supported("DE")
    assert is_supported("AUT")
    assert not is_supported(CountryCode.AM)
    assert not is_supported(CountryCode.US)
    assert not is_supported("ZZ")
    assert not is_supported("")
    assert not is_supported(None)


def test_get_structure_for_unsupported_country_is_none() -> None:
    assert get_structure(CountryCode.AM) is None
    assert get_structure("ZZ") is None
    assert iban_length("ZZ") is None


def test_supported_countries_sorted() -> None:
    countries = supported_countries()
    assert countries == sorted(countries, key=lambda country: country.alpha2)
    assert CountryCode.AT in countries
    assert CountryCode.AM not in countries
    assert len(countries) == len(STRUCTURES)


def test_structures_are_read_only() -> None:
    with pytest.raises(TypeError):
        STRUCTURES[CountryCode.AM] = get_structure("AT")  # type: ignore[index]


# Example IBAN of every supported country, as printed in the SWIFT IBAN registry.
REGISTRY_EXAMPLES = [
    "AD1200012030200359100100",
    "AE070331234567890123456",
    "AL47212110090000000235698741",
    "AT611904300234573201",
    "AZ21NABZ00000000137010001944",
    "BA391290079401028494",
    "BE68539007547034",
    "BG80BNBG96611020345678",
    "BH67BMAG00001299123456",
    "BI4210000100010000332045181",
    "BR1800360305000010009795493C1",
    "BY13NBRB3600900000002Z00AB00",
    "CH9300762011623852957",
    "CR05015202001026284066",
    "CY17002001280000001200527600",
    "CZ6508000000192000145399",
    "DE89370400440532013000",
    "DJ2100010000000154000100186",
    "DK5000400440116243",
    "DO28BAGR00000001212453611324",
    "EE382200221020145685",
    "EG380019000500000000263180002",
    "ES9121000418450200051332",
    "FI2112345600000785",
    "FK88SC123456789012",
    "FO6264600001631634",
    "FR1420041010050500013M02606",
    "GB29NWBK60161331926819",
    "GE29NB0000000101904917",
    "GI75NWBK000000007099453",
    "GL8964710001000206",
    "GR1601101250000000012300695",
    "GT82TRAJ01020000001210029690",
    "HN88CABF00000000000250005469",
    "HR1210010051863000160",
    "HU42117730161111101800000000",
    "IE29AIBK93115212345678",
    "IL620108000000099999999",
    "IQ98NBIQ850123456789012",
    "IS140159260076545510730339",
    "IT60X0542811101000000123456",
    "JO94CBJO0010000000000131000302",
    "KW81CBKU0000000000001234560101",
    "KZ86125KZT5004100100",
    "LB62099900000001001901229114",
    "LC55HEMM000100010012001200023015",
    "LI21088100002324013AA",
    "LT121000011101001000",
    "LU280019400644750000",
    "LV80BANK0000435195001",
    "LY83002048000020100120361",
    "MC5811222000010123456789030",
    "MD24AG000225100013104168",
    "ME25505000012345678951",
    "MK07250120000058984",
    "MN121234123456789123",
    "MR1300020001010000123456753",
    "MT84MALT011000012345MTLCAST001S",
    "MU17BOMM0101101030300200000MUR",
    "NI45BAPR00000013000003558124",
    "NL91ABNA0417164300",
    "NO9386011117947",
    "OM810180000001299123456",
    "PK36SCBL0000001123456702",
    "PL61109010140000071219812874",
    "PS92PALS000000000400123456702",
    "PT50000201231234567890154",
    "QA58DOHB00001234567890ABCDEFG",
    "RO49AAAA1B31007593840000",
    "RS35260005601001611379",
    "RU0204452560040702810412345678901",
    "SA0380000000608010167519",
    "SC18SSCB11010000000000001497USD",
    "SD2129010501234001",
    "SE4550000000058398257466",
    "SI56263300012039086",
    "SK3112000000198742637541",
    "SM86U0322509800000000270100",
    "SO211000001001000100141",
    "ST23000100010051845310146",
    "SV62CENR00000000000000700025",
    "TL380080012345678910157",
    "TN5910006035183598478831",
    "TR330006100519786457841326",
    "UA213223130000026007233566001",
    "VA59001123000012345678",
    "VG96VPVG0000012345678901",
    "XK051212012345678906",
    "YE15CBYE0001018861234567891234",
]


@pytest.mark.parametrize("example", REGISTRY_EXAMPLES)
def test_value_of_accepts_registry_example(example: str) -> None:
    assert Iban.value_of(example).to_string() == example


def test_every_supported_country_has_registry_example() -> None:
    examples = {example[:2] for example in REGISTRY_EXAMPLES}
    assert examples == {country.alpha2 for country in supported_countries()}


def test_ae_account_number_is_numeric() -> None:
    with pytest.raises(IbanFormatError) as excinfo:
        Iban.builder().country_code("AE").bank_code("033").account_number("12345678901234A6").build()
    assert excinfo.value.violation is IbanFormatViolation.BBAN_ONLY_DIGITS
    assert excinfo.value.entry_type is BbanEntryType.ACCOUNT_NUMBER


def test_tr_national_check_digit_is_numeric() -> None:
    with pytest.raises(IbanFormatError) as excinfo:
        Iban.builder().country_code("TR").bank_code("00061").national_check_digit("A") \
            .account_number("0519786457841326").build()
    assert excinfo.value.violation is IbanFormatViolation.BBAN_ONLY_DIGITS
    assert excinfo.value.entry_type is BbanEntryType.NATIONAL_CHECK_DIGIT


def test_ni_fields() -> None:
    iban = Iban.value_of("NI45BAPR00000013000003558124")
    assert iban.bank_code == "BAPR"
    assert iban.account_number == "00000013000003558124"
