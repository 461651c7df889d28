"""IBAN validation, construction and generation service for MCP."""
from __future__ import annotations

from fastmcp import FastMCP
from pydantic import BaseModel

from iban import Iban, IbanBuilder
from iban_errors import IbanError
from iban_registry import get_structure, supported_countries
from iban_utils import normalize_iban
from mcp_framework import error_payload, log_interaction


class IbanDetails(BaseModel):
    iban: str
    formatted: str
    country: str
    check_digit: str
    bban: str
    bank_code: str | None = None
    branch_code: str | None = None
    account_number: str | None = None
    national_check_digit: str | None = None
    account_type: str | None = None
    owner_account_type: str | None = None
    identification_number: str | None = None


class IbanResult(BaseModel):
    valid: bool
    normalized_iban: str
    country: str | None = None
    error_kind: str | None = None
    reason: str | None = None
    details: IbanDetails | None = None


class CountryInfo(BaseModel):
    country: str
    alpha3: str
    name: str
    bban_format: str
    iban_length: int


def describe_iban(iban: Iban) -> IbanDetails:
    return IbanDetails(
        iban=iban.to_string(),
        formatted=iban.to_formatted_string(),
        country=iban.country_code.alpha2,
        check_digit=iban.check_digit,
        bban=iban.bban,
        bank_code=iban.bank_code,
        branch_code=iban.branch_code,
        account_number=iban.account_number,
        national_check_digit=iban.national_check_digit,
        account_type=iban.account_type,
        owner_account_type=iban.owner_account_type,
        identification_number=iban.identification_number,
    )


def check_iban(iban: str) -> IbanResult:
    """
    Validate an IBAN and return structured result.

    A failed validation is the answer here, not an error: it is reported
    through ``valid``, ``error_kind`` and ``reason``.
    """

    normalized = normalize_iban(iban)
    try:
        parsed = Iban.value_of(normalized)
    except IbanError as exc:
        result = IbanResult(
            valid=False,
            normalized_iban=normalized,
            country=normalized[:2] or None,
            error_kind=exc.kind.value,
            reason=str(exc),
        )
    else:
        result = IbanResult(
            valid=True,
            normalized_iban=normalized,
            country=parsed.country_code.alpha2,
            reason="IBAN is valid.",
            details=describe_iban(parsed),
        )

    log_interaction("iban_check", {"iban": iban}, result.model_dump(exclude_none=True))
    return result


def build_iban(
    country_code: str,
    bank_code: str | None = None,
    branch_code: str | None = None,
    account_number: str | None = None,
    national_check_digit: str | None = None,
    account_type: str | None = None,
    owner_account_type: str | None = None,
    identification_number: str | None = None,
    check_digit: str | None = None,
    validate_check_digit: bool = True,
) -> IbanDetails:
    """Assemble an IBAN from its fields, computing the check digits if absent."""

    fields = {
        "bank_code": bank_code,
        "branch_code": branch_code,
        "account_number": account_number,
        "national_check_digit": national_check_digit,
        "account_type": account_type,
        "owner_account_type": owner_account_type,
        "identification_number": identification_number,
    }
    input_payload = {
        "country_code": country_code,
        **{k: v for k, v in fields.items() if v is not None},
        "check_digit": check_digit,
        "validate_check_digit": validate_check_digit,
    }

    builder = IbanBuilder().country_code(country_code.strip().upper())
    for name, value in fields.items():
        if value is not None:
            getattr(builder, name)(value)
    if check_digit is not None:
        builder.check_digit(check_digit)

    try:
        details = describe_iban(builder.build(validate_check_digit=validate_check_digit))
    except IbanError as exc:
        log_interaction("iban_build_error", input_payload, error_payload(exc))
        raise

    log_interaction("iban_build", input_payload, details.model_dump(exclude_none=True))
    return details


def random_iban(country_code: str | None = None) -> IbanDetails:
    """Generate a valid IBAN with random account data."""

    country = country_code.strip().upper() if country_code else None
    try:
        details = describe_iban(Iban.random(country))
    except IbanError as exc:
        log_interaction("iban_random_error", {"country_code": country_code}, error_payload(exc))
        raise

    log_interaction("iban_random", {"country_code": country_code}, details.model_dump(exclude_none=True))
    return details


def format_iban(iban: str) -> dict[str, str]:
    """Return the canonical and the grouped-by-four form of a valid IBAN."""

    try:
        parsed = Iban.value_of(normalize_iban(iban))
    except IbanError as exc:
        log_interaction("iban_format_error", {"iban": iban}, error_payload(exc))
        raise

    output = {"iban": parsed.to_string(), "formatted": parsed.to_formatted_string()}
    log_interaction("iban_format", {"iban": iban}, output)
    return output


def list_countries() -> list[CountryInfo]:
    """Countries with an IBAN structure, ordered by country code."""

    countries = []
    for country in supported_countries():
        structure = get_structure(country)
        countries.append(
            CountryInfo(
                country=country.alpha2,
                alpha3=country.alpha3,
                name=country.display_name,
                bban_format=structure.bban_format,
                iban_length=4 + structure.length(),
            )
        )
    log_interaction("iban_countries", {}, {"count": len(countries)})
    return countries


def register_iban_service(mcp: FastMCP) -> None:
    """Register IBAN tools on the provided MCP instance."""

    @mcp.tool()
    def iban_check(iban: str) -> IbanResult:
        """
        Validate an IBAN and return structured result.

        Args:
            iban: IBAN string (can contain spaces, lower/upper case)
        """
        return check_iban(iban)

    @mcp.tool()
    def iban_build(
        country_code: str,
        bank_code: str | None = None,
        branch_code: str | None = None,
        account_number: str | None = None,
        national_check_digit: str | None = None,
        account_type: str | None = None,
        owner_account_type: str | None = None,
        identification_number: str | None = None,
        check_digit: str | None = None,
        validate_check_digit: bool = True,
    ) -> IbanDetails:
        """
        Build an IBAN from bank code, branch code, account number and the
        other fields the country's BBAN requires.

        Args:
            country_code: ISO 3166 alpha-2 code, e.g. "AT"
            check_digit: optional explicit check digits; computed when omitted
            validate_check_digit: set to false to accept explicit check digits unverified
        """
        return build_iban(
            country_code,
            bank_code=bank_code,
            branch_code=branch_code,
            account_number=account_number,
            national_check_digit=national_check_digit,
            account_type=account_type,
            owner_account_type=owner_account_type,
            identification_number=identification_number,
            check_digit=check_digit,
            validate_check_digit=validate_check_digit,
        )

    @mcp.tool()
    def iban_random(country_code: str | None = None) -> IbanDetails:
        """Generate a random but valid IBAN, optionally for a given country."""
        return random_iban(country_code)

    @mcp.tool()
    def iban_format(iban: str) -> dict[str, str]:
        """Return the IBAN in canonical form and grouped in blocks of four."""
        return format_iban(iban)

    @mcp.tool()
    def iban_countries() -> list[CountryInfo]:
        """List the countries that use IBAN with their BBAN format and length."""
        return list_countries()
