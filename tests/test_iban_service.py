from __future__ import annotations

import json
import logging

import pytest

from iban import Iban
from iban_errors import IbanFormatError, UnsupportedCountryError
from services.iban_service import (
    build_iban,
    check_iban,
    format_iban,
    list_countries,
    random_iban,
    register_iban_service,
)


class _RecordingMCP:
    def __init__(self) -> None:
        self.tools = {}

    def tool(self):
        def decorator(fn):
            self.tools[fn.__name__] = fn
            return fn

        return decorator


def _last_entry(caplog) -> dict:
    return json.loads(caplog.records[-1].getMessage())


def test_check_iban_valid_input_is_normalized() -> None:
    result = check_iban("at61 1904 3002 3457 3201")
    assert result.valid is True
    assert result.normalized_iban == "AT611904300234573201"
    assert result.country == "AT"
    assert result.error_kind is None
    assert result.details.bank_code == "19043"
    assert result.details.formatted == "AT61 1904 3002 3457 3201"


@pytest.mark.parametrize(
    "value, kind",
    [
        ("AT621904300234573201", "invalid_check_digit"),
        ("ZZ018786767", "unsupported_country"),
        ("AT61190430023457320", "format_violation"),
        ("", "format_violation"),
    ],
)
def test_check_iban_reports_error_kind(value: str, kind: str) -> None:
    result = check_iban(value)
    assert result.valid is False
    assert result.error_kind == kind
    assert result.reason
    assert result.details is None


def test_check_iban_logs_interaction(caplog) -> None:
    caplog.set_level(logging.INFO, logger="uvicorn.error")
    check_iban("AT611904300234573201")

    entry = _last_entry(caplog)
    assert entry["action"] == "iban_check"
    assert entry["input"] == {"iban": "AT611904300234573201"}
    assert entry["output"]["valid"] is True


def test_build_iban() -> None:
    details = build_iban(" at ", bank_code="19043", account_number="00234573201")
    assert details.iban == "AT611904300234573201"
    assert details.check_digit == "61"
    assert details.branch_code is None


def test_build_iban_with_unchecked_check_digit() -> None:
    details = build_iban(
        "AT",
        bank_code="19043",
        account_number="00234573201",
        check_digit="62",
        validate_check_digit=False,
    )
    assert details.iban == "AT621904300234573201"


def test_build_iban_failure_is_logged_and_raised(caplog) -> None:
    caplog.set_level(logging.INFO, logger="uvicorn.error")
    with pytest.raises(IbanFormatError):
        build_iban("AT", bank_code="19043")

    entry = _last_entry(caplog)
    assert entry["action"] == "iban_build_error"
    assert entry["output"]["kind"] == "format_violation"
    assert entry["output"]["type"] == "IbanFormatError"


def test_random_iban() -> None:
    details = random_iban("de")
    assert details.country == "DE"
    assert Iban.is_valid(details.iban)


def test_random_iban_unsupported_country() -> None:
    with pytest.raises(UnsupportedCountryError):
        random_iban("US")


def test_format_iban() -> None:
    assert format_iban("AT141904102345732012") == {
        "iban": "AT141904102345732012",
        "formatted": "AT14 1904 1023 4573 2012",
    }


def test_list_countries() -> None:
    countries = {info.country: info for info in list_countries()}
    assert countries["AT"].bban_format == "5n 11n"
    assert countries["AT"].iban_length == 20
    assert countries["GB"].alpha3 == "GBR"
    assert "US" not in countries


def test_register_iban_service_registers_tools() -> None:
    mcp = _RecordingMCP()
    register_iban_service(mcp)

    assert set(mcp.tools) == {"iban_check", "iban_build", "iban_random", "iban_format", "iban_countries"}
    assert mcp.tools["iban_check"]("AT611904300234573201").valid is True
    assert mcp.tools["iban_build"]("AT", bank_code="1904", account_number="102345732012").formatted == (
        "AT14 1904 1023 4573 2012"
    )
