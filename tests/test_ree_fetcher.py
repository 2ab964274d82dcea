import datetime as dt
from unittest.mock import Mock

import pytest
import requests

from pvpc_api.exceptions import FetchError
from pvpc_api.models import ParseFault, PriceTuple
from pvpc_api.utils import ReePriceFetcher


def _response(payload=None, status_error=None, json_error=None):
    response = Mock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def test_transform_converts_mwh_strings_to_kwh(fetcher):
    batch = fetcher.transform({
        "PVPC": [
            {"Dia": "24/11/2023", "Hora": "00-01", "PCB": "113,87"},
            {"Dia": "24/11/2023", "Hora": "23-24", "PCB": "95,5"},
        ]
    })

    assert batch.rejected == []
    assert batch.accepted == [
        PriceTuple(date=dt.date(2023, 11, 24), hour=0, price=0.11387),
        PriceTuple(date=dt.date(2023, 11, 24), hour=23, price=0.0955),
    ]


def test_transform_keeps_good_rows_and_reports_bad_ones(fetcher):
    batch = fetcher.transform({
        "PVPC": [
            {"Dia": "24/11/2023", "Hora": "05-06", "PCB": "120,00"},
            "not a row",
            {"Dia": "2023-11-24", "Hora": "06-07", "PCB": "120,00"},
            {"Dia": "24/11/2023", "Hora": "24-25", "PCB": "120,00"},
            {"Dia": "24/11/2023", "Hora": "07-08", "PCB": "abc"},
            {"Dia": "24/11/2023", "Hora": "08-09", "PCB": "nan"},
            {"Dia": "24/11/2023", "Hora": "09-10"},
        ]
    })

    assert [(t.hour, t.price) for t in batch.accepted] == [(5, 0.12)]
    assert len(batch.rejected) == 6
    assert all(isinstance(fault, ParseFault) for fault in batch.rejected)
    assert batch.rejected[0].reason == "row is not an object"
    assert batch.rejected[1].reason.startswith("unparseable date")
    assert batch.rejected[2].reason.startswith("unparseable hour")
    assert batch.rejected[3].reason.startswith("unparseable price")


@pytest.mark.parametrize("payload", [None, [], {"other": []}, {"PVPC": "rows"}])
def test_transform_rejects_payload_without_row_list(fetcher, payload):
    with pytest.raises(FetchError, match="Invalid REE API data format"):
        fetcher.transform(payload)


def test_fetch_requests_url_with_timeout(fetcher, http_session):
    http_session.get.return_value = _response(
        {"PVPC": [{"Dia": "24/11/2023", "Hora": "10-11", "PCB": "150,00"}]})

    batch = fetcher.fetch()

    http_session.get.assert_called_once_with("https://ree.example/pvpc.json", timeout=5)
    assert [(t.hour, t.price) for t in batch.accepted] == [(10, 0.15)]


def test_fetch_wraps_transport_errors(fetcher, http_session):
    http_session.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(FetchError, match="REE API error"):
        fetcher.fetch()


def test_fetch_wraps_http_status_errors(fetcher, http_session):
    http_session.get.return_value = _response(
        status_error=requests.HTTPError("503 Server Error"))

    with pytest.raises(FetchError):
        fetcher.fetch()


def test_fetch_rejects_non_json_body(fetcher, http_session):
    http_session.get.return_value = _response(json_error=ValueError("Expecting value"))

    with pytest.raises(FetchError, match="not JSON"):
        fetcher.fetch()


def test_fetch_without_url_fails_without_calling_out(http_session):
    fetcher = ReePriceFetcher("", session=http_session)

    with pytest.raises(FetchError, match="not configured"):
        fetcher.fetch()
    http_session.get.assert_not_called()


@pytest.mark.parametrize("value,expected", [
    ("00-01", 0),
    ("13-14", 13),
    (" 7-8", 7),
    ("24-25", None),
    ("-1", None),
    ("xx-01", None),
    (3, None),
])
def test_parse_hour(value, expected):
    assert ReePriceFetcher.parse_hour(value) == expected


@pytest.mark.parametrize("value,expected", [
    ("113,87", 0.11387),
    ("-2,5", -0.0025),
    ("0", 0.0),
    ("inf", None),
    ("", None),
    (113.87, None),
])
def test_parse_price(value, expected):
    assert ReePriceFetcher.parse_price(value) == expected
