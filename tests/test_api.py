from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from spend_analytics import get_burn_rate, list_transactions
from tests.helpers.db import bootstrap_sqlite_db, insert_account, insert_transactions, tx_row


def _fixed(day: date):
    return lambda: day


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return bootstrap_sqlite_db(tmp_path / "api.db")


def test_burn_rate_serializes_with_camel_case_and_decimal_strings(db_url: str, today: date):
    insert_transactions(
        database_url=db_url,
        rows=[
            tx_row(datetime(2025, 1, 5, 10, 0), "-100.00"),
            tx_row(datetime(2025, 1, 10, 10, 0), "-50.00"),
            tx_row(datetime(2025, 1, 15, 10, 0), "200.00"),
        ],
    )

    months = get_burn_rate(
        date(2025, 1, 1), date(2025, 1, 31), database_url=db_url, today=_fixed(today)
    )

    assert [m.to_json_dict() for m in months] == [
        {"monthLabel": "Jan 2025", "totalSpent": "150.00", "isCurrentMonth": False}
    ]


def test_burn_rate_accepts_iso_strings(db_url: str, today: date):
    months = get_burn_rate("2025-06-01", "2025-08-31", database_url=db_url, today=_fixed(today))
    assert [m.month_label for m in months] == ["Jun 2025", "Jul 2025", "Aug 2025"]


@pytest.mark.parametrize("bad", ["2025-02-30", "06/01/2025", "yesterday"])
def test_burn_rate_rejects_malformed_dates_before_querying(bad: str):
    # No database is configured; validation must fail first.
    with pytest.raises(ValidationError):
        get_burn_rate(start_date=bad)


def test_burn_rate_defaults_cover_four_months(db_url: str, today: date):
    insert_transactions(
        database_url=db_url,
        rows=[
            tx_row(datetime(2025, 8, 1, 0, 0, 0), "-1.00"),
            tx_row(datetime(2025, 11, 30, 23, 59, 59), "-2.50"),
            tx_row(datetime(2025, 12, 1, 0, 0, 0), "-99.00"),
        ],
    )

    months = [m.to_json_dict() for m in get_burn_rate(database_url=db_url, today=_fixed(today))]

    assert months == [
        {"monthLabel": "Aug 2025", "totalSpent": "1.00", "isCurrentMonth": False},
        {"monthLabel": "Sep 2025", "totalSpent": "0", "isCurrentMonth": False},
        {"monthLabel": "Oct 2025", "totalSpent": "0", "isCurrentMonth": False},
        {"monthLabel": "Nov 2025", "totalSpent": "2.50", "isCurrentMonth": True},
    ]


def test_burn_rate_scoped_to_account(db_url: str, today: date):
    mine = insert_account(database_url=db_url, name="Mine")
    theirs = insert_account(database_url=db_url, name="Theirs")
    when = datetime(2025, 2, 14, 18, 0)
    insert_transactions(database_url=db_url, rows=[tx_row(when, "-40.00")], account_id=mine)
    insert_transactions(database_url=db_url, rows=[tx_row(when, "-60.00")], account_id=theirs)

    (month,) = get_burn_rate(
        "2025-02-01", "2025-02-28", account_id=mine, database_url=db_url, today=_fixed(today)
    )
    assert month.to_json_dict()["totalSpent"] == "40.00"


def test_database_url_falls_back_to_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, today: date
):
    url = bootstrap_sqlite_db(tmp_path / "env.db")
    monkeypatch.setenv("DATABASE_URL", url)

    months = get_burn_rate("2025-01-01", "2025-01-31", today=_fixed(today))
    assert len(months) == 1


def test_missing_database_url_raises():
    with pytest.raises(RuntimeError, match="DATABASE_URL"):
        list_transactions()


def test_list_transactions_page_shape(db_url: str):
    insert_transactions(
        database_url=db_url,
        rows=[
            tx_row(
                datetime(2025, 3, 1, 9, 0),
                "-20.00",
                category="Dining",
                clean_description="Chipotle",
                raw_description="CHIPOTLE 1234",
            ),
            tx_row(datetime(2025, 3, 2, 9, 0), "-4000.00", raw_description="ZELLE *SENT"),
        ],
    )

    payload = list_transactions(database_url=db_url).to_json_dict()

    assert set(payload) == {"content", "page", "size", "totalElements", "totalPages"}
    assert (payload["page"], payload["size"]) == (0, 10)
    assert (payload["totalElements"], payload["totalPages"]) == (2, 1)

    newest, oldest = payload["content"]
    assert set(newest) == {
        "id",
        "rawDescription",
        "cleanDescription",
        "category",
        "amount",
        "transactionDate",
        "status",
    }
    assert newest["rawDescription"] == "ZELLE *SENT"
    assert newest["amount"] == "-4000.00"
    assert newest["transactionDate"] == "2025-03-02T09:00:00"
    assert newest["status"] == "Flagged"
    assert newest["category"] is None
    assert oldest["status"] == "Cleaned"


def test_list_transactions_absent_sort_uses_defaults(db_url: str):
    insert_transactions(
        database_url=db_url,
        rows=[tx_row(datetime(2025, 3, day), f"-{day}.00") for day in (1, 2, 3)],
    )

    default = list_transactions(database_url=db_url)
    absent = list_transactions(sort_field=None, sort_direction=None, database_url=db_url)

    assert absent == default
    assert [row.transaction_date.day for row in absent.content] == [3, 2, 1]


def test_list_transactions_all_category_sentinel(db_url: str):
    insert_transactions(
        database_url=db_url,
        rows=[
            tx_row(datetime(2025, 3, 1), "-1.00", category="Dining"),
            tx_row(datetime(2025, 3, 2), "-2.00", category="Travel"),
        ],
    )
    everything = list_transactions(category="ALL", database_url=db_url)
    assert everything == list_transactions(database_url=db_url)
    assert everything.total_elements == 2
    assert list_transactions(category="dining", database_url=db_url).total_elements == 1


@pytest.mark.parametrize(
    "kwargs",
    [{"page": -1}, {"size": 0}, {"sort_field": "merchant"}],
)
def test_list_transactions_rejects_bad_requests(db_url: str, kwargs):
    with pytest.raises(ValueError):
        list_transactions(database_url=db_url, **kwargs)


def test_outputs_are_byte_identical_across_calls(db_url: str, today: date):
    insert_transactions(
        database_url=db_url,
        rows=[tx_row(datetime(2025, 10, day), f"-{day}.25") for day in (1, 9, 17)],
    )

    def snapshot() -> str:
        burn = [m.to_json_dict() for m in get_burn_rate(database_url=db_url, today=_fixed(today))]
        listing = list_transactions(size=2, database_url=db_url).to_json_dict()
        return json.dumps({"burn": burn, "list": listing}, sort_keys=True)

    assert snapshot() == snapshot()
