from __future__ import annotations

from datetime import datetime

import pytest

from spend_analytics.status import (
    STATUS_CLEANED,
    STATUS_FLAGGED,
    STATUS_RAW,
    StatusClassifier,
    classify,
    derive_status,
)
from tests.helpers.store_stub import make_tx

WHEN = datetime(2025, 3, 14, 9, 26)


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        ("-1000.00", STATUS_RAW),
        ("1000.00", STATUS_RAW),
        ("-1000.01", STATUS_FLAGGED),
        ("1000.01", STATUS_FLAGGED),
        ("-25000.00", STATUS_FLAGGED),
        ("-12.50", STATUS_RAW),
        (None, STATUS_RAW),
    ],
)
def test_flag_threshold_is_exclusive_and_uses_magnitude(amount, expected):
    assert classify(make_tx(WHEN, amount)) == expected


@pytest.mark.parametrize("amount", ["1000.01", "-1000.01"])
def test_categorized_amount_over_threshold_is_raw(amount):
    assert classify(make_tx(WHEN, amount, category="Travel")) == STATUS_RAW


def test_large_categorized_amount_is_raw_without_clean_description():
    tx = make_tx(WHEN, "-5000.00", category="Travel")
    assert classify(tx) == STATUS_RAW


def test_clean_and_categorized_is_cleaned_regardless_of_amount():
    tx = make_tx(WHEN, "-5000.00", category="Travel", clean_description="Delta Air Lines")
    assert classify(tx) == STATUS_CLEANED


def test_clean_description_alone_does_not_clean_a_large_uncategorized_row():
    tx = make_tx(WHEN, "-5000.00", clean_description="Wire transfer")
    assert classify(tx) == STATUS_FLAGGED


def test_empty_strings_count_as_missing():
    tx = make_tx(WHEN, "-2000.00", category="", clean_description="")
    assert classify(tx) == STATUS_FLAGGED


def test_whitespace_counts_as_a_value():
    tx = make_tx(WHEN, "-2000.00", category=" ", clean_description=" ")
    assert classify(tx) == STATUS_CLEANED


def test_persisted_status_wins_verbatim():
    tx = make_tx(WHEN, "-2000.00", status="Completed")
    assert classify(tx) == "Completed"
    # Derivation alone would flag it.
    assert derive_status(tx) == STATUS_FLAGGED


def test_empty_persisted_status_falls_back_to_derivation():
    tx = make_tx(WHEN, "-20.00", category="Dining", clean_description="Chipotle", status="")
    assert classify(tx) == STATUS_CLEANED


def test_classifier_object_matches_function():
    tx = make_tx(WHEN, "-1500.00")
    classifier = StatusClassifier()
    assert classifier(tx) == classifier.classify(tx) == classify(tx) == STATUS_FLAGGED
