import pytest

from receipt_processor.models import Item, Receipt
from receipt_processor.points import (
    compute_points,
    points_breakdown,
    try_parse_amount,
    try_parse_date,
    try_parse_time,
)


def _receipt(**overrides) -> Receipt:
    """
    Builds a receipt that earns no points, with the given fields replaced.

    This lets each test switch on exactly one rule and assert its contribution
    through `compute_points`.
    """
    fields = {
        "retailer": "&",
        "purchase_date": "2022-01-02",
        "purchase_time": "13:01",
        "items": [],
        "total": "35.35",
    }
    fields.update(overrides)
    return Receipt(**fields)


TARGET_RECEIPT = Receipt.model_validate(
    {
        "retailer": "Target",
        "purchaseDate": "2022-01-01",
        "purchaseTime": "13:01",
        "items": [
            {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
            {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
            {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
            {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
            {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
        ],
        "total": "35.35",
    }
)

MM_CORNER_MARKET_RECEIPT = Receipt.model_validate(
    {
        "retailer": "M&M Corner Market",
        "purchaseDate": "2022-03-20",
        "purchaseTime": "14:33",
        "items": [{"shortDescription": "Gatorade", "price": "2.25"}] * 4,
        "total": "9.00",
    }
)


def test_baseline_receipt_earns_nothing():
    assert compute_points(_receipt()) == 0


@pytest.mark.parametrize(
    "retailer, expected",
    [
        ("Target", 6),
        ("M&M Corner Market", 14),
        ("Café 7-Eleven", 11),
        ("", 0),
        ("  & - !", 0),
    ],
)
def test_retailer_name_counts_letters_and_digits(retailer, expected):
    assert compute_points(_receipt(retailer=retailer)) == expected


@pytest.mark.parametrize(
    "total, expected",
    [
        ("35.00", 75),
        ("12", 75),
        ("0.00", 75),
        ("35.25", 25),
        ("35.50", 25),
        (".75", 25),
        ("35.35", 0),
        ("35.01", 0),
    ],
)
def test_total_rules(total, expected):
    assert compute_points(_receipt(total=total)) == expected


@pytest.mark.parametrize(
    "total",
    ["", "abc", "-5.00", "1e2", "nan", "inf", " 1.00", "35.00\n", "３５.００", "1,000.00"],
)
def test_malformed_total_earns_nothing(total):
    assert compute_points(_receipt(total=total)) == 0


@pytest.mark.parametrize("item_count, expected", [(0, 0), (1, 0), (2, 5), (4, 10), (5, 10)])
def test_item_pairs_ignore_item_content(item_count, expected):
    items = [Item(short_description="ab", price="1.00")] * item_count
    assert compute_points(_receipt(items=items)) == expected


@pytest.mark.parametrize(
    "description, price, expected",
    [
        ("Gatorade", "2.25", 0),
        ("Pepsi", "1.25", 0),
        ("Emils Cheese Pizza", "12.25", 3),
        ("   Klarbrunn 12-PK 12 FL OZ  ", "12.00", 3),
        ("   ", "1.00", 1),
        ("", "1.00", 1),
        ("abc", "2.50", 1),
        ("abc", "0.00", 0),
        ("abc", "abc", 0),
        ("abc", "-10.00", 0),
    ],
)
def test_item_description_length_bonus(description, price, expected):
    items = [Item(short_description=description, price=price)]
    assert compute_points(_receipt(items=items)) == expected


@pytest.mark.parametrize(
    "purchase_date, expected",
    [
        ("2022-01-01", 6),
        ("2022-01-02", 0),
        ("2022-03-31", 6),
        ("2022-13-01", 0),
        ("01/01/2022", 0),
        ("", 0),
    ],
)
def test_odd_purchase_day(purchase_date, expected):
    assert compute_points(_receipt(purchase_date=purchase_date)) == expected


@pytest.mark.parametrize(
    "purchase_time, expected",
    [
        ("14:33", 10),
        ("14:01", 10),
        ("15:59", 10),
        ("14:00", 0),
        ("16:00", 0),
        ("13:59", 0),
        ("2:33pm", 0),
        ("25:00", 0),
        ("", 0),
    ],
)
def test_afternoon_purchase_window(purchase_time, expected):
    assert compute_points(_receipt(purchase_time=purchase_time)) == expected


def test_target_receipt_points():
    assert compute_points(TARGET_RECEIPT) == 28


def test_mm_corner_market_receipt_points():
    assert compute_points(MM_CORNER_MARKET_RECEIPT) == 109


def test_points_breakdown_lists_every_rule_in_order():
    assert points_breakdown(TARGET_RECEIPT) == {
        "retailer_name": 6,
        "round_dollar_total": 0,
        "quarter_multiple_total": 0,
        "item_pairs": 10,
        "item_descriptions": 6,
        "odd_purchase_day": 6,
        "afternoon_purchase": 0,
    }


def test_points_breakdown_sums_to_points():
    breakdown = points_breakdown(MM_CORNER_MARKET_RECEIPT)
    assert sum(breakdown.values()) == compute_points(MM_CORNER_MARKET_RECEIPT)


def test_compute_points_is_deterministic():
    assert {compute_points(TARGET_RECEIPT) for _ in range(10)} == {28}


@pytest.mark.parametrize(
    "value, expected",
    [
        ("6.49", (6.49, True)),
        ("+1.00", (1.0, True)),
        ("12", (12.0, True)),
        ("12.", (12.0, True)),
        ("", (0.0, False)),
        ("-1.00", (0.0, False)),
        (" 1.00", (0.0, False)),
        ("1e400", (0.0, False)),
        ("1.00\n", (0.0, False)),
        ("１.００", (0.0, False)),
    ],
)
def test_try_parse_amount(value, expected):
    assert try_parse_amount(value) == expected


def test_try_parse_date_and_time():
    purchase_date, ok = try_parse_date("2022-03-20")
    assert ok and purchase_date.day == 20
    assert try_parse_date("2022-02-30") == (None, False)

    purchase_time, ok = try_parse_time("14:33")
    assert ok and (purchase_time.hour, purchase_time.minute) == (14, 33)
    assert try_parse_time("14:33:00") == (None, False)
