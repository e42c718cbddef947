"""Tests for the demo dataset generator."""

import json
from datetime import datetime

from sales_analytics.aggregate_orders import validate_order
from sales_analytics.demo_data import CATEGORIES, COUNTRIES, generate_demo_dataset, main


def test_same_seed_same_dataset():
    assert generate_demo_dataset(seed=5, days=7) == generate_demo_dataset(seed=5, days=7)


def test_different_seed_different_dataset():
    assert generate_demo_dataset(seed=5, days=7) != generate_demo_dataset(seed=6, days=7)


def test_every_record_is_valid():
    orders = generate_demo_dataset(seed=1, days=10)['orders']

    assert orders
    for index, order in enumerate(orders):
        assert validate_order(index, order) == []
        assert order['category'] in CATEGORIES
        assert order['country'] in COUNTRIES


def test_covers_every_day_up_to_end_date():
    dataset = generate_demo_dataset(seed=2, days=5, end_date=datetime(2024, 1, 10))
    dates = sorted({order['timestamp'][:10] for order in dataset['orders']})

    assert dates == ['2024-01-06', '2024-01-07', '2024-01-08', '2024-01-09', '2024-01-10']
    assert dataset['meta'] == {'currency': 'EUR', 'generatedAt': '2024-01-10T00:00:00Z'}


def test_main_writes_json(tmp_path):
    output_file = tmp_path / 'nested' / 'data.json'

    assert main(output_file, seed=7, days=3, orders_per_day=10) is True

    payload = json.loads(output_file.read_text(encoding='utf-8'))
    assert set(payload) == {'meta', 'orders'}
    assert len({order['timestamp'][:10] for order in payload['orders']}) == 3
