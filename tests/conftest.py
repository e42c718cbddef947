"""Shared pytest fixtures for sales analytics tests."""

import json

import pytest


def make_order(**overrides):
    order = {
        'timestamp': '2024-01-01T10:00:00Z',
        'quantity': 1,
        'unitPrice': 10.0,
        'category': 'A',
        'country': 'FR',
        'deliveryDays': 3,
    }
    order.update(overrides)
    return order


@pytest.fixture
def scenario_a_orders():
    """Two orders on the same day, same country, different categories."""
    return [
        make_order(timestamp='2024-01-01T10:00:00Z', quantity=2, unitPrice=10,
                   category='A', country='FR', deliveryDays=3),
        make_order(timestamp='2024-01-01T12:00:00Z', quantity=1, unitPrice=5,
                   category='B', country='FR', deliveryDays=5),
    ]


@pytest.fixture
def write_dataset(tmp_path):
    """Write a data.json payload and return its path."""
    def _write(orders, meta=None, name='data.json'):
        payload = {'orders': orders}
        if meta is not None:
            payload['meta'] = meta
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding='utf-8')
        return path
    return _write


@pytest.fixture
def dataset_file(write_dataset, scenario_a_orders):
    return write_dataset(
        scenario_a_orders,
        meta={'currency': 'EUR', 'generatedAt': '2024-01-02T00:00:00Z'}
    )
