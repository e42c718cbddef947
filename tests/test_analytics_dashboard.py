"""Tests for the Streamlit dashboard page."""

from pathlib import Path

from streamlit.testing.v1 import AppTest

from conftest import make_order

DASHBOARD = Path(__file__).resolve().parent.parent / 'sales_analytics' / 'analytics_dashboard.py'


def run_dashboard(monkeypatch, data_file):
    monkeypatch.setenv('SALES_ANALYTICS_DATA', str(data_file))
    return AppTest.from_file(str(DASHBOARD), default_timeout=60).run()


def test_renders_header_and_metrics(monkeypatch, dataset_file):
    at = run_dashboard(monkeypatch, dataset_file)

    assert not at.exception
    assert at.title[0].value == 'Sales Analytics'
    assert at.caption[0].value == 'Currency: EUR | Last Updated: 2024-01-02T00:00:00Z'
    assert [m.value for m in at.metric] == ['25.00€', '3', '2', '1']
    assert len(at.warning) == 0


def test_empty_dataset_shows_info(monkeypatch, write_dataset):
    at = run_dashboard(monkeypatch, write_dataset([], name='empty.json'))

    assert not at.exception
    assert at.info[0].value == 'No orders to display'
    assert len(at.metric) == 0


def test_rejected_records_are_flagged(monkeypatch, write_dataset, scenario_a_orders):
    data_file = write_dataset(scenario_a_orders + [make_order(category='')], name='mixed.json')
    at = run_dashboard(monkeypatch, data_file)

    assert not at.exception
    assert at.warning[0].value == '1 orders were skipped because of invalid fields'


def test_unreadable_dataset_shows_error(monkeypatch, tmp_path):
    at = run_dashboard(monkeypatch, tmp_path / 'missing.json')

    assert not at.exception
    assert 'File not found' in at.error[0].value
