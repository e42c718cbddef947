"""Tests for the workbook and HTML chart reports."""

import json

import pytest
from openpyxl import load_workbook

from conftest import make_order
from sales_analytics import aggregate_orders, generate_reports


@pytest.fixture
def views_dir(tmp_path, write_dataset, scenario_a_orders):
    data_file = write_dataset(
        scenario_a_orders + [make_order(timestamp='yesterday')],
        meta={'currency': 'EUR', 'generatedAt': '2024-01-02T00:00:00Z'}
    )
    output_dir = tmp_path / 'output'
    assert aggregate_orders.main(data_file, output_dir)
    return output_dir


def test_writes_workbook_and_charts(tmp_path, views_dir):
    reports_dir = tmp_path / 'reports'

    assert generate_reports.main(views_dir, reports_dir) is True

    for stem in ['daily_revenue', 'category_treemap', 'country_performance']:
        assert (reports_dir / 'charts' / f'{stem}.html').exists()

    wb = load_workbook(reports_dir / 'sheets' / 'sales_analytics.xlsx')
    assert wb.sheetnames == [
        'Summary', 'Daily Revenue', 'Category Revenue', 'Country Performance', 'Rejected Records'
    ]

    summary = wb['Summary']
    assert summary['B4'].value == 'EUR'
    assert summary['B5'].value == '2024-01-02T00:00:00Z'
    assert summary['B6'].value == '25.00 EUR'

    daily = wb['Daily Revenue']
    assert [c.value for c in daily[1]] == ['Date', 'Revenue', 'Items Sold']
    assert [c.value for c in daily[2]] == ['2024-01-01', 25, 3]

    rejected = wb['Rejected Records']
    assert [c.value for c in rejected[2]] == [2, 'timestamp', 'no date/time separator']


def test_empty_views_still_produce_reports(tmp_path, write_dataset):
    output_dir = tmp_path / 'output'
    aggregate_orders.main(write_dataset([]), output_dir)

    reports_dir = tmp_path / 'reports'
    assert generate_reports.main(output_dir, reports_dir) is True

    wb = load_workbook(reports_dir / 'sheets' / 'sales_analytics.xlsx')
    assert 'Rejected Records' not in wb.sheetnames
    assert wb['Country Performance'].max_row == 1


def test_missing_views_file(tmp_path):
    assert generate_reports.main(tmp_path, tmp_path / 'reports') is False
    assert not (tmp_path / 'reports' / 'sheets').exists()


def test_create_workbook_uses_currency_format(tmp_path, views_dir):
    views = json.loads((views_dir / 'aggregated_views.json').read_text())
    path = tmp_path / 'book.xlsx'

    generate_reports.create_workbook(views, path)

    ws = load_workbook(path)['Country Performance']
    assert ws['B2'].number_format == '#,##0.00 "EUR"'
