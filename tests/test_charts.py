"""Tests for the Plotly chart builders."""

import pytest

from sales_analytics.charts import (
    build_figures,
    category_treemap_figure,
    country_performance_figure,
    currency_symbol,
    daily_revenue_figure,
)

LINE_DATA = [
    {'date': '2024-01-01', 'revenue': 25.0, 'items_sold': 3},
    {'date': '2024-01-02', 'revenue': 12.5, 'items_sold': 1},
]
TREE_DATA = [{'name': 'A', 'size': 20.0}, {'name': 'B', 'size': 17.5}]
COUNTRY_DATA = [
    {'country': 'FR', 'revenue': 30.0, 'avg_delivery_days': 4.0},
    {'country': 'DE', 'revenue': 7.5, 'avg_delivery_days': 2.5},
]


@pytest.mark.parametrize('code,symbol', [('EUR', '€'), ('USD', '$'), ('CHF', 'CHF')])
def test_currency_symbol(code, symbol):
    assert currency_symbol(code) == symbol


def test_daily_revenue_line():
    fig = daily_revenue_figure(LINE_DATA, 'EUR')
    trace = fig.data[0]

    assert len(fig.data) == 1
    assert list(trace.x) == ['2024-01-01', '2024-01-02']
    assert list(trace.y) == [25.0, 12.5]
    assert list(trace.customdata) == [3, 1]
    assert 'Sold' in trace.hovertemplate
    assert fig.layout.yaxis.ticksuffix == '€'
    assert not fig.layout.annotations


def test_category_treemap():
    fig = category_treemap_figure(TREE_DATA, 'EUR')
    trace = fig.data[0]

    assert trace.type == 'treemap'
    assert list(trace.labels) == ['A', 'B']
    assert list(trace.values) == [20.0, 17.5]
    assert list(trace.parents) == ['', '']


def test_country_performance_uses_secondary_axis():
    fig = country_performance_figure(COUNTRY_DATA, 'USD')
    bars, line = fig.data

    assert bars.type == 'bar'
    assert list(bars.x) == ['FR', 'DE']
    assert list(bars.y) == [30.0, 7.5]
    assert line.type == 'scatter'
    assert list(line.y) == [4.0, 2.5]
    assert line.yaxis == 'y2'
    assert fig.layout.yaxis.tickprefix == '$'


@pytest.mark.parametrize('builder', [
    daily_revenue_figure,
    category_treemap_figure,
    country_performance_figure,
])
def test_empty_views_show_empty_state(builder):
    fig = builder([], 'EUR')
    assert [a.text for a in fig.layout.annotations] == ['No data']


def test_build_figures_keys():
    views = {'line_data': LINE_DATA, 'tree_data': TREE_DATA, 'country_data': COUNTRY_DATA}
    figures = build_figures(views, 'EUR')

    assert set(figures) == {'daily_revenue', 'category_treemap', 'country_performance'}
