"""
Plotly figures for the three dashboard views.

Each builder takes the plain rows produced by aggregate_orders and returns a
go.Figure, so the same charts are used by the Streamlit page and the HTML
reports.
"""

import plotly.graph_objects as go
from plotly.subplots import make_subplots

CURRENCY_SYMBOLS = {
    'EUR': '€',
    'USD': '$',
    'GBP': '£',
    'JPY': '¥',
}

REVENUE_COLOR = '#3B82F6'
CATEGORY_COLOR = '#10B981'
DELIVERY_COLOR = '#F59E0B'
GRID_COLOR = '#E5E7EB'
CHART_HEIGHT = 400


def currency_symbol(currency):
    """Display symbol for a currency code, falling back to the code itself"""
    return CURRENCY_SYMBOLS.get(currency, currency)


def _empty_state(fig):
    fig.add_annotation(
        text="No data",
        showarrow=False,
        xref='paper',
        yref='paper',
        x=0.5,
        y=0.5,
        font=dict(size=16, color='#6B7280')
    )
    return fig


def daily_revenue_figure(line_data, currency='EUR'):
    """Daily revenue line with items sold in the hover text"""
    symbol = currency_symbol(currency)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        name=f'Revenue ({currency})',
        x=[point['date'] for point in line_data],
        y=[point['revenue'] for point in line_data],
        customdata=[point['items_sold'] for point in line_data],
        mode='lines+markers',
        line=dict(color=REVENUE_COLOR, width=3, shape='spline'),
        marker=dict(size=8),
        hovertemplate=f'%{{y}}{symbol} (Sold: %{{customdata}})<extra>Revenue</extra>'
    ))

    fig.update_layout(
        title='Daily Revenue',
        height=CHART_HEIGHT,
        template='plotly_white',
        legend=dict(orientation='h', yanchor='bottom', y=1.02, xanchor='right', x=1)
    )
    fig.update_xaxes(type='category', showgrid=False)
    fig.update_yaxes(ticksuffix=symbol, gridcolor=GRID_COLOR, griddash='dash')

    if not line_data:
        _empty_state(fig)
    return fig


def category_treemap_figure(tree_data, currency='EUR'):
    """Revenue by category as a flat treemap"""
    symbol = currency_symbol(currency)

    fig = go.Figure(go.Treemap(
        labels=[node['name'] for node in tree_data],
        parents=[''] * len(tree_data),
        values=[node['size'] for node in tree_data],
        marker=dict(colors=[CATEGORY_COLOR] * len(tree_data), line=dict(color='#FFFFFF', width=2)),
        hovertemplate=f'<b>%{{label}}</b><br>Revenue: %{{value:.2f}} {symbol}<extra></extra>'
    ))

    fig.update_layout(
        title='Revenue by Category',
        height=CHART_HEIGHT,
        template='plotly_white',
        margin=dict(t=50, l=10, r=10, b=10)
    )

    if not tree_data:
        _empty_state(fig)
    return fig


def country_performance_figure(country_data, currency='EUR'):
    """Revenue bars on the left axis, average delivery days line on the right"""
    symbol = currency_symbol(currency)
    countries = [point['country'] for point in country_data]

    fig = make_subplots(specs=[[{"secondary_y": True}]])

    fig.add_trace(go.Bar(
        name='Total Revenue',
        x=countries,
        y=[point['revenue'] for point in country_data],
        marker_color=REVENUE_COLOR
    ), secondary_y=False)

    fig.add_trace(go.Scatter(
        name='Avg Delivery (Days)',
        x=countries,
        y=[point['avg_delivery_days'] for point in country_data],
        mode='lines+markers',
        line=dict(color=DELIVERY_COLOR, width=3, shape='spline')
    ), secondary_y=True)

    fig.update_layout(
        title='Market Performance by Country',
        height=CHART_HEIGHT,
        template='plotly_white',
        legend=dict(orientation='h', yanchor='bottom', y=1.02, xanchor='right', x=1)
    )
    fig.update_yaxes(tickprefix=symbol, color=REVENUE_COLOR, secondary_y=False)
    fig.update_yaxes(title_text='Days', color=DELIVERY_COLOR, showgrid=False, secondary_y=True)

    if not country_data:
        _empty_state(fig)
    return fig


def build_figures(views, currency='EUR'):
    """All three figures keyed by their report file stem"""
    return {
        'daily_revenue': daily_revenue_figure(views['line_data'], currency),
        'category_treemap': category_treemap_figure(views['tree_data'], currency),
        'country_performance': country_performance_figure(views['country_data'], currency),
    }
