"""
Sales Analytics Dashboard
Single-page dashboard with the daily revenue trend, revenue by category
and market performance by country.

Usage:
    streamlit run sales_analytics/analytics_dashboard.py -- -i data/data.json
    SALES_ANALYTICS_DATA=./orders.json streamlit run sales_analytics/analytics_dashboard.py
"""
import argparse
import logging
import os
import sys
from pathlib import Path

import pandas as pd
import plotly.io as pio
import streamlit as st

from sales_analytics.aggregate_orders import aggregate
from sales_analytics.charts import (
    category_treemap_figure,
    country_performance_figure,
    currency_symbol,
    daily_revenue_figure,
)
from sales_analytics.load_orders import DatasetError, load_dataset

# Setup logging
logger = logging.getLogger(__name__)

DATA_ENV_VAR = 'SALES_ANALYTICS_DATA'


def get_data_file():
    """Get data file from command line args, environment or default"""
    parser = argparse.ArgumentParser(description='Sales Analytics Dashboard')
    parser.add_argument(
        '-i', '--input',
        default=None,
        help='Path to data.json with orders and meta'
    )

    # Streamlit passes args after '--'
    if '--' in sys.argv:
        args_idx = sys.argv.index('--') + 1
        args = parser.parse_args(sys.argv[args_idx:])
    else:
        args = parser.parse_args([])

    if args.input:
        return args.input

    if os.environ.get(DATA_ENV_VAR):
        return os.environ[DATA_ENV_VAR]

    project_dir = Path(__file__).resolve().parent.parent
    return str(project_dir / "data" / "data.json")


pio.templates.default = "plotly_white"

st.set_page_config(
    page_title="Sales Analytics",
    page_icon="chart_with_upwards_trend",
    layout="wide"
)


@st.cache_data(ttl=3600)
def load_data(data_file: str):
    """Load the dataset from disk"""
    return load_dataset(data_file)


@st.cache_data
def get_views(orders):
    """Aggregate once per distinct record content"""
    return aggregate(orders)


def main():
    st.title("Sales Analytics")

    data_file = get_data_file()

    try:
        with st.spinner("Loading data..."):
            dataset = load_data(data_file)
    except DatasetError as e:
        logger.error(f"Could not load {data_file}: {e}")
        st.error(f"Could not load {data_file}: {e}")
        return

    st.caption(f"Currency: {dataset.currency} | Last Updated: {dataset.generated_at or 'n/a'}")
    st.markdown("---")

    views = get_views(dataset.orders)
    symbol = currency_symbol(dataset.currency)

    if views.is_empty:
        st.info("No orders to display")
    else:
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Total Revenue", f"{views.total_revenue:,.2f}{symbol}")
        with col2:
            st.metric("Items Sold", f"{views.items_sold:,}")
        with col3:
            st.metric("Orders", f"{views.order_count:,}")
        with col4:
            st.metric("Countries", f"{len(views.country_data):,}")

    st.plotly_chart(daily_revenue_figure(views.line_data, dataset.currency))

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(category_treemap_figure(views.tree_data, dataset.currency))
    with col2:
        st.plotly_chart(country_performance_figure(views.country_data, dataset.currency))

    if views.rejected:
        st.warning(f"{len(views.rejected_indices):,} orders were skipped because of invalid fields")
        with st.expander("Rejected Records"):
            rejected_df = pd.DataFrame(
                [(p.index, p.field, p.reason) for p in views.rejected],
                columns=['Record Index', 'Field', 'Reason']
            )
            st.dataframe(rejected_df, hide_index=True)


if __name__ == "__main__":
    main()
