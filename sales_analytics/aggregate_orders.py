"""
Order Aggregation Script - Core Data Processing
Aggregates order records into the three dashboard views: daily revenue trend,
revenue by category and country performance.

Usage:
    python -m sales_analytics.aggregate_orders -i data/data.json -o data/output
    python -m sales_analytics.aggregate_orders --input ./orders.json --output ./analysis

Outputs:
- aggregated_views.json: meta, the three views, rejected records and totals
- daily_revenue.csv: One row per order date, ascending
- category_revenue.csv: One row per product category
- country_performance.csv: One row per country, highest revenue first
- rejected_records.csv: Records skipped by validation (only when present)
"""

import argparse
import json
import logging
import math
import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path

import pandas as pd

from sales_analytics.load_orders import DatasetError, load_dataset
from sales_analytics.log_setup import setup_logging

# Setup logging
logger = logging.getLogger(__name__)

PROJECT_DIR = Path(__file__).resolve().parent.parent

REQUIRED_FIELDS = ['timestamp', 'quantity', 'unitPrice', 'category', 'country', 'deliveryDays']

DATE_PATTERN = re.compile(r'^[0-9]{4}-[0-9]{2}-[0-9]{2}$')

REVENUE_DECIMALS = 2
DELIVERY_DECIMALS = 1


def round_to(value, decimals):
    """
    Round a sum for display.

    Uses the built-in round on the float, which is correctly rounded from
    the stored binary value: 0.015 is stored just below the tie and gives
    0.01, exact ties such as 0.125 go to the even digit (0.12).
    """
    return round(float(value), decimals)


@dataclass(frozen=True)
class InvalidRecord:
    """A record field that failed validation. Reported, never raised."""
    index: int
    field: str
    reason: str


class InternalInvariantViolation(RuntimeError):
    """Raised when aggregation state breaks an invariant it should guarantee."""


@dataclass
class AggregationResult:
    line_data: list = field(default_factory=list)
    tree_data: list = field(default_factory=list)
    country_data: list = field(default_factory=list)
    rejected: list = field(default_factory=list)
    total_revenue: float = 0.0
    items_sold: int = 0
    order_count: int = 0

    @property
    def rejected_indices(self):
        return sorted({problem.index for problem in self.rejected})

    @property
    def is_empty(self):
        return not (self.line_data or self.tree_data or self.country_data)


def _is_real(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _check_timestamp(value):
    if not isinstance(value, str):
        return 'not a string'
    if 'T' not in value:
        return 'no date/time separator'
    date_part = value.split('T', 1)[0]
    if not DATE_PATTERN.match(date_part):
        return f"date prefix '{date_part}' is not YYYY-MM-DD"
    try:
        datetime.strptime(date_part, '%Y-%m-%d')
    except ValueError:
        return f"date prefix '{date_part}' is not a calendar date"
    return None


def _check_non_negative(value):
    if not _is_real(value):
        return 'not a number'
    if not math.isfinite(value):
        return 'not finite'
    if value < 0:
        return 'negative'
    return None


def _check_quantity(value):
    problem = _check_non_negative(value)
    if problem:
        return problem
    if not isinstance(value, numbers.Integral) and not float(value).is_integer():
        return 'not a whole number'
    return None


def _check_label(value):
    if not isinstance(value, str):
        return 'not a string'
    if not value.strip():
        return 'blank'
    return None


FIELD_CHECKS = {
    'timestamp': _check_timestamp,
    'quantity': _check_quantity,
    'unitPrice': _check_non_negative,
    'category': _check_label,
    'country': _check_label,
    'deliveryDays': _check_non_negative,
}


def validate_order(index, order):
    """
    Validate one order record.

    Returns a list of InvalidRecord entries, one per failing field.
    An empty list means the record can be aggregated.
    """
    if not isinstance(order, Mapping):
        return [InvalidRecord(index, '*', 'record is not a mapping')]

    problems = []
    for name in REQUIRED_FIELDS:
        if name not in order:
            problems.append(InvalidRecord(index, name, 'missing'))
            continue
        reason = FIELD_CHECKS[name](order[name])
        if reason:
            problems.append(InvalidRecord(index, name, reason))
    return problems


def _accepted_rows(orders, rejected):
    rows = []
    for index, order in enumerate(orders):
        problems = validate_order(index, order)
        if problems:
            rejected.extend(problems)
            continue
        rows.append({
            'date': order['timestamp'].split('T', 1)[0],
            'quantity': int(order['quantity']),
            'unit_price': order['unitPrice'],
            'category': order['category'],
            'country': order['country'],
            'delivery_days': order['deliveryDays'],
        })
    return rows


def aggregate(orders):
    """
    Aggregate order records into the three dashboard views.

    Records are validated first; invalid ones are skipped and reported in
    ``rejected`` so the valid remainder still renders. Revenue is summed
    unrounded per bucket and only rounded when the output rows are built,
    always through round_to.

    Ordering:
    - line_data ascending by date string
    - tree_data in first-seen category order
    - country_data descending by rounded revenue, ties in first-seen order
    """
    rejected = []
    rows = _accepted_rows(orders, rejected)

    for problem in rejected:
        logger.warning(f"Rejected record {problem.index}: {problem.field} {problem.reason}")

    if not rows:
        return AggregationResult(rejected=rejected)

    df = pd.DataFrame(rows)
    # Float math: int64 columns would wrap past 2**63
    df['revenue'] = df['quantity'].astype(float) * df['unit_price']

    # Daily trend - ISO date strings sort correctly as text
    daily = df.groupby('date', sort=True).agg(
        revenue=('revenue', 'sum'),
        items_sold=('quantity', 'sum')
    ).reset_index()

    line_data = [
        {
            'date': row.date,
            'revenue': round_to(row.revenue, REVENUE_DECIMALS),
            'items_sold': int(row.items_sold)
        }
        for row in daily.itertuples(index=False)
    ]

    # Category treemap
    category = df.groupby('category', sort=False)['revenue'].sum()
    tree_data = [
        {'name': name, 'size': round_to(size, REVENUE_DECIMALS)}
        for name, size in category.items()
    ]

    # Country performance
    country = df.groupby('country', sort=False).agg(
        revenue=('revenue', 'sum'),
        total_delivery_days=('delivery_days', 'sum'),
        order_count=('delivery_days', 'size')
    ).reset_index()

    if (country['order_count'] < 1).any():
        raise InternalInvariantViolation("Country bucket without any orders")

    country_data = [
        {
            'country': row.country,
            'revenue': round_to(row.revenue, REVENUE_DECIMALS),
            'avg_delivery_days': round_to(row.total_delivery_days / row.order_count, DELIVERY_DECIMALS)
        }
        for row in country.itertuples(index=False)
    ]
    # Sort on the rounded value; sorted() is stable so ties keep first-seen order
    country_data = sorted(country_data, key=lambda point: point['revenue'], reverse=True)

    return AggregationResult(
        line_data=line_data,
        tree_data=tree_data,
        country_data=country_data,
        rejected=rejected,
        total_revenue=round_to(df['revenue'].sum(), REVENUE_DECIMALS),
        items_sold=int(df['quantity'].sum()),
        order_count=len(df)
    )


def summarize(result):
    """Headline totals for display"""
    return {
        'total_revenue': result.total_revenue,
        'items_sold': result.items_sold,
        'order_count': result.order_count,
        'rejected_count': len(result.rejected_indices),
    }


def build_views_document(dataset, result):
    """Assemble the JSON document consumed by reports and the dashboard"""
    return {
        'meta': {'currency': dataset.currency, 'generatedAt': dataset.generated_at},
        'summary': summarize(result),
        'line_data': result.line_data,
        'tree_data': result.tree_data,
        'country_data': result.country_data,
        'rejected': [asdict(problem) for problem in result.rejected],
    }


def main(input_file: Path, output_dir: Path):
    """Main aggregation function - builds the dashboard views"""
    logger.info("=" * 60)
    logger.info("ORDER AGGREGATION")
    logger.info(f"Run Date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.info("=" * 60)

    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        dataset = load_dataset(input_file)
    except DatasetError as e:
        logger.error(f"Could not load {input_file}: {e}")
        return False

    logger.info(f"Loaded {len(dataset.orders):,} orders ({dataset.currency})")

    result = aggregate(dataset.orders)
    document = build_views_document(dataset, result)

    # === OUTPUT 1: Views JSON ===
    views_file = output_dir / "aggregated_views.json"
    with open(views_file, 'w', encoding='utf-8') as f:
        json.dump(document, f, indent=2)
    logger.info(f"Saved: {views_file.name}")

    # === OUTPUT 2-4: One CSV per view ===
    for name, rows in [
        ('daily_revenue.csv', result.line_data),
        ('category_revenue.csv', result.tree_data),
        ('country_performance.csv', result.country_data),
    ]:
        pd.DataFrame(rows).to_csv(output_dir / name, index=False)
        logger.info(f"Saved: {name} ({len(rows):,} rows)")

    # === OUTPUT 5: Rejected records ===
    if result.rejected:
        rejected_file = output_dir / "rejected_records.csv"
        pd.DataFrame(document['rejected']).to_csv(rejected_file, index=False)
        logger.info(f"Saved: {rejected_file.name}")

    summary = document['summary']
    logger.info("=" * 60)
    logger.info("AGGREGATION COMPLETE")
    logger.info("=" * 60)
    logger.info(f"Total Revenue: {summary['total_revenue']:,.2f} {dataset.currency}")
    logger.info(f"Items Sold: {summary['items_sold']:,}")
    logger.info(f"Orders Aggregated: {summary['order_count']:,}")
    if summary['rejected_count']:
        logger.warning(f"Orders Rejected: {summary['rejected_count']:,}")
    logger.info(f"Outputs saved to: {output_dir}")
    return True


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Aggregate order records into dashboard views'
    )
    parser.add_argument(
        '-i', '--input',
        required=True,
        help='Path to the data.json file with orders and meta'
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output directory path (default: data/output)'
    )
    parser.add_argument(
        '--log-dir',
        default=None,
        help='Directory for log files (default: logs/)'
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()

    input_file = Path(args.input)
    output_dir = Path(args.output) if args.output else PROJECT_DIR / "data" / "output"

    log_dir = Path(args.log_dir) if args.log_dir else PROJECT_DIR / "logs"
    setup_logging(log_dir, "aggregate_orders")

    if not main(input_file, output_dir):
        raise SystemExit(1)
