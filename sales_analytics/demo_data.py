"""
Generate a demo orders dataset in the data.json layout.

Usage:
    python -m sales_analytics.demo_data -o data/data.json
    python -m sales_analytics.demo_data --output demo.json --days 60 --seed 11
"""

import argparse
import json
import logging
from datetime import datetime, timedelta
from pathlib import Path

import numpy as np

from sales_analytics.log_setup import setup_logging

# Setup logging
logger = logging.getLogger(__name__)

PROJECT_DIR = Path(__file__).resolve().parent.parent

CATEGORIES = ['Electronics', 'Home & Garden', 'Fashion', 'Sports', 'Books', 'Toys']
CATEGORY_WEIGHTS = [0.24, 0.18, 0.22, 0.14, 0.12, 0.10]
PRICE_POINTS = {
    'Electronics': [49.99, 129.0, 299.0, 649.0],
    'Home & Garden': [12.5, 34.9, 89.0],
    'Fashion': [19.99, 39.99, 79.0],
    'Sports': [24.0, 59.9, 119.0],
    'Books': [8.99, 14.99, 24.5],
    'Toys': [9.99, 19.99, 44.0],
}

# Country -> mean delivery days
COUNTRIES = {
    'FR': 2.5,
    'DE': 3.0,
    'ES': 4.0,
    'IT': 4.5,
    'NL': 2.0,
    'PL': 5.5,
}
COUNTRY_WEIGHTS = [0.30, 0.25, 0.15, 0.12, 0.10, 0.08]


def generate_demo_dataset(seed=7, days=30, orders_per_day=40, currency='EUR', end_date=None):
    """
    Generate a reproducible dataset of valid order records.

    The same seed and end_date always produce the same records.
    """
    rng = np.random.default_rng(seed)
    end_date = end_date or datetime(2024, 6, 30)
    start_date = end_date - timedelta(days=days - 1)

    countries = list(COUNTRIES)
    orders = []
    for day in range(days):
        date = start_date + timedelta(days=day)
        weekend = 0.7 if date.weekday() >= 5 else 1.0
        count = max(1, int(rng.poisson(orders_per_day * weekend)))

        for _ in range(count):
            category = str(rng.choice(CATEGORIES, p=CATEGORY_WEIGHTS))
            country = str(rng.choice(countries, p=COUNTRY_WEIGHTS))
            seconds = int(rng.integers(0, 24 * 3600))
            timestamp = date + timedelta(seconds=seconds)
            delivery = max(0.5, rng.normal(COUNTRIES[country], 1.0))

            orders.append({
                'orderId': f"ORD-{len(orders) + 1:06d}",
                'timestamp': timestamp.strftime('%Y-%m-%dT%H:%M:%SZ'),
                'quantity': int(rng.integers(1, 6)),
                'unitPrice': float(rng.choice(PRICE_POINTS[category])),
                'category': category,
                'country': country,
                'deliveryDays': round(float(delivery), 1),
            })

    return {
        'meta': {
            'currency': currency,
            'generatedAt': end_date.strftime('%Y-%m-%dT%H:%M:%SZ'),
        },
        'orders': orders,
    }


def main(output_file: Path, seed, days, orders_per_day):
    """Write a demo data.json"""
    logger.info("=" * 60)
    logger.info("DEMO DATA GENERATION")
    logger.info("=" * 60)

    dataset = generate_demo_dataset(seed=seed, days=days, orders_per_day=orders_per_day)

    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(dataset, f, indent=2)

    logger.info(f"Saved: {output_file} ({len(dataset['orders']):,} orders over {days} days)")
    return True


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Generate a demo orders dataset')
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output JSON file (default: data/data.json)'
    )
    parser.add_argument('--seed', type=int, default=7, help='Random seed (default: 7)')
    parser.add_argument('--days', type=int, default=30, help='Number of days (default: 30)')
    parser.add_argument(
        '--orders-per-day',
        type=int,
        default=40,
        help='Average orders per weekday (default: 40)'
    )
    parser.add_argument(
        '--log-dir',
        default=None,
        help='Directory for log files (default: logs/)'
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()

    output_file = Path(args.output) if args.output else PROJECT_DIR / "data" / "data.json"
    log_dir = Path(args.log_dir) if args.log_dir else PROJECT_DIR / "logs"
    setup_logging(log_dir, "demo_data")

    main(output_file, args.seed, args.days, args.orders_per_day)
