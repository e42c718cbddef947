"""
Sales Analytics Reporting Script - Charts and Workbooks
Generates an Excel workbook and standalone Plotly charts from the
aggregated dashboard views.

Usage:
    python -m sales_analytics.generate_reports -i data/output
    python -m sales_analytics.generate_reports --input ./analysis --output ./reports

Inputs (from aggregate_orders):
- aggregated_views.json

Outputs:
- sheets/sales_analytics.xlsx: Formatted Excel workbook
- charts/*.html: Interactive Plotly charts
"""

import argparse
import json
import logging
from datetime import datetime
from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils.dataframe import dataframe_to_rows

from sales_analytics.charts import build_figures
from sales_analytics.log_setup import setup_logging

# Setup logging
logger = logging.getLogger(__name__)

PROJECT_DIR = Path(__file__).resolve().parent.parent

HEADER_FONT = Font(bold=True, color="FFFFFF", size=12)
HEADER_FILL = PatternFill(start_color="3B82F6", end_color="3B82F6", fill_type="solid")
MONEY_FILL = PatternFill(start_color="E8F4EA", end_color="E8F4EA", fill_type="solid")
THIN = Side(style='thin')
BORDER = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)

# Sheet title -> (view key, column headers, money columns)
VIEW_SHEETS = [
    ('Daily Revenue', 'line_data',
     {'date': 'Date', 'revenue': 'Revenue', 'items_sold': 'Items Sold'}, {'Revenue'}),
    ('Category Revenue', 'tree_data',
     {'name': 'Category', 'size': 'Revenue'}, {'Revenue'}),
    ('Country Performance', 'country_data',
     {'country': 'Country', 'revenue': 'Revenue', 'avg_delivery_days': 'Avg Delivery (Days)'}, {'Revenue'}),
]


def _write_table(ws, df, money_columns, money_format):
    """Write a DataFrame with a styled header row"""
    for r_idx, row in enumerate(dataframe_to_rows(df, index=False, header=True), 1):
        for c_idx, value in enumerate(row, 1):
            cell = ws.cell(row=r_idx, column=c_idx, value=value)
            cell.border = BORDER

            if r_idx == 1:
                cell.font = HEADER_FONT
                cell.fill = HEADER_FILL
                cell.alignment = Alignment(horizontal='center', wrap_text=True)
            elif df.columns[c_idx - 1] in money_columns:
                cell.fill = MONEY_FILL
                if isinstance(value, (int, float)):
                    cell.number_format = money_format

    for col_idx in range(1, len(df.columns) + 1):
        ws.column_dimensions[ws.cell(row=1, column=col_idx).column_letter].width = 22


def create_workbook(views, output_path):
    """Create a formatted Excel workbook with one sheet per view"""
    wb = Workbook()
    meta = views['meta']
    summary = views['summary']
    currency = meta['currency']
    money_format = f'#,##0.00 "{currency}"'

    # === Sheet 1: Summary ===
    ws1 = wb.active
    if ws1 is not None:
        ws1.title = "Summary"
    else:
        ws1 = wb.create_sheet("Summary", 0)

    ws1['A1'] = "SALES ANALYTICS - SUMMARY"
    ws1['A1'].font = Font(bold=True, size=18, color="3B82F6")
    ws1.merge_cells('A1:D1')

    ws1['A2'] = f"Generated: {datetime.now().strftime('%B %d, %Y')}"
    ws1['A2'].font = Font(italic=True, size=10)

    metrics = [
        ("Currency", currency),
        ("Data Last Updated", meta['generatedAt'] or 'n/a'),
        ("Total Revenue", f"{summary['total_revenue']:,.2f} {currency}"),
        ("Items Sold", f"{summary['items_sold']:,}"),
        ("Orders", f"{summary['order_count']:,}"),
        ("Rejected Orders", f"{summary['rejected_count']:,}"),
    ]

    for i, (label, value) in enumerate(metrics, start=4):
        ws1[f'A{i}'] = label
        ws1[f'A{i}'].font = Font(bold=True)
        ws1[f'B{i}'] = value
        ws1[f'B{i}'].alignment = Alignment(horizontal='right')

    ws1.column_dimensions['A'].width = 30
    ws1.column_dimensions['B'].width = 28

    # === Sheets 2-4: One per view ===
    for title, key, columns, money_columns in VIEW_SHEETS:
        ws = wb.create_sheet(title)
        df = pd.DataFrame(views[key], columns=list(columns)).rename(columns=columns)
        _write_table(ws, df, money_columns, money_format)

    # === Sheet 5: Rejected Records ===
    if views['rejected']:
        ws = wb.create_sheet("Rejected Records")
        df = pd.DataFrame(views['rejected'], columns=['index', 'field', 'reason'])
        df.columns = ['Record Index', 'Field', 'Reason']
        _write_table(ws, df, set(), money_format)

    wb.save(output_path)
    logger.info(f"Saved: {output_path.name}")


def create_plotly_charts(views, output_dir):
    """Write each dashboard chart as a standalone HTML file"""
    figures = build_figures(views, views['meta']['currency'])
    for stem, fig in figures.items():
        fig.write_html(output_dir / f"{stem}.html")
        logger.info(f"Saved: {stem}.html")


def main(input_dir: Path, output_dir: Path):
    """Main function to generate reports"""
    logger.info("=" * 60)
    logger.info("SALES ANALYTICS REPORTING")
    logger.info(f"Run Date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.info("=" * 60)

    sheets_dir = output_dir / "sheets"
    charts_dir = output_dir / "charts"

    views_file = input_dir / "aggregated_views.json"
    if not views_file.exists():
        logger.error(f"{views_file} not found. Run aggregate_orders first.")
        return False

    sheets_dir.mkdir(parents=True, exist_ok=True)
    charts_dir.mkdir(parents=True, exist_ok=True)

    logger.info("Loading aggregated views...")
    with open(views_file, encoding='utf-8') as f:
        views = json.load(f)

    logger.info(f"Daily points: {len(views['line_data'])}")
    logger.info(f"Categories: {len(views['tree_data'])}")
    logger.info(f"Countries: {len(views['country_data'])}")

    logger.info("-" * 40)
    logger.info("GENERATING WORKBOOK")
    logger.info("-" * 40)
    create_workbook(views, sheets_dir / "sales_analytics.xlsx")

    logger.info("-" * 40)
    logger.info("GENERATING PLOTLY CHARTS")
    logger.info("-" * 40)
    create_plotly_charts(views, charts_dir)

    logger.info("=" * 60)
    logger.info("REPORTING COMPLETE")
    logger.info("=" * 60)
    logger.info(f"Sheets saved to: {sheets_dir}")
    logger.info(f"Charts saved to: {charts_dir}")
    return True


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Generate Excel workbook and Plotly charts from aggregated views'
    )
    parser.add_argument(
        '-i', '--input',
        required=True,
        help='Path to directory containing aggregated_views.json'
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output directory for reports (default: data/output/reports)'
    )
    parser.add_argument(
        '--log-dir',
        default=None,
        help='Directory for log files (default: logs/)'
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()

    input_dir = Path(args.input)
    output_dir = Path(args.output) if args.output else PROJECT_DIR / "data" / "output" / "reports"

    log_dir = Path(args.log_dir) if args.log_dir else PROJECT_DIR / "logs"
    setup_logging(log_dir, "generate_reports")

    if not main(input_dir, output_dir):
        raise SystemExit(1)
