"""
Sales Analytics Pipeline Orchestrator

Orchestrates the data processing pipeline in the documented flow:
1. demo_data          - Generate a demo data.json (optional)
2. aggregate_orders   - Aggregate orders into the dashboard views
3. generate_reports   - Generate Excel/Plotly reports (optional)
4. analytics_dashboard - Launch Streamlit dashboard (optional)

Usage:
    # Run full pipeline with dashboard
    python -m sales_analytics.run_pipeline -i data/data.json --run-dashboard

    # Generate demo data first, then process it
    python -m sales_analytics.run_pipeline --demo

    # Skip reports, just aggregate
    python -m sales_analytics.run_pipeline -i data/data.json --skip-reports
"""

import argparse
import logging
import subprocess
import sys
from datetime import datetime
from pathlib import Path

from sales_analytics.log_setup import setup_logging

# Setup logging
logger = logging.getLogger(__name__)

PROJECT_DIR = Path(__file__).resolve().parent.parent
PACKAGE = 'sales_analytics'


def run_step(module: str, args: list, log_dir: Path) -> bool:
    """Run a pipeline module in a subprocess, relaying its console output"""
    cmd = [sys.executable, '-m', f'{PACKAGE}.{module}'] + args + ['--log-dir', str(log_dir)]
    logger.info(f"Running: {' '.join(cmd)}")

    result = subprocess.run(cmd, capture_output=True, text=True)
    # Step loggers write to stderr
    log = logger.info if result.returncode == 0 else logger.error
    for line in (result.stdout + result.stderr).splitlines():
        log(f"  [{module}] {line}")

    if result.returncode != 0:
        logger.error(f"{module} exited with code {result.returncode}")
    return result.returncode == 0


def run_dashboard(data_file: Path):
    """Launch Streamlit dashboard"""
    script_path = Path(__file__).resolve().parent / "analytics_dashboard.py"
    cmd = [sys.executable, '-m', 'streamlit', 'run', str(script_path), '--', '-i', str(data_file)]
    logger.info(f"Launching dashboard: {' '.join(cmd)}")

    try:
        # Run dashboard as foreground process (blocking)
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        logger.error(f"Dashboard failed: {e}")
    except KeyboardInterrupt:
        logger.info("Dashboard stopped by user")


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Run the sales analytics steps: demo data, aggregation, reports, dashboard'
    )
    parser.add_argument(
        '-i', '--input',
        default=None,
        help='Path to data.json (default: data/data.json, or output/data.json with --demo)'
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Output directory for processed data (default: data/output)'
    )
    parser.add_argument(
        '--log-dir',
        default=None,
        help='Directory for log files (default: logs/)'
    )
    parser.add_argument(
        '--demo',
        action='store_true',
        help='Generate a demo dataset before aggregating'
    )
    parser.add_argument(
        '--skip-reports',
        action='store_true',
        help='Skip report generation (Excel/Charts)'
    )
    parser.add_argument(
        '--run-dashboard',
        action='store_true',
        help='Launch Streamlit dashboard after processing'
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main orchestrator function"""
    args = parse_args(argv)

    output_dir = Path(args.output) if args.output else PROJECT_DIR / "data" / "output"
    log_dir = Path(args.log_dir) if args.log_dir else PROJECT_DIR / "logs"

    if args.input:
        input_file = Path(args.input)
    elif args.demo:
        input_file = output_dir / "data.json"
    else:
        input_file = PROJECT_DIR / "data" / "data.json"

    if not args.demo and not input_file.exists():
        print(f"ERROR: Input file not found: {input_file}")
        sys.exit(1)

    setup_logging(log_dir, "run_pipeline")
    logger.info(f"Pipeline run {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}: "
                f"{input_file} -> {output_dir}")
    output_dir.mkdir(parents=True, exist_ok=True)

    # (module, arguments, fatal)
    steps = []
    if args.demo:
        steps.append(('demo_data', ['-o', str(input_file)], True))
    steps.append(('aggregate_orders', ['-i', str(input_file), '-o', str(output_dir)], True))
    if not args.skip_reports:
        steps.append(('generate_reports', ['-i', str(output_dir), '-o', str(output_dir / "reports")], False))

    pipeline_success = True
    for module, step_args, fatal in steps:
        if run_step(module, step_args, log_dir):
            continue
        if fatal:
            logger.error(f"{module} failed - aborting pipeline")
            sys.exit(1)
        logger.warning(f"{module} failed - continuing")
        pipeline_success = False

    logger.info(f"Status: {'SUCCESS' if pipeline_success else 'COMPLETED WITH WARNINGS'}")

    if args.run_dashboard:
        run_dashboard(input_file)

    return pipeline_success


if __name__ == "__main__":
    main()
