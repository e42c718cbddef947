"""Sales analytics dashboard: order aggregation, charts and reports."""
