"""
Dataset loader for the static order export.

The file is a JSON object with an ``orders`` list and an optional ``meta``
block (``currency``, ``generatedAt``). Records are passed on untouched;
field validation happens in aggregate_orders.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = 'EUR'


class DatasetError(ValueError):
    """The data file cannot be read as an orders dataset"""


@dataclass
class Dataset:
    orders: list = field(default_factory=list)
    currency: str = DEFAULT_CURRENCY
    generated_at: str = ''


def parse_dataset(payload):
    """Build a Dataset from an already decoded JSON payload"""
    if not isinstance(payload, dict):
        raise DatasetError("Top level must be an object with an 'orders' list")
    if 'orders' not in payload:
        raise DatasetError("Missing 'orders'")
    orders = payload['orders']
    if not isinstance(orders, list):
        raise DatasetError("'orders' must be a list")

    meta = payload.get('meta') or {}
    if not isinstance(meta, dict):
        raise DatasetError("'meta' must be an object")

    currency = meta.get('currency') or DEFAULT_CURRENCY
    generated_at = meta.get('generatedAt') or ''

    return Dataset(orders=orders, currency=str(currency), generated_at=str(generated_at))


def load_dataset(path):
    """Read and parse a data.json file"""
    path = Path(path)
    logger.info(f"Loading dataset: {path}")
    try:
        with open(path, encoding='utf-8') as f:
            payload = json.load(f)
    except FileNotFoundError as e:
        raise DatasetError(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        raise DatasetError(f"Invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise DatasetError(f"Not UTF-8 text: {e}") from e
    except OSError as e:
        raise DatasetError(f"Cannot read {path}: {e}") from e
    return parse_dataset(payload)
