"""
Statistics Preprocessor
Lightweight aggregates embedded in the prompt so the model does not have to derive them
"""

from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from retail_insights.core.models import AnalysisRequest, RowSet, StatsBlock
from retail_insights.utils.logging_utils import get_logger

logger = get_logger(__name__)

SALES_COLUMN_TERMS = ('sales', 'amount', 'revenue', 'total')
PRODUCT_COLUMN_TERMS = ('product', 'item', 'sku')
TOP_PRODUCTS_LIMIT = 5


def find_column(row: Dict[str, Any], possible_names: Sequence[str]) -> Optional[str]:
    """First column (in record order) whose lower-cased name contains one of the terms"""
    for key in row.keys():
        lowered = str(key).lower()
        if any(name in lowered for name in possible_names):
            return key
    return None


def coerce_numeric(values: List[Any]) -> pd.Series:
    """Numeric series; non-numeric, blank and non-finite values become 0"""
    scalars = [
        int(value) if isinstance(value, bool)
        else value.strip() if isinstance(value, str)
        else value if isinstance(value, (int, float, np.number))
        else None
        for value in values
    ]
    series = pd.to_numeric(pd.Series(scalars, dtype=object), errors='coerce')
    return series.replace([np.inf, -np.inf], np.nan).fillna(0).astype(float)


def top_values(rows: RowSet, column: str, limit: int = TOP_PRODUCTS_LIMIT) -> List[Dict[str, Any]]:
    """
    Frequency table of a column, highest counts first

    Ties keep first-encountered order.
    """
    counts: Dict[str, int] = {}
    for row in rows:
        value = row.get(column)
        name = '' if value is None else str(value)
        counts[name] = counts.get(name, 0) + 1

    # sorted() is stable, so equal counts stay in insertion order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [{'name': name, 'count': count} for name, count in ranked]


def _file_stats(request: AnalysisRequest) -> StatsBlock:
    file_stats = [
        {
            'fileName': file.file_name,
            'type': file.type.value,
            'recordCount': len(file.data),
            'columnNames': list(file.data[0].keys()) if file.data else []
        }
        for file in request.files
    ]
    return StatsBlock(
        record_count=request.total_records,
        file_stats=file_stats
    )


def compute_stats(request: AnalysisRequest) -> StatsBlock:
    """
    Compute the StatsBlock of a request

    Args:
        request: analysis request

    Returns:
        StatsBlock; never raises, missing columns just omit their stats
    """
    if request.is_combined:
        stats = _file_stats(request)
        logger.stats(f"Combined stats: {len(stats.file_stats)} files, {stats.record_count} records")
        return stats

    rows = request.rows
    stats = StatsBlock(
        record_count=len(rows),
        column_names=list(rows[0].keys()) if rows else []
    )
    if not rows:
        return stats

    sales_column = find_column(rows[0], SALES_COLUMN_TERMS)
    if sales_column is not None:
        amounts = coerce_numeric([row.get(sales_column) for row in rows])
        stats.sales_column = sales_column
        stats.total_sales = float(amounts.sum())
        stats.avg_sale = stats.total_sales / len(rows)

    product_column = find_column(rows[0], PRODUCT_COLUMN_TERMS)
    if product_column is not None:
        stats.product_column = product_column
        stats.top_products = top_values(rows, product_column)

    logger.stats(f"{request.type.value} stats: {stats.record_count} records, "
                 f"sales column={sales_column}, product column={product_column}")
    return stats
