"""
Data Classification Service - tags uploaded row sets by their column headers
"""

from typing import Iterable, Tuple
from retail_insights.core.models import DataType, FileData, RowSet
from retail_insights.utils.logging_utils import get_logger

logger = get_logger(__name__)

# Ordered (header terms, tag) rules; first matching rule wins.
# A rule matches when any header contains any of its terms (case-sensitive).
CLASSIFICATION_RULES: Tuple[Tuple[Tuple[str, ...], DataType], ...] = (
    (("PO #", "# Ordered", "Purchase Order"), DataType.PURCHASE_ORDERS),
    (("Invoice #", "Sale By", "Sales"), DataType.SALES_DATA),
    (("On Hand", "In Stock", "Inventory"), DataType.INVENTORY),
)


def classify(headers: Iterable[str]) -> DataType:
    """
    Assign a data type from column headers

    Args:
        headers: column names of one row set

    Returns:
        DataType; UNKNOWN when no rule matches
    """
    header_list = [str(h) for h in headers]

    for terms, data_type in CLASSIFICATION_RULES:
        if any(term in header for term in terms for header in header_list):
            return data_type

    return DataType.UNKNOWN


def classify_rows(rows: RowSet) -> DataType:
    """Classify by the headers of the first record"""
    if not rows:
        return DataType.UNKNOWN
    return classify(rows[0].keys())


def classify_file(file: FileData) -> DataType:
    """
    Classify an uploaded file unless the user already overrode its type

    Returns:
        the (possibly unchanged) file type
    """
    if file.type_overridden:
        return file.type

    file.type = classify_rows(file.data)
    if file.type == DataType.UNKNOWN:
        logger.warning(f"Could not classify '{file.file_name}'; a manual type selection is required")
    else:
        logger.info(f"'{file.file_name}' classified as {file.type.value}")
    return file.type
