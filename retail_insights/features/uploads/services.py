"""
Upload Service
Decodes spreadsheet uploads (first sheet only) into classified row sets
"""

import io
from datetime import date, datetime
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd

from retail_insights.core.exceptions import EmptyDatasetError, UnsupportedFileType
from retail_insights.core.models import DataType, FileData, RowSet
from retail_insights.features.classification import classify_file
from retail_insights.utils.logging_utils import get_logger

logger = get_logger(__name__)

ACCEPTED_EXTENSIONS = ('xlsx', 'xls', 'csv')
CSV_ENCODINGS = ('utf-8', 'latin-1', 'cp1252')


def file_extension(file_name: str) -> str:
    return file_name.rsplit('.', 1)[-1].lower() if '.' in file_name else ''


def _json_safe(value: Any) -> Any:
    """Blank cells become '' and dates become ISO strings"""
    if isinstance(value, np.generic):
        value = value.item()
    if value is None:
        return ''
    if isinstance(value, float) and (value != value or value in (float('inf'), float('-inf'))):
        return ''
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _read_csv(content: bytes) -> pd.DataFrame:
    last_error = None
    for encoding in CSV_ENCODINGS:
        try:
            return pd.read_csv(io.BytesIO(content), encoding=encoding, keep_default_na=False)
        except UnicodeDecodeError as e:
            last_error = e
    raise ValueError(f"Unable to decode CSV file: {last_error}")


def decode_spreadsheet(content: bytes, file_name: str) -> RowSet:
    """
    Decode the first sheet of a spreadsheet into a RowSet

    Args:
        content: raw file bytes
        file_name: original file name (extension selects the reader)

    Returns:
        list of records, blank cells as ''

    Raises:
        UnsupportedFileType: extension not in ACCEPTED_EXTENSIONS
        EmptyDatasetError: no records decoded
        ValueError: the file cannot be parsed
    """
    extension = file_extension(file_name)
    if extension not in ACCEPTED_EXTENSIONS:
        raise UnsupportedFileType(file_name, ACCEPTED_EXTENSIONS)

    if not content:
        raise EmptyDatasetError('The uploaded file contains no data')

    try:
        if extension == 'csv':
            df = _read_csv(content)
        else:
            df = pd.read_excel(io.BytesIO(content), sheet_name=0)
    except Exception as e:
        raise ValueError(
            'Unable to parse the file. The file might be corrupted or in an unsupported format.'
        ) from e

    df = df.dropna(how='all')
    if df.empty:
        raise EmptyDatasetError('The uploaded file contains no data')

    df = df.astype(object).where(pd.notnull(df), None)
    rows = [
        {str(column): _json_safe(value) for column, value in record.items()}
        for record in df.to_dict(orient='records')
    ]
    logger.loading(f"Decoded '{file_name}': {len(rows)} rows, {len(df.columns)} columns")
    return rows


def load_upload(content: bytes, file_name: str) -> FileData:
    """Decode and classify one upload"""
    rows = decode_spreadsheet(content, file_name)
    file = FileData(file_name=file_name, type=DataType.UNKNOWN, data=rows)
    classify_file(file)
    return file


def process_uploads(uploads: List[Tuple[str, bytes]]) -> Tuple[List[FileData], List[Dict[str, Any]]]:
    """
    Decode several uploads; one bad file never blocks its siblings

    Returns:
        (decoded files, per-file errors)
    """
    files: List[FileData] = []
    errors: List[Dict[str, Any]] = []

    for file_name, content in uploads:
        try:
            files.append(load_upload(content, file_name))
        except (UnsupportedFileType, EmptyDatasetError, ValueError) as e:
            logger.error(f"Error processing file {file_name}: {str(e)}")
            errors.append({
                'fileName': file_name,
                'error': f"Error processing {file_name}: {str(e)}",
                'error_type': getattr(e, 'error_type', 'upload_error')
            })

    logger.completed(f"Processed {len(files)} of {len(uploads)} uploads")
    return files, errors
