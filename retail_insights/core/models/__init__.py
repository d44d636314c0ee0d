"""
Core Models - domain models shared across features
"""

from .retail import (
    RowSet,
    DataType,
    FileData,
    AnalysisRequest,
    StatsBlock,
    AnalysisResult
)

__all__ = [
    'RowSet',
    'DataType',
    'FileData',
    'AnalysisRequest',
    'StatsBlock',
    'AnalysisResult'
]
