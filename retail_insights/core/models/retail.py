"""
Retail analysis domain models

RowSet: decoded spreadsheet rows (list of column -> value records)
AnalysisRequest: one request maps to exactly one prompt and one completion call
AnalysisResult: sections + metrics + charts handed to the UI layer
"""

import copy
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Union
from enum import Enum

RowSet = List[Dict[str, Any]]


class DataType(Enum):
    """Semantic tag of an uploaded dataset"""
    PURCHASE_ORDERS = "purchase_orders"
    SALES_DATA = "sales_data"
    INVENTORY = "inventory"
    COMBINED = "combined"
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, value: Any) -> "DataType":
        """Lenient parse; anything unrecognized becomes UNKNOWN"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        """Human-readable name used in prompts and file listings"""
        return {
            DataType.PURCHASE_ORDERS: "purchase order",
            DataType.SALES_DATA: "sales",
            DataType.INVENTORY: "inventory",
            DataType.COMBINED: "combined",
            DataType.UNKNOWN: "unknown",
        }[self]


@dataclass
class FileData:
    """One decoded upload"""
    file_name: str
    type: DataType
    data: RowSet
    type_overridden: bool = False

    def override_type(self, data_type: DataType) -> None:
        """Explicit user override; the file is never re-classified afterwards"""
        self.type = DataType.from_value(data_type)
        self.type_overridden = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fileName': self.file_name,
            'type': self.type.value,
            'rowCount': len(self.data),
            'typeOverridden': self.type_overridden,
            'data': self.data
        }


@dataclass(frozen=True)
class AnalysisRequest:
    """
    Analysis request

    data is a RowSet for single-type requests and a list of FileData
    when type is COMBINED.
    """
    type: DataType
    data: Union[RowSet, List[FileData]]
    location: Optional[str] = None

    @property
    def is_combined(self) -> bool:
        return self.type == DataType.COMBINED

    @property
    def files(self) -> List[FileData]:
        return list(self.data) if self.is_combined else []

    @property
    def rows(self) -> RowSet:
        return [] if self.is_combined else list(self.data)

    @property
    def total_records(self) -> int:
        if self.is_combined:
            return sum(len(f.data) for f in self.data)
        return len(self.data)

    @property
    def location_text(self) -> str:
        """' in <location>' or an empty string"""
        location = (self.location or '').strip()
        return f" in {location}" if location else ""


@dataclass
class StatsBlock:
    """Pre-computed statistics embedded in the prompt"""
    record_count: int = 0
    column_names: List[str] = field(default_factory=list)
    total_sales: Optional[float] = None
    avg_sale: Optional[float] = None
    sales_column: Optional[str] = None
    top_products: Optional[List[Dict[str, Any]]] = None
    product_column: Optional[str] = None
    file_stats: Optional[List[Dict[str, Any]]] = None

    def to_dict(self) -> Dict[str, Any]:
        """camelCase dictionary; absent stats are omitted"""
        if self.file_stats is not None:
            return {'fileStats': self.file_stats}

        result: Dict[str, Any] = {
            'recordCount': self.record_count,
            'columnNames': self.column_names
        }
        if self.total_sales is not None:
            result['totalSales'] = self.total_sales
            result['avgSale'] = self.avg_sale
        if self.top_products is not None:
            result['topProducts'] = self.top_products
        return result


@dataclass
class AnalysisResult:
    """Structured analysis recovered from the completion text"""
    sections: Dict[str, str]
    metrics: Dict[str, str]
    charts: Dict[str, List[Dict[str, Any]]]

    def has_content(self) -> bool:
        return any(self.sections.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sections': dict(self.sections),
            'metrics': dict(self.metrics),
            'charts': copy.deepcopy(self.charts)
        }
