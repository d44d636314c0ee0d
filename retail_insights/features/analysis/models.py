"""
Analysis request models
JSON bodies of the analysis endpoints, validated with pydantic
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from retail_insights.core.models import AnalysisRequest, DataType, FileData
from retail_insights.features.classification import classify_file


class FilePayload(BaseModel):
    """One decoded file as sent by the client"""
    file_name: str = Field(..., alias="fileName", description="Original file name")
    type: Optional[str] = Field(None, description="Data type tag; classified from headers when missing or unknown")
    data: List[Dict[str, Any]] = Field(default_factory=list, description="Decoded rows")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "fileName": "sales_oct.xlsx",
                "type": "sales_data",
                "data": [{"Invoice #": "1001", "Product": "USB-C Cable", "Revenue": 19.99}]
            }
        }
    )

    def to_file_data(self) -> FileData:
        """Explicit known types are treated as user overrides"""
        file = FileData(file_name=self.file_name, type=DataType.UNKNOWN, data=list(self.data))
        data_type = DataType.from_value(self.type)
        if data_type not in (DataType.UNKNOWN, DataType.COMBINED):
            file.override_type(data_type)
        else:
            classify_file(file)
        return file


class AnalysisRequestPayload(BaseModel):
    """AnalysisRequest in its JSON form"""
    type: str = Field(..., description="purchase_orders | sales_data | inventory | combined | unknown")
    location: Optional[str] = Field(None, description="Store location used in the prompt")
    data: List[Dict[str, Any]] = Field(default_factory=list, description="Rows, or file objects when type is combined")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "sales_data",
                "location": "Aberdeen",
                "data": [{"Invoice #": "1001", "Product": "USB-C Cable", "Revenue": 19.99}]
            }
        }
    )

    def to_request(self) -> AnalysisRequest:
        """
        Build the domain request

        Raises:
            pydantic.ValidationError: a combined entry is not a file object
        """
        data_type = DataType.from_value(self.type)
        if data_type == DataType.COMBINED:
            files = [FilePayload.model_validate(item).to_file_data() for item in self.data]
            return AnalysisRequest(type=data_type, data=files, location=self.location)
        return AnalysisRequest(type=data_type, data=list(self.data), location=self.location)


class AnalyzeBody(BaseModel):
    """POST /api/analyze-mobile-retail body"""
    data: AnalysisRequestPayload


class BatchAnalyzeBody(BaseModel):
    """POST /api/analyze-batch body"""
    location: Optional[str] = Field(None, description="Store location used in every prompt")
    files: List[FilePayload] = Field(..., min_length=1, description="Decoded files of one batch")
