"""
Analysis Service
One AnalysisRequest -> one prompt -> one completion call -> one AnalysisResult,
and the batch orchestrator that fans a set of files out into such requests
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from retail_insights.core.exceptions import (
    EmptyDatasetError, RetailInsightsError, UnclassifiedFilesError
)
from retail_insights.core.models import AnalysisRequest, AnalysisResult, DataType, FileData
from retail_insights.features.llm import LLMService
from retail_insights.features.parsing import ResponseParser
from retail_insights.features.preprocessing import compute_stats
from retail_insights.features.prompting import PromptBuilder
from retail_insights.utils.logging_utils import get_logger

logger = get_logger(__name__)

COMBINED_RESULT_KEY = "all"


class AnalysisService:
    """Stats, prompt, completion and parsing for a single request"""

    def __init__(self, llm_service: LLMService, prompt_builder: Optional[PromptBuilder] = None,
                 parser: Optional[ResponseParser] = None):
        self.llm_service = llm_service
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.parser = parser or ResponseParser()

    def analyze(self, request: AnalysisRequest, mode: Optional[str] = None) -> AnalysisResult:
        """
        Analyze one request

        Args:
            request: analysis request
            mode: operating mode (configured mode when None)

        Returns:
            AnalysisResult

        Raises:
            EmptyDatasetError: the request holds no records
            ProviderError: the completion call failed
        """
        if request.total_records == 0:
            raise EmptyDatasetError(f"No records to analyze for {request.type.value}")

        logger.processing(f"Analyzing {request.type.value}{request.location_text}: "
                          f"{request.total_records} records")

        stats = compute_stats(request)
        prompt = self.prompt_builder.build_prompt(request, stats)
        raw_text = self.llm_service.analyze(prompt, mode)
        result = self.parser.parse(raw_text, request.type)

        if not result.has_content():
            logger.warning(f"Empty analysis for {request.type.value}")
        logger.completed(f"Analysis of {request.type.value} finished")
        return result


@dataclass
class BatchAnalysis:
    """Results keyed 'all' + type value, plus per-request errors"""
    results: Dict[str, AnalysisResult] = field(default_factory=dict)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'results': {key: result.to_dict() for key, result in self.results.items()},
            'errors': list(self.errors)
        }


class AnalysisOrchestrator:
    """Combined request first, then one request per detected type, sequentially"""

    def __init__(self, analysis_service: AnalysisService):
        self.analysis_service = analysis_service

    @staticmethod
    def group_by_type(files: List[FileData]) -> Dict[DataType, List[Dict[str, Any]]]:
        """Rows of all files per type, types and rows in upload order"""
        grouped: Dict[DataType, List[Dict[str, Any]]] = {}
        for file in files:
            grouped.setdefault(file.type, []).extend(file.data)
        return grouped

    def _run_one(self, batch: BatchAnalysis, key: str, request: AnalysisRequest) -> None:
        try:
            batch.results[key] = self.analysis_service.analyze(request)
        except RetailInsightsError as e:
            logger.error(f"Error analyzing {key}: {str(e)}")
            batch.errors.append({
                'type': key,
                'error': f"Error analyzing {key}: {str(e)}",
                'error_type': e.error_type,
                'details': e.to_details()
            })

    def run(self, files: List[FileData], location: Optional[str] = None) -> BatchAnalysis:
        """
        Analyze a batch of classified files

        Raises:
            UnclassifiedFilesError: some file is still tagged unknown
        """
        unclassified = [file.file_name for file in files if file.type == DataType.UNKNOWN]
        if unclassified:
            raise UnclassifiedFilesError(unclassified)

        batch = BatchAnalysis()
        logger.processing(f"Batch analysis: {len(files)} files")

        self._run_one(batch, COMBINED_RESULT_KEY,
                      AnalysisRequest(type=DataType.COMBINED, data=list(files), location=location))

        for data_type, rows in self.group_by_type(files).items():
            self._run_one(batch, data_type.value,
                          AnalysisRequest(type=data_type, data=rows, location=location))

        logger.stats(f"Batch finished: {len(batch.results)} results, {len(batch.errors)} errors")
        return batch
