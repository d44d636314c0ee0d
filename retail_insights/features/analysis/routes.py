"""
Analysis routes
Single-request analysis and the batch orchestrator over HTTP
"""

from flask import Blueprint, request, jsonify, current_app
from pydantic import ValidationError

from retail_insights.core.exceptions import (
    EmptyDatasetError, ProviderError, UnclassifiedFilesError
)
from retail_insights.utils.error_utils import ErrorResponse
from retail_insights.utils.logging_utils import get_logger
from .models import AnalyzeBody, BatchAnalyzeBody

logger = get_logger(__name__)

analysis_bp = Blueprint('analysis', __name__, url_prefix='/api')


def _service_unavailable(service_name: str):
    """configuration_error envelope naming the missing credential when known"""
    error = getattr(current_app, 'configuration_error', None)
    if error is not None:
        return jsonify(ErrorResponse.configuration_error(str(error), details=error.to_details())), 500
    return jsonify(ErrorResponse.configuration_error(f"{service_name} is not initialized")), 500


def _validation_failure(error: ValidationError):
    return jsonify(ErrorResponse.validation_error(
        "Invalid request body",
        details={"errors": error.errors(include_url=False, include_context=False)}
    )), 400


@analysis_bp.route('/analyze-mobile-retail', methods=['POST'])
def analyze_mobile_retail():
    """Analyze one AnalysisRequest"""
    payload = request.get_json(silent=True)
    if not payload:
        return jsonify(ErrorResponse.validation_error("JSON data is required")), 400

    try:
        analysis_request = AnalyzeBody.model_validate(payload).data.to_request()
    except ValidationError as e:
        return _validation_failure(e)

    analysis_service = getattr(current_app, 'analysis_service', None)
    if not analysis_service:
        return _service_unavailable("AnalysisService")

    try:
        logger.info(f"🎯 Analysis request: {analysis_request.type.value}, "
                    f"{analysis_request.total_records} records")
        result = analysis_service.analyze(analysis_request)
        return jsonify(result.to_dict())

    except EmptyDatasetError as e:
        return jsonify(ErrorResponse.validation_error(str(e))), 400
    except ProviderError as e:
        return jsonify(ErrorResponse.provider_error(
            f"Claude API Error: {e.message}", details=e.to_details()
        )), 500
    except Exception as e:
        logger.error(f"❌ Error analyzing data: {str(e)}")
        return jsonify(ErrorResponse.internal_error(
            f"Failed to analyze data: {str(e)}", details={"message": str(e)}
        )), 500


@analysis_bp.route('/analyze-batch', methods=['POST'])
def analyze_batch():
    """Combined analysis plus one analysis per detected type"""
    payload = request.get_json(silent=True)
    if not payload:
        return jsonify(ErrorResponse.validation_error("JSON data is required")), 400

    try:
        body = BatchAnalyzeBody.model_validate(payload)
    except ValidationError as e:
        return _validation_failure(e)

    orchestrator = getattr(current_app, 'analysis_orchestrator', None)
    if not orchestrator:
        return _service_unavailable("AnalysisOrchestrator")

    try:
        files = [file_payload.to_file_data() for file_payload in body.files]
        batch = orchestrator.run(files, body.location)
    except UnclassifiedFilesError as e:
        return jsonify(ErrorResponse.validation_error(str(e), details=e.to_details())), 400
    except Exception as e:
        logger.error(f"❌ Error running batch analysis: {str(e)}")
        return jsonify(ErrorResponse.internal_error(
            f"Failed to analyze data: {str(e)}", details={"message": str(e)}
        )), 500

    response = batch.to_dict()
    response["success"] = bool(batch.results)
    return jsonify(response)
