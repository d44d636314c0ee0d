"""
System routes
Health check, completion backend connectivity test and the credential diagnostic
"""

import datetime
from flask import Blueprint, jsonify, current_app

from retail_insights import __version__
from retail_insights.core.config import describe_api_key
from retail_insights.core.exceptions import ProviderError
from retail_insights.utils.error_utils import ErrorResponse
from retail_insights.utils.logging_utils import get_logger

logger = get_logger(__name__)

system_bp = Blueprint('system', __name__, url_prefix='/api')

# Registered only when app.debug_endpoints is enabled
debug_bp = Blueprint('debug', __name__, url_prefix='/api')


@system_bp.route('/health', methods=['GET'])
def health_check():
    """Service status"""
    llm_service = getattr(current_app, 'llm_service', None)
    config_manager = getattr(current_app, 'llm_config_manager', None)
    configuration_error = getattr(current_app, 'configuration_error', None)

    health_status = {
        "status": "healthy",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "version": __version__,
        "services": {
            "llm": {
                "status": "available" if llm_service else "unavailable",
                "provider": config_manager.config.provider if config_manager else None,
                "mode": llm_service.mode if llm_service else None,
                "error": str(configuration_error) if configuration_error else None
            }
        }
    }

    if not llm_service:
        health_status["status"] = "degraded"
        return jsonify(health_status), 503
    return jsonify(health_status)


@system_bp.route('/test-claude', methods=['GET'])
def test_claude():
    """No-argument connectivity check against the completion backend"""
    llm_service = getattr(current_app, 'llm_service', None)
    if not llm_service:
        error = getattr(current_app, 'configuration_error', None)
        message = str(error) if error else "LLMService is not initialized"
        details = error.to_details() if error else {}
        return jsonify(ErrorResponse.configuration_error(f"API Test Failed: {message}", details)), 500

    try:
        message = llm_service.test_connection()
        return jsonify({"success": True, "message": message})
    except ProviderError as e:
        return jsonify(ErrorResponse.provider_error(
            f"API Test Failed: {e.message}", details=e.to_details()
        )), 500
    except Exception as e:
        logger.error(f"❌ Connectivity test failed: {str(e)}")
        return jsonify(ErrorResponse.internal_error(f"API Test Failed: {str(e)}")), 500


@debug_bp.route('/check-env', methods=['GET'])
def check_env():
    """Credential presence, length and prefix (non-production only)"""
    return jsonify(describe_api_key(getattr(current_app, 'environ', None)))
