"""
Retail Insights API
Application factory: configuration, logging, service wiring and error handlers
"""

import os
import pathlib
import traceback
from typing import Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from retail_insights.core.config import LLMConfigManager, require_api_key
from retail_insights.core.exceptions import ConfigurationError
from retail_insights.core.llm.factory import LLMFactory
from retail_insights.core.llm.interfaces import BaseLLMRepository
from retail_insights.features.analysis import AnalysisOrchestrator, AnalysisService
from retail_insights.features.analysis.routes import analysis_bp
from retail_insights.features.llm import LLMService
from retail_insights.features.prompting import PromptBuilder
from retail_insights.features.system import debug_bp, system_bp
from retail_insights.features.uploads.routes import uploads_bp
from retail_insights.utils.error_utils import ErrorResponse
from retail_insights.utils.logging_utils import configure_logging, get_logger

logger = get_logger(__name__)

STUB_PROVIDER = "stub"


def load_environment_file() -> None:
    """Load .env.local from the working directory when present"""
    env_path = pathlib.Path.cwd() / '.env.local'
    if env_path.exists():
        load_dotenv(env_path)
        logger.success(f"Loaded environment variables from {env_path}")
    else:
        logger.info("Environment file not found, using system environment variables only")


def initialize_services(app: Flask, llm_repository: Optional[BaseLLMRepository] = None) -> None:
    """
    Construct the completion client once and hand it to the request path

    Args:
        app: Flask application (services are stored as attributes)
        llm_repository: pre-built provider repository (tests); built from config when None
    """
    config = app.llm_config_manager.config
    app.configuration_error = None

    try:
        if llm_repository is None:
            if config.provider == STUB_PROVIDER:
                llm_repository = LLMFactory.create_repository(STUB_PROVIDER, {})
            else:
                api_key = require_api_key(app.environ)
                llm_repository = LLMFactory.create_repository(config.provider, {
                    'api_key': api_key,
                    'default_model': config.get_mode_config().model_id
                })
    except ConfigurationError as e:
        # Analysis endpoints answer with this error instead of a downstream 401
        app.configuration_error = e
        logger.warning(str(e))
        return

    app.llm_service = LLMService(repository=llm_repository, config_manager=app.llm_config_manager)
    app.prompt_builder = PromptBuilder(
        sample_rows=config.sample_rows,
        combined_sample_rows=config.combined_sample_rows
    )
    app.analysis_service = AnalysisService(app.llm_service, prompt_builder=app.prompt_builder)
    app.analysis_orchestrator = AnalysisOrchestrator(app.analysis_service)
    logger.success(f"{config.provider} completion client initialized (mode: {config.mode})")


def register_error_handlers(app: Flask) -> None:

    @app.errorhandler(404)
    def not_found(error):
        logger.warning(f"404: {request.url}")
        available_endpoints = sorted(
            str(rule) for rule in app.url_map.iter_rules() if str(rule).startswith('/api/')
        )
        return jsonify(ErrorResponse.not_found_error(
            "The requested endpoint was not found",
            details={
                "requested_url": request.url,
                "method": request.method,
                "available_endpoints": available_endpoints
            }
        )), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"500 on {request.method} {request.url}: {str(error)}")
        details = {"url": request.url, "method": request.method}
        if app.debug_endpoints:
            details["debug_info"] = {
                "error_message": str(error),
                "error_type": error.__class__.__name__
            }
        return jsonify(ErrorResponse.internal_error("Internal server error", details=details)), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            return jsonify(ErrorResponse.create(
                error.description or error.name, "http_error", details={"status_code": error.code}
            )), error.code

        logger.error(f"Unexpected error on {request.method} {request.url}: {str(error)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        details = {"url": request.url, "method": request.method}
        if app.debug_endpoints:
            details["debug_info"] = {
                "error_message": str(error),
                "error_type": error.__class__.__name__,
                "traceback": traceback.format_exc().split('\n')[:10]
            }
        return jsonify(ErrorResponse.internal_error("Unexpected server error", details=details)), 500


def create_app(environment: Optional[str] = None,
               llm_repository: Optional[BaseLLMRepository] = None,
               environ: Optional[Mapping[str, str]] = None) -> Flask:
    """
    Application factory

    Args:
        environment: configuration environment (FLASK_ENV when None)
        llm_repository: provider repository to use instead of the configured one
        environ: environment mapping (os.environ when None)

    Returns:
        configured Flask application
    """
    configure_logging(os.getenv('LOG_LEVEL'))
    if environ is None:
        load_environment_file()

    app = Flask(__name__)
    app.environ = environ
    app.llm_config_manager = LLMConfigManager(environment=environment, environ=environ)
    config = app.llm_config_manager.config
    app.debug_endpoints = config.debug_endpoints

    CORS(app, origins=config.allowed_origins, supports_credentials=True)

    initialize_services(app, llm_repository)

    app.register_blueprint(analysis_bp)
    app.register_blueprint(uploads_bp)
    app.register_blueprint(system_bp)
    if config.debug_endpoints:
        app.register_blueprint(debug_bp)
        logger.config("Debug endpoints enabled: /api/check-env")

    register_error_handlers(app)
    return app


if __name__ == '__main__':
    logger.startup("=== Retail Insights API Server Starting ===")
    app = create_app()
    port = int(os.getenv('PORT', 8080))
    debug_mode = os.getenv('FLASK_ENV') == 'development'

    logger.config(f"Server starting at: http://0.0.0.0:{port}")
    logger.config(f"Debug mode: {debug_mode}")
    logger.config(f"Analysis mode: {app.llm_config_manager.config.mode}")
    logger.config(f"Completion client: {'Ready' if getattr(app, 'llm_service', None) else 'Not configured'}")

    app.run(host='0.0.0.0', port=port, debug=debug_mode)
