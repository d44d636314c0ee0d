"""
Upload routes
Multipart spreadsheet upload, decoded and classified per file
"""

from flask import Blueprint, request, jsonify

from retail_insights.utils.error_utils import ErrorResponse
from retail_insights.utils.logging_utils import get_logger
from .services import process_uploads, ACCEPTED_EXTENSIONS

logger = get_logger(__name__)

uploads_bp = Blueprint('uploads', __name__, url_prefix='/api')


@uploads_bp.route('/upload', methods=['POST'])
def upload_files():
    """Decode every uploaded file; failures are reported per file"""
    uploaded = request.files.getlist('files')
    if not uploaded:
        return jsonify(ErrorResponse.validation_error(
            "No files uploaded",
            details={"field": "files", "accepted": list(ACCEPTED_EXTENSIONS)}
        )), 400

    uploads = [(storage.filename or '', storage.read()) for storage in uploaded]
    logger.loading(f"Received {len(uploads)} uploads")

    files, errors = process_uploads(uploads)
    return jsonify({
        "success": bool(files),
        "files": [file.to_dict() for file in files],
        "errors": errors
    })
