"""
TOS Compare Flask Routes
========================
HTTP surface for the comparison engine.

Callers post already-extracted plain text; file upload and text
extraction happen upstream.
"""

import time
from datetime import datetime, timezone
from functools import wraps

from flask import Blueprint, g, jsonify, request
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from config_logging import (
    APP_NAME, VERSION, StructuredLogger, TOSCompareError, ValidationError,
    get_config, get_logger,
)

from .analyzer import compare, diff_texts

logger = get_logger('tos_compare.routes')

compare_blueprint = Blueprint('tos_compare', __name__)

# Requests slower than this are logged as warnings
SLOW_REQUEST_SECONDS = 5.0


def _error_response(error: TOSCompareError):
    payload = error.to_dict()
    payload['error']['correlation_id'] = getattr(g, 'correlation_id', 'unknown')
    return jsonify(payload), error.status_code


# =============================================================================
# STANDARDIZED ERROR HANDLING DECORATOR
# =============================================================================

def handle_compare_errors(f):
    """
    Decorator for standardized API error handling in comparison routes.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        start_time = time.time()
        try:
            result = f(*args, **kwargs)

            elapsed = time.time() - start_time
            if elapsed > SLOW_REQUEST_SECONDS:
                logger.warning(f"Slow compare API call: {f.__name__} took {elapsed:.1f}s")

            return result

        except TOSCompareError as e:
            if e.status_code < 500:
                logger.warning(f"{e.code} in {f.__name__}: {e}")
            else:
                logger.error(f"{e.code} in {f.__name__}: {e}")
            return _error_response(e)
        except HTTPException:
            # Left to the registered HTTP error handlers
            raise
        except Exception as e:
            logger.exception(f"Unexpected error in {f.__name__}: {e}")
            return _error_response(
                TOSCompareError('An unexpected error occurred', code='INTERNAL_ERROR')
            )

    return decorated


@compare_blueprint.before_request
def assign_correlation_id():
    g.correlation_id = StructuredLogger.new_correlation_id()


@compare_blueprint.app_errorhandler(RequestEntityTooLarge)
def payload_too_large(e):
    logger.warning(f"Request body rejected: {request.content_length} bytes")
    return _error_response(TOSCompareError(
        'Request body exceeds the size limit',
        code='PAYLOAD_TOO_LARGE',
        status_code=413,
    ))


# =============================================================================
# REQUEST HELPERS
# =============================================================================

def _read_comparison_request():
    """
    Pull both texts and their labels from the JSON body.

    Returns:
        (text1, text2, file1_name, file2_name)

    Raises:
        ValidationError: On a missing body, missing or non-string texts,
                         or texts larger than the configured cap
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    text1 = data.get('text1')
    text2 = data.get('text2')
    if text1 is None or text2 is None:
        raise ValidationError("Both texts are required for comparison",
                              field='text1' if text1 is None else 'text2')

    max_bytes = get_config().max_text_bytes
    for field_name, value in (('text1', text1), ('text2', text2)):
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string", field=field_name)
        if len(value.encode('utf-8')) > max_bytes:
            raise ValidationError(
                f"{field_name} exceeds the {max_bytes} byte limit",
                field=field_name,
            )

    file1_name = data.get('file1_name') or 'document1'
    file2_name = data.get('file2_name') or 'document2'
    if not isinstance(file1_name, str) or not isinstance(file2_name, str):
        raise ValidationError("File names must be strings")

    return text1, text2, file1_name, file2_name


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


# =============================================================================
# ROUTES
# =============================================================================

@compare_blueprint.route('/api/compare', methods=['POST'])
@handle_compare_errors
def compare_documents():
    """Line and word diff of two texts."""
    text1, text2, file1_name, file2_name = _read_comparison_request()
    logger.info(f"Starting comparison: {file1_name} vs {file2_name}")

    result = diff_texts(text1, text2)

    return jsonify({
        'success': True,
        'file1_name': file1_name,
        'file2_name': file2_name,
        'comparison': result.to_dict(),
        'metadata': {
            'file1_length': len(text1),
            'file2_length': len(text2),
            'comparison_date': _timestamp(),
        }
    })


@compare_blueprint.route('/api/compare-comprehensive', methods=['POST'])
@handle_compare_errors
def compare_comprehensive():
    """Full comparison report: matching, terms, clauses, risks, metrics and diff."""
    text1, text2, file1_name, file2_name = _read_comparison_request()
    logger.info(f"Starting comprehensive comparison: {file1_name} vs {file2_name}")

    report = compare(text1, text2, file1_name, file2_name)

    return jsonify({
        'success': True,
        'file1_name': file1_name,
        'file2_name': file2_name,
        'comprehensive_analysis': report.to_dict(),
        'metadata': {
            'file1_length': len(text1),
            'file2_length': len(text2),
            'comparison_date': _timestamp(),
            'analysis_type': 'comprehensive-advanced',
        }
    })


@compare_blueprint.route('/api/health', methods=['GET'])
def health():
    return jsonify({
        'status': 'OK',
        'message': f'{APP_NAME} API is running',
        'timestamp': _timestamp(),
        'version': VERSION,
    })
