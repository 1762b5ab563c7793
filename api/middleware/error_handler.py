"""
Centralized Error Handling Middleware for Flask

Every error leaves the API as the same JSON envelope:
{'error': True, 'code': ..., 'message': ..., 'details': ...}
"""

from flask import Flask, jsonify, request
from functools import wraps
import logging
import traceback
from typing import Tuple, Dict, Callable, Any

from app.errors import AppError

logger = logging.getLogger(__name__)

# AppError code -> HTTP status
STATUS_BY_CODE = {
    'VALIDATION_ERROR': 400,
    'CSV_PARSE_ERROR': 400,
    'SERVICE_UNAVAILABLE': 503,
    'DATA_FETCH_ERROR': 503,
    'CONFIG_ERROR': 500,
}


def _envelope(code: str, message: str, details: Any = None) -> Dict:
    return {'error': True, 'code': code, 'message': message, 'details': details}


def setup_error_handlers(app: Flask):
    """
    Register error handlers with Flask app

    Usage:
        app = Flask(__name__)
        setup_error_handlers(app)
    """

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError) -> Tuple[Dict, int]:
        """Handle custom application errors"""
        status_code = STATUS_BY_CODE.get(error.code, 500)
        if status_code >= 500:
            logger.error(f"App Error [{error.code}]: {error.message}")
        else:
            logger.warning(f"App Error [{error.code}]: {error.message}")
        return jsonify(error.to_dict()), status_code

    @app.errorhandler(404)
    def handle_flask_not_found(error) -> Tuple[Dict, int]:
        """Handle unknown endpoints"""
        return jsonify(_envelope(
            'ENDPOINT_NOT_FOUND',
            f"Endpoint not found: {request.path}",
            {'method': request.method, 'path': request.path}
        )), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error) -> Tuple[Dict, int]:
        """Handle method not allowed errors"""
        return jsonify(_envelope(
            'METHOD_NOT_ALLOWED',
            f"Method {request.method} not allowed for {request.path}"
        )), 405

    @app.errorhandler(413)
    def handle_payload_too_large(error) -> Tuple[Dict, int]:
        """Handle oversized uploads"""
        return jsonify(_envelope('PAYLOAD_TOO_LARGE', "File too large. Maximum size is 16MB.")), 413

    @app.errorhandler(500)
    def handle_server_error(error) -> Tuple[Dict, int]:
        """Handle internal server errors"""
        logger.error(f"Server Error: {error}")
        return jsonify(_envelope('INTERNAL_ERROR', 'An internal error occurred')), 500


def safe_endpoint(func: Callable) -> Callable:
    """
    Decorator for safe endpoint execution

    AppErrors pass through to the registered handlers; anything else is
    logged with its traceback and re-raised as an AppError.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Endpoint {func.__name__} failed: {e}")
            logger.error(traceback.format_exc())
            raise AppError(
                message=f"Operation failed: {str(e)}",
                code="ENDPOINT_ERROR"
            ) from e
    return wrapper


def log_request():
    """Log incoming request details"""
    logger.debug(f"Request: {request.method} {request.full_path}")


def log_response(response):
    """Log response details"""
    logger.debug(f"Response: {response.status_code}")
    return response


def setup_request_logging(app: Flask):
    """Setup request/response debug logging"""
    app.before_request(log_request)
    app.after_request(log_response)
