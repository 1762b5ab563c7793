"""
API Middleware Package
"""

from api.middleware.error_handler import (
    setup_error_handlers,
    setup_request_logging,
    safe_endpoint,
    STATUS_BY_CODE
)

__all__ = [
    'setup_error_handlers',
    'setup_request_logging',
    'safe_endpoint',
    'STATUS_BY_CODE'
]
