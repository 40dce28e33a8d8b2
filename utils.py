"""
Utility Functions for the xatom.space Storefront

Helpers shared by the route blueprints.
"""
import logging
from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request

logger = logging.getLogger(__name__)

TRUTHY = {'1', 'true', 'yes', 'on'}


def json_error(message: str, status: int):
    """Build a JSON error response tuple"""
    return jsonify({'error': message}), status


def parse_bool(value: Optional[str]) -> bool:
    """Interpret a query-string or form flag"""
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY


def resolve_origin() -> str:
    """
    Origin used for the payment redirect URLs

    Returns:
        The request Origin header, else SITE_URL, else the request host URL
    """
    origin = request.headers.get('Origin')
    if origin and origin.startswith(('http://', 'https://')):
        return origin.rstrip('/')
    site_url = current_app.config.get('SITE_URL')
    if site_url:
        return site_url.rstrip('/')
    return request.host_url.rstrip('/')


def json_body(f):
    """
    Decorator that passes the request JSON object (or {}) as `payload`

    Usage:
        @json_body
        def my_endpoint(payload):
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        payload = request.get_json(silent=True)
        if payload is None:
            if request.get_data(cache=True).strip():
                return json_error('Invalid JSON', 400)
            payload = {}
        if not isinstance(payload, dict):
            return json_error('Invalid JSON', 400)
        return f(*args, payload=payload, **kwargs)
    return decorated_function
