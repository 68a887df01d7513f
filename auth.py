"""Bearer token authentication for the API blueprints.

Tokens are HS256 JWTs carrying the user id as `id`. Login and registration
live outside this service; issue_token exists for tooling and tests.
"""

import functools
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app, g, jsonify, request

from logging_config import setup_logging

logger = setup_logging(module_name="auth")


def issue_token(user_id, secret, expires_in=60 * 60 * 24 * 7):
    payload = {
        'id': str(user_id),
        'iat': datetime.now(timezone.utc),
        'exp': datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret, algorithm='HS256')


def _unauthorized(message, error):
    return jsonify({"message": message, "error": error}), 401


def require_auth(view):
    """Rejects the request unless it carries a valid bearer token. Sets g.user_id."""

    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get('Authorization')
        if not auth_header:
            return _unauthorized('No authentication token provided', 'MISSING_TOKEN')

        if not auth_header.startswith('Bearer '):
            return _unauthorized('Invalid token format. Use: Bearer <token>', 'INVALID_TOKEN_FORMAT')

        token = auth_header[len('Bearer '):].strip()
        if not token:
            return _unauthorized('No token, authorization denied', 'EMPTY_TOKEN')

        secret = current_app.config.get('JWT_SECRET')
        if not secret:
            logger.error("JWT_SECRET is not configured")
            return jsonify({"message": "Server configuration error", "error": "JWT_SECRET_MISSING"}), 500

        try:
            payload = jwt.decode(token, secret, algorithms=['HS256'])
        except jwt.ExpiredSignatureError:
            return _unauthorized('Token has expired', 'TOKEN_EXPIRED')
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid JWT token: %s", e)
            return _unauthorized('Invalid token', 'INVALID_TOKEN')

        if not payload.get('id'):
            return _unauthorized('Invalid token payload', 'INVALID_PAYLOAD')

        g.user_id = str(payload['id'])
        return current_app.ensure_sync(view)(*args, **kwargs)

    return wrapper
