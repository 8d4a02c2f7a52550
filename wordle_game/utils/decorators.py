"""
Session Decorators

Contains decorators that resolve the player's game session for HTTP endpoints.
"""

from functools import wraps

from flask import jsonify, request

from .helpers import get_player_id


def require_session(f):
    """
    Decorator resolving the calling player's SessionManager.

    The session is passed to the view as the `session` keyword argument and
    its lock is held while the view runs, so concurrent requests from one
    player are applied one at a time.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.session_service import get_session_service

        session_service = get_session_service()
        if not session_service:
            return jsonify({
                'success': False,
                'error': 'Session service unavailable'
            }), 500

        try:
            player_id = get_player_id(request)
        except ValueError as e:
            return jsonify({
                'success': False,
                'error': str(e)
            }), 400

        session = session_service.get_session(player_id)
        kwargs['session'] = session
        with session.lock:
            return f(*args, **kwargs)

    return decorated_function
