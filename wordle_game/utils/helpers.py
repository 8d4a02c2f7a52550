"""
Helper Functions

Contains utility functions used throughout the application.
"""

import re
from typing import Dict

from flask import request

PLAYER_HEADER = 'X-Player-Id'
DEFAULT_PLAYER_ID = 'local'

_PLAYER_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]{1,64}$')


def get_player_id(request_obj=None) -> str:
    """Player identifier from the X-Player-Id header, or the default player."""
    if request_obj is None:
        request_obj = request

    player_id = (request_obj.headers.get(PLAYER_HEADER) or '').strip()
    if not player_id:
        return DEFAULT_PLAYER_ID
    if not _PLAYER_ID_PATTERN.match(player_id):
        raise ValueError('Player id may only contain letters, digits, "-" and "_"')
    return player_id


def get_player_identity(request_obj=None) -> Dict[str, str]:
    """Extract player identity information from request."""
    if request_obj is None:
        request_obj = request

    try:
        player_id = get_player_id(request_obj)
    except ValueError:
        player_id = 'invalid'

    return {
        'user_ip': request_obj.remote_addr or 'unknown',
        'player_id': player_id,
    }
