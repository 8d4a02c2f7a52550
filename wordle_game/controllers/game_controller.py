"""
Game Controller

Handles all game-related HTTP endpoints. Every endpoint acts on the
calling player's active round and answers with the rendered state.
"""

from flask import Blueprint, request, jsonify

from ..models.game import GameSignal
from ..services.session_service import get_session_service
from ..utils.decorators import require_session
from ..utils.game_logger import game_logger
from ..utils.helpers import get_player_id

game_bp = Blueprint('game', __name__)

# HTTP status for each rejected submission
SIGNAL_STATUS_CODES = {
    GameSignal.INSUFFICIENT_LETTERS: 400,
    GameSignal.INVALID_WORD: 400,
    GameSignal.ROUND_OVER: 400,
    GameSignal.VALIDATION_PENDING: 409,
    GameSignal.STALE_RESPONSE: 409,
}


def _error(action: str, error: Exception, status_code: int = 500):
    """Logs a failed request and builds the error response."""
    game_logger.log_error(request, error, action)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response)
    return jsonify(error_response), status_code


def _state_response(action: str, session, **extra):
    response_data = {
        'success': True,
        'state': session.view_state(),
        **extra
    }
    game_logger.log_server_response(request, action, True, response_data)
    return jsonify(response_data)


@game_bp.route('/game/state', methods=['GET'])
@require_session
def get_state(session):
    """Get the active round as the UI renders it."""
    try:
        game_logger.log_user_action(request, 'get_state')
        return _state_response('get_state', session)
    except Exception as e:
        return _error('get_state', e)


@game_bp.route('/game/letter', methods=['POST'])
@require_session
def add_letter(session):
    """Append one letter to the current input."""
    try:
        data = request.get_json(silent=True) or {}
        letter = data.get('letter')
        if not isinstance(letter, str) or len(letter) != 1:
            error_response = {
                'success': False,
                'error': 'A single letter is required'
            }
            game_logger.log_server_response(request, 'add_letter', False, error_response)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'add_letter', letter=letter)
        changed = session.add_letter(letter)
        return _state_response('add_letter', session, changed=changed)
    except Exception as e:
        return _error('add_letter', e)


@game_bp.route('/game/delete', methods=['POST'])
@require_session
def delete_letter(session):
    """Remove the last letter of the current input."""
    try:
        game_logger.log_user_action(request, 'delete_letter')
        changed = session.delete_letter()
        return _state_response('delete_letter', session, changed=changed)
    except Exception as e:
        return _error('delete_letter', e)


@game_bp.route('/game/key', methods=['POST'])
@require_session
def press_key(session):
    """Keyboard-shaped input: a letter, BACKSPACE or ENTER."""
    try:
        data = request.get_json(silent=True) or {}
        key = data.get('key')
        if not isinstance(key, str) or not key.strip():
            error_response = {
                'success': False,
                'error': 'Key is required'
            }
            game_logger.log_server_response(request, 'press_key', False, error_response)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'press_key', key=key)
        if key.strip().upper() == 'ENTER':
            return _submit(session)

        session.press_key(key)
        return _state_response('press_key', session)
    except Exception as e:
        return _error('press_key', e)


@game_bp.route('/game/submit', methods=['POST'])
@require_session
def submit_guess(session):
    """Submit the current input for validation and evaluation."""
    try:
        game_logger.log_user_action(
            request, 'submit_guess',
            guess=session.get_active().current_input
        )
        return _submit(session)
    except Exception as e:
        return _error('submit_guess', e)


def _submit(session):
    result = session.submit()
    state = session.view_state()

    response_data = {
        'success': result.accepted,
        'result': result.to_dict(),
        'state': state
    }

    if not result.accepted:
        response_data['error'] = result.signal.value
        game_logger.log_server_response(
            request, 'submit_guess', False, response_data,
            signal=result.signal.value
        )
        return jsonify(response_data), SIGNAL_STATUS_CODES.get(result.signal, 400)

    game_logger.log_server_response(
        request, 'submit_guess', True, response_data,
        guess=result.guess.word, status=result.status.value
    )

    # Log special game events
    if result.status.is_terminal:
        game_logger.log_game_event(
            get_player_id(request),
            'round_won' if state['status'] == 'WON' else 'round_lost',
            word_length=state['word_length'],
            attempts_used=len(state['guesses']),
            target_word=state['answer'],
            final_guess=result.guess.word
        )

    return jsonify(response_data)


@game_bp.route('/game/reset', methods=['POST'])
@require_session
def reset_game(session):
    """Start a replay of the active word length with a random word."""
    try:
        game_logger.log_user_action(request, 'reset_game')
        session.reset_game()
        game_logger.log_game_event(
            get_player_id(request), 'round_reset',
            word_length=session.active_length
        )
        return _state_response('reset_game', session)
    except Exception as e:
        return _error('reset_game', e)


@game_bp.route('/game/length', methods=['POST'])
@require_session
def switch_length(session):
    """Switch to the round for another word length."""
    try:
        data = request.get_json(silent=True) or {}
        length = data.get('length')

        game_logger.log_user_action(request, 'switch_length', length=length)

        if isinstance(length, bool) or not isinstance(length, int) or length not in session.lengths:
            error_response = {
                'success': False,
                'error': f'Length must be one of {list(session.lengths)}'
            }
            game_logger.log_server_response(request, 'switch_length', False, error_response)
            return jsonify(error_response), 400

        previous_length = session.active_length
        session.switch_length(length)
        game_logger.log_game_event(
            get_player_id(request), 'length_switched',
            from_length=previous_length, to_length=length
        )
        return _state_response('switch_length', session)
    except Exception as e:
        return _error('switch_length', e)


@game_bp.route('/stats', methods=['GET'])
@require_session
def get_stats(session):
    """Get cumulative statistics for the player."""
    try:
        game_logger.log_user_action(request, 'get_stats')
        stats = session.statistics
        response_data = {
            'success': True,
            'stats': {**stats.to_dict(), 'win_percentage': stats.win_percentage}
        }
        game_logger.log_server_response(request, 'get_stats', True, response_data)
        return jsonify(response_data)
    except Exception as e:
        return _error('get_stats', e)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        session_service = get_session_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'session_service': session_service is not None,
            'active_sessions': len(session_service.sessions) if session_service else 0,
            'oracle_cache': session_service.oracle.cache_info() if session_service else None,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)
    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
