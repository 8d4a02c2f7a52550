from wordle_game.models.game import GameSignal, GameStatus, SubmissionTicket, SubmitResult, TileStatus
from wordle_game.services.game_round import GameRound


def _type(round_, word):
    for letter in word:
        round_.append_letter(letter)


def _submit(round_, is_valid=True):
    ticket = round_.begin_submit()
    if isinstance(ticket, SubmitResult):
        return ticket
    return round_.complete_submit(ticket, is_valid)


def test_new_round_starts_playing():
    round_ = GameRound("world")
    assert round_.state.target_word == "WORLD"
    assert round_.state.status is GameStatus.PLAYING
    assert round_.state.guesses == []
    assert round_.attempts_remaining == 6


def test_append_letter_uppercases_and_stops_at_word_length():
    round_ = GameRound("WORLD")
    _type(round_, "abcdef")
    assert round_.state.current_input == "ABCDE"


def test_append_ignores_non_letters():
    round_ = GameRound("WORLD")
    assert not round_.append_letter("1")
    assert not round_.append_letter("AB")
    assert not round_.append_letter("")
    assert round_.state.current_input == ""


def test_append_ignores_letters_outside_a_to_z():
    round_ = GameRound("WORLD")
    _type(round_, "WORL")

    # "\u00df" and "\ufb01" uppercase to two letters
    for letter in ("\u00df", "\ufb01", "\u00e9", "\u03a9"):
        assert not round_.append_letter(letter)

    assert round_.state.current_input == "WORL"
    assert round_.append_letter("d")
    assert round_.state.current_input == "WORLD"


def test_delete_letter():
    round_ = GameRound("WORLD")
    assert not round_.delete_letter()
    _type(round_, "WO")
    assert round_.delete_letter()
    assert round_.state.current_input == "W"


def test_short_input_signals_insufficient_letters():
    round_ = GameRound("WORLD")
    _type(round_, "WOR")

    result = _submit(round_)

    assert not result.accepted
    assert result.signal is GameSignal.INSUFFICIENT_LETTERS
    assert result.signal.duration_ms == 500
    assert round_.state.current_input == "WOR"
    assert round_.state.guesses == []


def test_invalid_word_clears_input_without_recording():
    round_ = GameRound("WORLD")
    _type(round_, "ZZZZZ")

    result = _submit(round_, is_valid=False)

    assert result.signal is GameSignal.INVALID_WORD
    assert round_.state.current_input == ""
    assert round_.state.guesses == []
    assert round_.state.status is GameStatus.PLAYING


def test_valid_guess_is_recorded():
    round_ = GameRound("WORLD")
    _type(round_, "WORDS")

    result = _submit(round_)

    assert result.accepted
    assert result.guess.word == "WORDS"
    assert result.guess.evaluation[3] is TileStatus.PRESENT
    assert round_.state.guesses == [result.guess]
    assert round_.state.current_input == ""
    assert round_.state.status is GameStatus.PLAYING


def test_all_correct_wins_and_is_terminal():
    round_ = GameRound("WORLD")
    _type(round_, "WORLD")

    result = _submit(round_)

    assert result.status is GameStatus.WON
    assert not round_.append_letter("A")
    assert _submit(round_).signal is GameSignal.ROUND_OVER
    assert len(round_.state.guesses) == 1


def test_sixth_miss_loses():
    round_ = GameRound("WORLD")
    for attempt in range(6):
        _type(round_, "CRANE")
        result = _submit(round_)
        expected = GameStatus.LOST if attempt == 5 else GameStatus.PLAYING
        assert result.status is expected

    assert len(round_.state.guesses) == 6


def test_win_on_last_attempt_is_a_win():
    round_ = GameRound("WORLD")
    for _ in range(5):
        _type(round_, "CRANE")
        _submit(round_)
    _type(round_, "WORLD")

    assert _submit(round_).status is GameStatus.WON


def test_second_submit_while_validating_is_rejected():
    round_ = GameRound("WORLD")
    _type(round_, "WORLD")

    ticket = round_.begin_submit()
    again = round_.begin_submit()

    assert isinstance(ticket, SubmissionTicket)
    assert again.signal is GameSignal.VALIDATION_PENDING
    assert round_.validating
    assert not round_.append_letter("A")
    assert not round_.delete_letter()

    round_.complete_submit(ticket, True)
    assert len(round_.state.guesses) == 1
    assert not round_.validating


def test_ticket_is_applied_only_once():
    round_ = GameRound("WORLD")
    _type(round_, "CRANE")
    ticket = round_.begin_submit()

    assert round_.complete_submit(ticket, True).accepted
    assert round_.complete_submit(ticket, True).signal is GameSignal.STALE_RESPONSE
    assert len(round_.state.guesses) == 1


def test_late_response_after_reset_is_discarded():
    round_ = GameRound("WORLD")
    _type(round_, "WORLD")
    ticket = round_.begin_submit()

    round_.reset("PLANE")
    result = round_.complete_submit(ticket, True)

    assert result.signal is GameSignal.STALE_RESPONSE
    assert round_.state.target_word == "PLANE"
    assert round_.state.guesses == []
    assert round_.state.status is GameStatus.PLAYING


def test_reset_creates_new_state_with_next_generation():
    round_ = GameRound("WORLD")
    _type(round_, "WORLD")
    _submit(round_)
    old_state = round_.state

    new_state = round_.reset("plane")

    assert new_state is not old_state
    assert old_state.status is GameStatus.WON
    assert new_state.target_word == "PLANE"
    assert new_state.generation == old_state.generation + 1
    assert new_state.status is GameStatus.PLAYING
