from .state import FINISHED, DARTS_PER_TURN, GameState, PlayerState, ThrowRecord


class ScoringError(Exception):
    """Base for throws the engine refuses. The game state is left untouched."""


class GameFinished(ScoringError):
    def __init__(self, game_id):
        super().__init__(f"game {game_id} is already finished")
        self.game_id = game_id


class NotPlayersTurn(ScoringError):
    def __init__(self, user_id, expected_user_id):
        super().__init__(f"not user {user_id}'s turn (waiting on user {expected_user_id})")
        self.user_id = user_id
        self.expected_user_id = expected_user_id


class InvalidThrow(ScoringError):
    def __init__(self, points, multiplier):
        super().__init__(f"{points}x{multiplier} is not a dartboard value")
        self.points = points
        self.multiplier = multiplier


# Every (points, multiplier) pair a dart can actually land on.
# Bull has no treble ring and a miss is always recorded as a single 0.
LEGAL_DARTS = frozenset(
    [(segment, multiplier) for segment in range(1, 21) for multiplier in (1, 2, 3)]
    + [(25, 1), (25, 2)]
    + [(0, 1)]
)

BUST = 'bust'
CHECKOUT = 'checkout'
CONTINUE = 'continue'


def is_legal_dart(points: int, multiplier: int) -> bool:
    return (points, multiplier) in LEGAL_DARTS


def classify_dart(remaining: int, multiplier: int, double_out: bool) -> str:
    """Outcome of a dart that leaves ``remaining`` points."""
    if remaining < 0:
        return BUST
    if double_out and remaining == 1:
        return BUST
    if remaining == 0:
        if double_out and multiplier != 2:
            return BUST
        return CHECKOUT
    return CONTINUE


def process_throw(game: GameState, user_id: int, points: int, multiplier: int) -> ThrowRecord:
    """Apply one dart to ``game`` in place and return the record to persist.

    Raises GameFinished, NotPlayersTurn or InvalidThrow (checked in that order)
    before anything is mutated.
    """
    if game.status == FINISHED:
        raise GameFinished(game.id)

    player = game.current_player
    if player.user_id != user_id:
        raise NotPlayersTurn(user_id, player.user_id)

    if not is_legal_dart(points, multiplier):
        raise InvalidThrow(points, multiplier)

    turn = game.current_turn
    real = points * multiplier
    turn_points_before = turn.current_turn_points
    score_before = player.current_points
    set_number = game.set_number

    turn.throw_number += 1
    turn.current_turn_points += real
    remaining = score_before - real

    outcome = classify_dart(remaining, multiplier, game.settings.double_out)

    if outcome == CHECKOUT:
        player.current_points = 0
        _win_set(game, player)
        return _record(game, player, points, multiplier, True, 0, set_number)

    if outcome == BUST:
        # Earlier darts of this turn were already taken off; put them back.
        turn_start_score = score_before + turn_points_before
        player.current_points = turn_start_score
        turn.current_turn_points = 0
        _next_player(game)
        return _record(game, player, points, multiplier, False, turn_start_score, set_number)

    player.current_points = remaining
    if turn.throw_number >= DARTS_PER_TURN:
        _next_player(game)
    return _record(game, player, points, multiplier, True, remaining, set_number)


def _record(game, player, points, multiplier, valid, score_after, set_number) -> ThrowRecord:
    return ThrowRecord(
        game_id=game.id,
        user_id=player.user_id,
        points=points,
        multiplier=multiplier,
        valid=valid,
        score_after=score_after,
        set_number=set_number,
    )


def _win_set(game: GameState, player: PlayerState) -> None:
    player.sets_won += 1

    if player.sets_won >= game.settings.sets_needed:
        game.status = FINISHED
        game.winner_id = player.user_id
        return

    for p in game.players:
        p.current_points = game.settings.total_points
    # The set winner does not lead the next set.
    _next_player(game)


def _next_player(game: GameState) -> None:
    turn = game.current_turn
    turn.throw_number = 0
    turn.current_turn_points = 0
    turn.player_index = (turn.player_index + 1) % len(game.players)
