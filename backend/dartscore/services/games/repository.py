"""Load/save glue between the ORM rows and the engine's ``GameState``.

Nothing here commits except ``create_game``; the throw service commits the
throw and the updated game together.
"""

from typing import List, Optional

from dartscore import db
from dartscore.models import Game, GamePlayer, Throw
from .state import GameSettings, GameState, PlayerState, ThrowRecord, TurnStatus


class GameNotFound(LookupError):
    def __init__(self, game_id):
        super().__init__(f"game {game_id} not found")
        self.game_id = game_id


def to_game_state(game: Game) -> GameState:
    return GameState(
        id=game.id,
        status=game.status,
        settings=GameSettings(
            total_points=game.total_points,
            best_of_sets=game.best_of_sets,
            double_out=bool(game.double_out),
        ),
        players=[
            PlayerState(
                user_id=p.user_id,
                order=p.player_order,
                sets_won=p.sets_won,
                current_points=p.current_points,
            )
            for p in sorted(game.players, key=lambda p: p.player_order)
        ],
        current_turn=TurnStatus(
            player_index=game.current_player_index,
            throw_number=game.current_throw_number,
            current_turn_points=game.current_turn_points,
        ),
        winner_id=game.winner_id,
    )


def to_throw_record(row: Throw) -> ThrowRecord:
    return ThrowRecord(
        id=row.id,
        game_id=row.game_id,
        user_id=row.user_id,
        points=row.points,
        multiplier=row.multiplier,
        valid=bool(row.valid),
        score_after=row.score_after,
        set_number=row.set_number,
        timestamp=row.created_at,
    )


def create_game(settings: GameSettings, user_ids: List[int]) -> Game:
    state = GameState.new(None, settings, user_ids)
    game = Game(
        status=state.status,
        total_points=settings.total_points,
        best_of_sets=settings.best_of_sets,
        double_out=settings.double_out,
        current_player_index=state.current_turn.player_index,
        current_throw_number=state.current_turn.throw_number,
        current_turn_points=state.current_turn.current_turn_points,
    )
    for p in state.players:
        game.players.append(GamePlayer(
            user_id=p.user_id,
            player_order=p.order,
            sets_won=p.sets_won,
            current_points=p.current_points,
        ))
    db.session.add(game)
    db.session.commit()
    return game


def load_game_state(game_id: int) -> Optional[GameState]:
    """Current state of a game, or None if there is no such game."""
    game = db.session.get(Game, game_id)
    if game is None:
        return None
    return to_game_state(game)


def save_game_state(state: GameState) -> None:
    game = db.session.get(Game, state.id)
    if game is None:
        raise GameNotFound(state.id)

    game.status = state.status
    game.winner_id = state.winner_id
    game.current_player_index = state.current_turn.player_index
    game.current_throw_number = state.current_turn.throw_number
    game.current_turn_points = state.current_turn.current_turn_points

    by_user = {p.user_id: p for p in state.players}
    for row in game.players:
        player = by_user[row.user_id]
        row.sets_won = player.sets_won
        row.current_points = player.current_points
    db.session.add(game)


def append_throw(record: ThrowRecord) -> Throw:
    row = Throw(
        game_id=record.game_id,
        user_id=record.user_id,
        points=record.points,
        multiplier=record.multiplier,
        valid=record.valid,
        score_after=record.score_after,
        set_number=record.set_number,
    )
    db.session.add(row)
    return row


def throw_rows(game_id: int) -> List[Throw]:
    """Throw rows of a game, oldest first."""
    return (
        Throw.query.filter_by(game_id=game_id)
        .order_by(Throw.created_at.asc(), Throw.id.asc())
        .all()
    )


def list_throws(game_id: int) -> List[ThrowRecord]:
    return [to_throw_record(r) for r in throw_rows(game_id)]
