from dataclasses import replace
from typing import Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from dartscore import db
from .locks import game_locks
from .repository import GameNotFound, append_throw, load_game_state, save_game_state
from .scoring import process_throw
from .state import ACTIVE, FINISHED, PENDING, GameState, ThrowRecord


def submit_throw(game_id: int, user_id: int, points: int, multiplier: int) -> Tuple[GameState, ThrowRecord]:
    """Score one dart against a stored game and persist the result.

    The load -> score -> save cycle runs under the game's lock so two darts for
    the same match can never be applied to the same snapshot. Engine
    rejections (ScoringError) propagate untouched; nothing is written for them.
    A failed save is rolled back, logged and re-raised: the dart only counts
    once both the throw row and the game row are committed.
    """
    with game_locks.hold(game_id):
        state = load_game_state(game_id)
        if state is None:
            raise GameNotFound(game_id)

        throw = process_throw(state, user_id, points, multiplier)
        if state.status == PENDING:
            state.status = ACTIVE

        try:
            row = append_throw(throw)
            save_game_state(state)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(f"[throw-save-failed] game={game_id} user={user_id}")
            raise

    current_app.logger.info(
        f"[throw] game={game_id} user={user_id} dart={points}x{multiplier} "
        f"valid={throw.valid} score_after={throw.score_after} set={throw.set_number}"
    )
    if state.status == FINISHED:
        current_app.logger.info(f"[finish] game={game_id} winner={state.winner_id}")

    return state, replace(throw, id=row.id, timestamp=row.created_at)
