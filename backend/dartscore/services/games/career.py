from sqlalchemy import case, func

from dartscore import db
from dartscore.models import Game, GamePlayer, Throw
from .state import FINISHED
from .statistics import three_dart_average


def career_stats(user_id: int) -> dict:
    """Lifetime summary for a user over finished games only.

    Busted darts count as thrown but score nothing, the same as in per-game
    statistics.
    """
    total_games = (
        db.session.query(func.count(GamePlayer.game_id))
        .join(Game, GamePlayer.game_id == Game.id)
        .filter(GamePlayer.user_id == user_id, Game.status == FINISHED)
        .scalar()
    )
    wins = Game.query.filter_by(winner_id=user_id, status=FINISHED).count()

    total_throws, total_points = (
        db.session.query(
            func.count(Throw.id),
            func.coalesce(
                func.sum(case((Throw.valid.is_(True), Throw.points * Throw.multiplier), else_=0)),
                0,
            ),
        )
        .join(Game, Throw.game_id == Game.id)
        .filter(Throw.user_id == user_id, Game.status == FINISHED)
        .one()
    )

    return {
        'user_id': user_id,
        'total_games': total_games or 0,
        'wins': wins,
        'total_throws': total_throws or 0,
        'total_points': int(total_points or 0),
        'average_3_dart': three_dart_average(int(total_points or 0), total_throws or 0),
    }
