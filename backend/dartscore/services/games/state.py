"""In-memory match state shared by the scoring engine and the statistics
reconstructor.

These are plain data holders. The ORM rows in ``dartscore.models`` are
converted to and from them by ``repository``, so the engine never touches the
database session.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


PENDING = 'PENDING'
ACTIVE = 'ACTIVE'
FINISHED = 'FINISHED'

ALLOWED_TOTAL_POINTS = (301, 501)
ALLOWED_BEST_OF_SETS = (1, 3, 5)
DARTS_PER_TURN = 3


@dataclass(frozen=True)
class GameSettings:
    total_points: int
    best_of_sets: int
    double_out: bool = False

    @property
    def sets_needed(self) -> int:
        # ceil(best_of / 2)
        return (self.best_of_sets + 1) // 2


@dataclass
class PlayerState:
    user_id: int
    order: int
    sets_won: int = 0
    current_points: int = 0


@dataclass
class TurnStatus:
    player_index: int = 0
    throw_number: int = 0
    current_turn_points: int = 0


@dataclass
class GameState:
    id: Optional[int]
    settings: GameSettings
    players: List[PlayerState]
    current_turn: TurnStatus = field(default_factory=TurnStatus)
    status: str = PENDING
    winner_id: Optional[int] = None

    @classmethod
    def new(cls, game_id: Optional[int], settings: GameSettings, user_ids: List[int]) -> 'GameState':
        """Fresh match: everyone on ``total_points``, first player to throw."""
        players = [
            PlayerState(user_id=uid, order=idx, current_points=settings.total_points)
            for idx, uid in enumerate(user_ids)
        ]
        return cls(id=game_id, settings=settings, players=players)

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_turn.player_index]

    @property
    def set_number(self) -> int:
        """1-based number of the set currently being played."""
        return sum(p.sets_won for p in self.players) + 1


@dataclass(frozen=True)
class ThrowRecord:
    game_id: Optional[int]
    user_id: int
    points: int
    multiplier: int
    valid: bool
    score_after: int
    set_number: Optional[int] = None
    timestamp: Optional[datetime] = None
    id: Optional[int] = None

    @property
    def real_points(self) -> int:
        return self.points * self.multiplier
