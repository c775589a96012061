"""Per-set and per-player statistics rebuilt from a game's throw history.

Older throw rows carry no set number, so set boundaries are inferred from the
``score_after`` sequence: a checkout (score 0) closes a set, and a player
reappearing on the starting score after having been part-way down means a new
set began without that player's checkout being seen. Histories written since
``throw.set_number`` exists are grouped by that column instead.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional

from .state import GameSettings, PlayerState, ThrowRecord


@dataclass
class OverallStats:
    total_throws: int = 0
    total_points: int = 0
    average_3_dart: float = 0.0


@dataclass
class SetStats:
    set_number: int
    total_throws: int = 0
    total_points: int = 0
    average_3_dart: float = 0.0
    won_set: bool = False


@dataclass
class PlayerGameStats:
    user_id: int
    user_name: str
    overall_stats: OverallStats = field(default_factory=OverallStats)
    set_stats: List[SetStats] = field(default_factory=list)


@dataclass
class GameStatistics:
    game_id: Optional[int]
    total_sets_played: int
    players: List[PlayerGameStats]

    def to_dict(self) -> dict:
        return asdict(self)


def three_dart_average(total_points: int, total_throws: int) -> float:
    if total_throws <= 0:
        return 0.0
    return (total_points / total_throws) * 3


def infer_set_boundaries(throws: Iterable[ThrowRecord], total_points: int,
                         players: Iterable[PlayerState]) -> List[List[ThrowRecord]]:
    sets: List[List[ThrowRecord]] = []
    current: List[ThrowRecord] = []
    baselines = {p.user_id: total_points for p in players}

    def reset_baselines():
        for uid in baselines:
            baselines[uid] = total_points

    for throw in throws:
        current.append(throw)

        if throw.score_after == 0:
            sets.append(current)
            current = []
            reset_baselines()
            continue

        previous = baselines.get(throw.user_id)
        if previous is not None and 0 < previous < total_points and throw.score_after == total_points:
            if len(current) > 1:
                sets.append(current[:-1])
                current = [throw]
                reset_baselines()

        baselines[throw.user_id] = throw.score_after

    if current:
        sets.append(current)
    return sets


def group_by_set_number(throws: Iterable[ThrowRecord]) -> List[List[ThrowRecord]]:
    sets: List[List[ThrowRecord]] = []
    last_number = None
    for throw in throws:
        if throw.set_number != last_number:
            sets.append([])
            last_number = throw.set_number
        sets[-1].append(throw)
    return sets


def split_into_sets(throws: List[ThrowRecord], total_points: int,
                    players: Iterable[PlayerState]) -> List[List[ThrowRecord]]:
    if throws and all(t.set_number is not None for t in throws):
        return group_by_set_number(throws)
    return infer_set_boundaries(throws, total_points, players)


def find_set_winner(set_throws: Iterable[ThrowRecord]) -> Optional[int]:
    for throw in set_throws:
        if throw.score_after == 0:
            return throw.user_id
    return None


def _tally_set(set_throws: Iterable[ThrowRecord]) -> Dict[int, List[int]]:
    # user_id -> [throws, points]; busts count as a dart but score nothing
    tally: Dict[int, List[int]] = {}
    for throw in set_throws:
        entry = tally.setdefault(throw.user_id, [0, 0])
        entry[0] += 1
        if throw.valid:
            entry[1] += throw.real_points
    return tally


def reconstruct_statistics(throws: Iterable[ThrowRecord], settings: GameSettings,
                           players: Iterable[PlayerState], game_id: Optional[int] = None,
                           user_names: Optional[Dict[int, str]] = None) -> GameStatistics:
    """Build overall and per-set statistics for every player of a game.

    ``throws`` must be in chronological order. Players are reported in turn
    order; each gets an entry for every detected set, zeroed if they did not
    throw in it.
    """
    throws = list(throws)
    players = sorted(players, key=lambda p: p.order)
    user_names = user_names or {}

    sets = split_into_sets(throws, settings.total_points, players)

    stats = [
        PlayerGameStats(user_id=p.user_id, user_name=user_names.get(p.user_id, 'Unknown'))
        for p in players
    ]

    for set_index, set_throws in enumerate(sets, start=1):
        tally = _tally_set(set_throws)
        winner = find_set_winner(set_throws)
        for player_stats in stats:
            thrown, scored = tally.get(player_stats.user_id, (0, 0))
            player_stats.set_stats.append(SetStats(
                set_number=set_index,
                total_throws=thrown,
                total_points=scored,
                average_3_dart=three_dart_average(scored, thrown),
                won_set=player_stats.user_id == winner,
            ))
            player_stats.overall_stats.total_throws += thrown
            player_stats.overall_stats.total_points += scored

    for player_stats in stats:
        overall = player_stats.overall_stats
        overall.average_3_dart = three_dart_average(overall.total_points, overall.total_throws)

    return GameStatistics(game_id=game_id, total_sets_played=len(sets), players=stats)
