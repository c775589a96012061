from flask import Blueprint, jsonify, request, current_app
from sqlalchemy.exc import SQLAlchemyError
from dartscore import db, socketio
from dartscore.models import Game, User
from dartscore.services.games.repository import GameNotFound, create_game as svc_create_game, list_throws, throw_rows, to_game_state
from dartscore.services.games.scoring import GameFinished, InvalidThrow, NotPlayersTurn
from dartscore.services.games.state import ALLOWED_BEST_OF_SETS, ALLOWED_TOTAL_POINTS, GameSettings
from dartscore.services.games.statistics import reconstruct_statistics
from dartscore.services.games.throws import submit_throw


games = Blueprint('games', __name__)


def _int_field(data, key):
    """Return data[key] if it is a real int (bools rejected), else None."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value

def _game_payload(game, state):
    """Game dict as of ``state``; later throws may already be committed."""
    data = game.to_dict()
    data['status'] = state.status
    data['winner_id'] = state.winner_id
    data['current_turn'] = {
        'player_index': state.current_turn.player_index,
        'throw_number': state.current_turn.throw_number,
        'current_turn_points': state.current_turn.current_turn_points,
    }
    by_user = {p.user_id: p for p in state.players}
    for player in data['players']:
        player['sets_won'] = by_user[player['user_id']].sets_won
        player['current_points'] = by_user[player['user_id']].current_points
    return data

def _emit_state_update(game_id: int) -> None:
    socketio.emit('state_update', {'game_id': game_id}, to=f"game:{game_id}", namespace='/ws')


@games.route('', methods=['POST'])
def create_game():
    data = request.get_json(silent=True) or {}
    total_points = _int_field(data, 'total_points')
    best_of = _int_field(data, 'best_of')
    double_out = data.get('double_out', False)
    player_ids = data.get('player_ids')

    if total_points not in ALLOWED_TOTAL_POINTS:
        return jsonify({'error': 'Total points must be 301 or 501'}), 400
    if best_of not in ALLOWED_BEST_OF_SETS:
        return jsonify({'error': 'Best of must be 1, 3, or 5'}), 400
    if not isinstance(double_out, bool):
        return jsonify({'error': 'double_out must be a boolean'}), 400

    min_players = int(current_app.config.get('MIN_PLAYERS', 1))
    max_players = int(current_app.config.get('MAX_PLAYERS', 4))
    if not isinstance(player_ids, list) or not (min_players <= len(player_ids) <= max_players):
        return jsonify({'error': f'Number of players must be between {min_players} and {max_players}'}), 400
    if any(isinstance(pid, bool) or not isinstance(pid, int) for pid in player_ids):
        return jsonify({'error': 'player_ids must be integers'}), 400
    if len(set(player_ids)) != len(player_ids):
        return jsonify({'error': 'A player can only join a game once'}), 400

    known = {u.id for u in User.query.filter(User.id.in_(player_ids)).all()}
    missing = [pid for pid in player_ids if pid not in known]
    if missing:
        return jsonify({'error': f'Unknown player(s): {missing}'}), 400

    settings = GameSettings(total_points=total_points, best_of_sets=best_of, double_out=double_out)
    game = svc_create_game(settings, player_ids)
    current_app.logger.info(
        f"[game-create] game={game.id} total_points={total_points} best_of={best_of} "
        f"double_out={double_out} players={player_ids}"
    )
    return jsonify(game.to_dict()), 201


@games.route('/<int:game_id>', methods=['GET'])
def get_game(game_id):
    game = db.session.get(Game, game_id)
    if not game:
        return jsonify({'error': 'Game not found'}), 404
    return jsonify(game.to_dict())


@games.route('/<int:game_id>/throw', methods=['POST'])
def throw_dart(game_id):
    data = request.get_json(silent=True) or {}
    user_id = _int_field(data, 'user_id')
    points = _int_field(data, 'points')
    multiplier = _int_field(data, 'multiplier')
    if user_id is None or points is None or multiplier is None:
        return jsonify({'error': 'user_id, points and multiplier must be integers'}), 400

    try:
        state, throw = submit_throw(game_id, user_id, points, multiplier)
    except GameNotFound:
        return jsonify({'error': 'Game not found'}), 404
    except NotPlayersTurn as exc:
        return jsonify({'error': f'Invalid throw: {exc}'}), 403
    except (GameFinished, InvalidThrow) as exc:
        return jsonify({'error': f'Invalid throw: {exc}'}), 400
    except SQLAlchemyError:
        # Already rolled back and logged by submit_throw
        return jsonify({'error': 'Failed to save throw'}), 500

    _emit_state_update(game_id)

    payload = _game_payload(db.session.get(Game, game_id), state)
    payload['last_throw'] = {
        'id': throw.id,
        'user_id': throw.user_id,
        'points': throw.points,
        'multiplier': throw.multiplier,
        'valid': throw.valid,
        'score_after': throw.score_after,
        'set_number': throw.set_number,
    }
    return jsonify(payload)


@games.route('/<int:game_id>/throws', methods=['GET'])
def get_throws(game_id):
    game = db.session.get(Game, game_id)
    if not game:
        return jsonify({'error': 'Game not found'}), 404
    return jsonify([t.to_dict() for t in throw_rows(game_id)])


@games.route('/<int:game_id>/stats', methods=['GET'])
def get_game_stats(game_id):
    game = db.session.get(Game, game_id)
    if not game:
        return jsonify({'error': 'Game not found'}), 404

    state = to_game_state(game)
    names = {p.user_id: p.user.name for p in game.players if p.user}
    stats = reconstruct_statistics(
        list_throws(game_id), state.settings, state.players,
        game_id=game_id, user_names=names,
    )
    return jsonify(stats.to_dict())
