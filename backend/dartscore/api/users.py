from flask import Blueprint, jsonify, request, current_app
from dartscore import db
from dartscore.models import User, GamePlayer
from dartscore.services.games.career import career_stats


users = Blueprint('users', __name__)


@users.route('', methods=['GET'])
def list_users():
    return jsonify([u.to_dict() for u in User.query.order_by(User.name).all()])


@users.route('', methods=['POST'])
def create_user():
    data = request.get_json(silent=True) or {}
    name = data.get('name')
    if not isinstance(name, str):
        return jsonify({'error': 'Name is required'}), 400
    name = name.strip()
    max_len = int(current_app.config.get('MAX_NAME_LENGTH', 100))
    if not name or len(name) > max_len:
        return jsonify({'error': f'Name must be between 1 and {max_len} characters'}), 400

    if User.query.filter_by(name=name).first():
        return jsonify({'error': 'Username already exists'}), 409

    user = User(name=name)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"[user-create] user={user.id} name={user.name}")
    return jsonify(user.to_dict()), 201


@users.route('/<int:user_id>', methods=['DELETE'])
def delete_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return jsonify({'error': 'User not found'}), 404

    # Keep throw history and statistics intact
    if GamePlayer.query.filter_by(user_id=user_id).first():
        return jsonify({'error': 'User has played games and cannot be deleted'}), 409

    db.session.delete(user)
    db.session.commit()
    current_app.logger.info(f"[user-delete] user={user_id}")
    return '', 204


@users.route('/<int:user_id>/stats', methods=['GET'])
def get_user_stats(user_id):
    user = db.session.get(User, user_id)
    if not user:
        return jsonify({'error': 'User not found'}), 404
    payload = career_stats(user_id)
    payload['name'] = user.name
    return jsonify(payload)
