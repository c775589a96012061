from datetime import datetime, timezone

from dartscore import db
from dartscore.services.games.state import PENDING


def _utcnow():
    return datetime.now(timezone.utc)


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class GamePlayer(db.Model):
    __tablename__ = 'game_player'
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), primary_key=True, index=True)
    player_order = db.Column(db.Integer, nullable=False)
    sets_won = db.Column(db.Integer, default=0, nullable=False)
    current_points = db.Column(db.Integer, nullable=False)
    game = db.relationship('Game', back_populates='players')
    user = db.relationship('User')

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'name': self.user.name if self.user else None,
            'order': self.player_order,
            'sets_won': self.sets_won,
            'current_points': self.current_points,
        }


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.Integer, primary_key=True)
    status = db.Column(db.String(16), default=PENDING, nullable=False, index=True)  # PENDING, ACTIVE, FINISHED
    total_points = db.Column(db.Integer, nullable=False)
    best_of_sets = db.Column(db.Integer, nullable=False)
    double_out = db.Column(db.Boolean, default=False, nullable=False)
    winner_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True, index=True)
    # Turn cursor
    current_player_index = db.Column(db.Integer, default=0, nullable=False)
    current_throw_number = db.Column(db.Integer, default=0, nullable=False)
    current_turn_points = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    players = db.relationship(
        'GamePlayer', back_populates='game', order_by='GamePlayer.player_order',
        cascade='all, delete-orphan',
    )

    def to_dict(self, include_players=True):
        data = {
            'id': self.id,
            'status': self.status,
            'settings': {
                'total_points': self.total_points,
                'best_of_sets': self.best_of_sets,
                'double_out': self.double_out,
            },
            'winner_id': self.winner_id,
            'current_turn': {
                'player_index': self.current_player_index,
                'throw_number': self.current_throw_number,
                'current_turn_points': self.current_turn_points,
            },
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
        if include_players:
            data['players'] = [p.to_dict() for p in self.players]
        return data


class Throw(db.Model):
    __tablename__ = 'throw'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    points = db.Column(db.Integer, nullable=False)
    multiplier = db.Column(db.Integer, nullable=False)
    valid = db.Column(db.Boolean, default=True, nullable=False)  # False = bust
    score_after = db.Column(db.Integer, nullable=False)
    set_number = db.Column(db.Integer, nullable=True)  # NULL on rows written before it existed
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'game_id': self.game_id,
            'user_id': self.user_id,
            'points': self.points,
            'multiplier': self.multiplier,
            'valid': self.valid,
            'score_after': self.score_after,
            'set_number': self.set_number,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
