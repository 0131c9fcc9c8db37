from arcade import db, bcrypt
from flask_login import UserMixin
from datetime import datetime, timezone
import uuid


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    return str(uuid.uuid4())


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    # Registration order; money ranking ties keep it
    seq = db.Column(db.Integer, primary_key=True, autoincrement=True)
    id = db.Column(db.String(64), unique=True, nullable=False, index=True, default=new_id)
    name = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=True)
    avatar = db.Column(db.String(512), nullable=True)
    birthday = db.Column(db.String(32), nullable=True)
    money = db.Column(db.Integer, nullable=True)  # null until the first reward
    card_effect = db.Column(db.String(64), nullable=True)
    card_decoration = db.Column(db.String(64), nullable=True)
    is_master = db.Column(db.Boolean, default=False, nullable=False)
    achievements = db.Column(db.JSON, nullable=False, default=list)
    unlocked_effects = db.Column(db.JSON, nullable=False, default=list)
    unlocked_titles = db.Column(db.JSON, nullable=False, default=list)
    stats = db.Column(db.JSON, nullable=False, default=dict)
    transactions = db.relationship('Transaction', backref='user', lazy='dynamic',
                                   order_by='Transaction.id', cascade='all, delete-orphan')

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        if not self.password_hash:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'avatar': self.avatar,
            'birthday': self.birthday,
            'money': self.money,
            'cardEffect': self.card_effect,
            'cardDecoration': self.card_decoration,
            'isMaster': bool(self.is_master),
            'achievements': list(self.achievements or []),
            'unlockedEffects': list(self.unlocked_effects or []),
            'unlockedTitles': list(self.unlocked_titles or []),
            'stats': dict(self.stats or {}),
        }

    def update_from_dict(self, data):
        """Copy the mutable profile fields of a serialized user back onto the row."""
        self.name = data.get('name', self.name)
        self.avatar = data.get('avatar')
        self.birthday = data.get('birthday')
        self.money = data.get('money')
        self.card_effect = data.get('cardEffect')
        self.card_decoration = data.get('cardDecoration')
        self.is_master = bool(data.get('isMaster', self.is_master))
        self.achievements = list(data.get('achievements') or [])
        self.unlocked_effects = list(data.get('unlockedEffects') or [])
        self.unlocked_titles = list(data.get('unlockedTitles') or [])
        self.stats = dict(data.get('stats') or {})


class Transaction(db.Model):
    __tablename__ = 'user_transaction'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), db.ForeignKey('user.id'), nullable=False, index=True)
    description = db.Column(db.String(256), nullable=False)
    amount = db.Column(db.Integer, nullable=False)
    type = db.Column(db.String(16), nullable=False, default='earn')
    timestamp = db.Column(db.String(40), nullable=False, default=utc_now_iso)

    def to_dict(self):
        return {
            'description': self.description,
            'amount': self.amount,
            'type': self.type,
            'timestamp': self.timestamp,
        }


class Score(db.Model):
    __tablename__ = 'score'
    # Insertion order is the order a game's list is read back in
    seq = db.Column(db.Integer, primary_key=True, autoincrement=True)
    id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    game_id = db.Column(db.String(64), nullable=False, index=True)
    # JSON keeps integers of any size exact
    score = db.Column(db.JSON, nullable=False)
    # Not a foreign key: may be 'anonymous' or point at a deleted account
    user_id = db.Column(db.String(64), nullable=False, index=True)
    options = db.Column(db.JSON, nullable=False, default=dict)
    timestamp = db.Column(db.String(40), nullable=False, default=utc_now_iso)

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            game_id=data['gameId'],
            score=data['score'],
            user_id=data['userId'],
            options=dict(data.get('options') or {}),
            timestamp=data.get('timestamp') or utc_now_iso(),
        )

    def to_dict(self):
        return {
            'id': self.id,
            'gameId': self.game_id,
            'score': self.score,
            'userId': self.user_id,
            'options': dict(self.options or {}),
            'timestamp': self.timestamp,
        }
