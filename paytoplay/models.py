from paytoplay import db, bcrypt
from flask_login import UserMixin
from datetime import datetime, timezone


STATUS_ACTIVE = 'active'
STATUS_PAYOUT_PENDING = 'payout_pending'
STATUS_INACTIVE = 'inactive'


def _utcnow():
    return datetime.now(timezone.utc)


class Account(UserMixin, db.Model):
    __tablename__ = 'account'
    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    # Amounts are stored as decimal strings; 24-decimal coins overflow BIGINT
    winnings_raw = db.Column('winnings', db.String(80), nullable=False, default='0')

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    @property
    def winnings(self) -> int:
        return int(self.winnings_raw or 0)

    @winnings.setter
    def winnings(self, value: int):
        self.winnings_raw = str(int(value))

    def to_dict(self):
        return {
            'id': self.id,
            'account_id': self.account_id,
            'winnings': str(self.winnings),
        }


class Enrollment(db.Model):
    __tablename__ = 'enrollment'
    __table_args__ = (db.UniqueConstraint('game_id', 'account_id', name='uq_enrollment_game_account'),)
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game_state.id'), nullable=False)
    account_id = db.Column(db.String(64), nullable=False)
    game = db.relationship('GameState', back_populates='enrollments')


class GameState(db.Model):
    __tablename__ = 'game_state'
    id = db.Column(db.Integer, primary_key=True)
    owner = db.Column(db.String(64), nullable=False)
    winner = db.Column(db.String(64), nullable=False, default='')
    last_played = db.Column(db.String(64), nullable=False, default='')
    status = db.Column(db.String(32), nullable=False, default=STATUS_ACTIVE)  # active, payout_pending, inactive
    pot_raw = db.Column('pot', db.String(80), nullable=False)
    fee_strategy = db.Column(db.String(32), nullable=False, default='quadratic')
    lottery_chance = db.Column(db.Float, nullable=False, default=0.2)
    # Bumped by every reset so late payout confirmations can be matched to their epoch
    epoch = db.Column(db.Integer, nullable=False, default=1)
    enrollments = db.relationship('Enrollment', back_populates='game', lazy='dynamic')
    payouts = db.relationship('Payout', back_populates='game', lazy='dynamic')

    @property
    def pot(self) -> int:
        return int(self.pot_raw)

    @pot.setter
    def pot(self, value: int):
        self.pot_raw = str(int(value))

    @property
    def active(self) -> bool:
        # Stays true while a payout is pending; only confirmation closes the epoch
        return self.status != STATUS_INACTIVE

    def player_count(self) -> int:
        return self.enrollments.count()

    def has_played(self, account_id) -> bool:
        return self.enrollments.filter_by(account_id=account_id).first() is not None

    def to_dict(self):
        return {
            'id': self.id,
            'owner': self.owner,
            'winner': self.winner,
            'last_played': self.last_played,
            'active': self.active,
            'status': self.status,
            'pot': str(self.pot),
            'player_count': self.player_count(),
            'fee_strategy': self.fee_strategy,
            'lottery_chance': self.lottery_chance,
            'epoch': self.epoch,
        }


class Payout(db.Model):
    __tablename__ = 'payout'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game_state.id'), nullable=False)
    recipient = db.Column(db.String(64), nullable=False)
    epoch = db.Column(db.Integer, nullable=False)
    amount_raw = db.Column('amount', db.String(80), nullable=False)
    status = db.Column(db.String(16), nullable=False, default='pending')  # pending, settled
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    settled_at = db.Column(db.DateTime(timezone=True), nullable=True)
    game = db.relationship('GameState', back_populates='payouts')

    @property
    def amount(self) -> int:
        return int(self.amount_raw)

    @amount.setter
    def amount(self, value: int):
        self.amount_raw = str(int(value))

    def to_dict(self):
        return {
            'id': self.id,
            'game_id': self.game_id,
            'recipient': self.recipient,
            'epoch': self.epoch,
            'amount': str(self.amount),
            'status': self.status,
        }
