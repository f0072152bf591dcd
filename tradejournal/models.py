from . import db
from datetime import datetime

from .enums import ReviewStatus, Role, format_rr, score_label


class Profile(db.Model):
    __tablename__ = 'profiles'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80))
    role = db.Column(db.String(20), nullable=False, default=Role.MEMBER.value)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    trades = db.relationship('Trade', backref='owner', lazy=True, foreign_keys='Trade.user_id')

    @property
    def is_mentor(self):
        return self.role == Role.MENTOR.value

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'role': self.role,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class Trade(db.Model):
    __tablename__ = 'trades'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('profiles.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    trade_date = db.Column(db.Date, nullable=False, index=True)
    session = db.Column(db.String(20), nullable=False)
    pair = db.Column(db.String(10), nullable=False)
    bias = db.Column(db.String(20), nullable=False)
    bias_daily = db.Column(db.String(10), nullable=False)
    framework = db.Column(db.String(20), nullable=False)
    profiling = db.Column(db.String(30), nullable=False)
    entry_model = db.Column(db.String(30), nullable=False)
    result = db.Column(db.String(10), nullable=False)
    rr = db.Column(db.Float, nullable=False, default=0.0)
    mood = db.Column(db.String(20), nullable=False)
    image_url = db.Column(db.String)
    description = db.Column(db.Text)
    tags = db.Column(db.JSON)

    # moderation
    status = db.Column(db.String(20), nullable=False, default=ReviewStatus.SUBMITTED.value)
    is_reviewed = db.Column(db.Boolean, nullable=False, default=False)
    mentor_score = db.Column(db.Integer)
    mentor_notes = db.Column(db.Text)
    reviewed_by = db.Column(db.Integer, db.ForeignKey('profiles.id'))
    reviewed_at = db.Column(db.DateTime)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'trade_date': self.trade_date.isoformat() if self.trade_date else None,
            'session': self.session,
            'pair': self.pair,
            'bias': self.bias,
            'bias_daily': self.bias_daily,
            'framework': self.framework,
            'profiling': self.profiling,
            'entry_model': self.entry_model,
            'result': self.result,
            'rr': self.rr,
            'rr_display': format_rr(self.rr) if self.rr is not None else None,
            'mood': self.mood,
            'image_url': self.image_url,
            'description': self.description,
            'tags': self.tags or [],
            'status': self.status,
            'is_reviewed': bool(self.is_reviewed),
            'mentor_score': self.mentor_score,
            'score_label': score_label(self.mentor_score) if self.mentor_score is not None else None,
            'mentor_notes': self.mentor_notes,
            'reviewed_by': self.reviewed_by,
            'reviewed_at': self.reviewed_at.isoformat() if self.reviewed_at else None,
        }
