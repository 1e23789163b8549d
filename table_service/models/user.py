from table_service.extensions import db, utcnow


class User(db.Model):
    __tablename__ = 'users'

    # The phone number is the user's identity everywhere (hostId, userId).
    phone_number = db.Column(db.Text, primary_key=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    sessions = db.relationship('UserSession', back_populates='user', cascade='all, delete-orphan')


class UserSession(db.Model):
    __tablename__ = 'sessions'

    token = db.Column(db.String(64), primary_key=True)
    user_id = db.Column(db.Text, db.ForeignKey('users.phone_number'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    expires_at = db.Column(db.DateTime, nullable=True)

    user = db.relationship('User', back_populates='sessions')

    def is_expired(self, now=None):
        if self.expires_at is None:
            return False
        return (now or utcnow()) >= self.expires_at
