"""
OTP Challenge Model — Table Service
One pending code per phone number; the code itself is stored as a bcrypt hash.
"""

import bcrypt
from table_service.extensions import db, utcnow


class OtpChallenge(db.Model):
    __tablename__ = 'otp_challenges'

    phone_number = db.Column(db.Text, primary_key=True)
    code_hash = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    expires_at = db.Column(db.DateTime, nullable=True)

    def set_code(self, code, rounds=12):
        self.code_hash = bcrypt.hashpw(code.encode('utf-8'), bcrypt.gensalt(rounds)).decode('utf-8')

    def check_code(self, code):
        return bcrypt.checkpw(code.encode('utf-8'), self.code_hash.encode('utf-8'))

    def is_expired(self, now=None):
        if self.expires_at is None:
            return False
        return (now or utcnow()) >= self.expires_at
