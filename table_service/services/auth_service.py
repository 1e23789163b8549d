"""
Authenticator — Table Service
Phone-number OTP login issuing opaque bearer session tokens.

Flow:
    request_challenge(phone)      -> stores a hashed 6-digit code, sends it
    verify_challenge(phone, code) -> consumes the code, returns a new token
    resolve(token)                -> phone number of the session's user
"""

import logging
import secrets
from datetime import timedelta

from flask import current_app

from table_service.errors import (
    ChallengeExpired,
    ChallengeMismatch,
    ChallengeNotFound,
    InvalidInput,
    Unauthenticated,
)
from table_service.extensions import db, utcnow
from table_service.models import OtpChallenge, User, UserSession
from table_service.services import notifier

logger = logging.getLogger(__name__)


def generate_code():
    return str(secrets.randbelow(900000) + 100000)


def _is_code(code):
    return isinstance(code, str) and len(code) == 6 and code.isdigit() and code.isascii()


def _expiry(now, ttl_seconds):
    if not ttl_seconds:
        return None
    return now + timedelta(seconds=ttl_seconds)


def request_challenge(phone_number):
    """
    Issue a fresh code for ``phone_number``, replacing any pending one.
    Delivery is best-effort; the challenge is stored either way.
    """
    if not isinstance(phone_number, str) or not phone_number.strip():
        raise InvalidInput("Missing phoneNumber")

    code = generate_code()
    now = utcnow()

    challenge = db.session.get(OtpChallenge, phone_number)
    if challenge is None:
        challenge = OtpChallenge(phone_number=phone_number)
        db.session.add(challenge)
    challenge.set_code(code, rounds=current_app.config['OTP_HASH_ROUNDS'])
    challenge.created_at = now
    challenge.expires_at = _expiry(now, current_app.config['OTP_TTL_SECONDS'])
    db.session.commit()

    logger.info("OTP issued for %s", phone_number)
    notifier.send_otp(phone_number, code)
    return True


def verify_challenge(phone_number, code):
    """
    Consume the pending code and mint a session.
    Returns (session_token, phone_number). A wrong code leaves the challenge
    in place so the user can retry.
    """
    if not isinstance(phone_number, str) or not phone_number.strip():
        raise InvalidInput("Missing phoneNumber")

    challenge = db.session.get(OtpChallenge, phone_number)
    if challenge is None:
        raise ChallengeNotFound("No OTP requested for this phone")

    now = utcnow()
    if challenge.is_expired(now):
        db.session.delete(challenge)
        db.session.commit()
        raise ChallengeExpired("OTP has expired, request a new one")

    # Codes are always 6 digits; anything else never reaches bcrypt.
    code = str(code) if isinstance(code, int) and not isinstance(code, bool) else code
    if not _is_code(code) or not challenge.check_code(code):
        raise ChallengeMismatch("Invalid OTP")

    user = db.session.get(User, phone_number)
    if user is None:
        user = User(phone_number=phone_number)
        db.session.add(user)
    user.updated_at = now

    # One live session per user: a new login revokes the previous token.
    UserSession.query.filter_by(user_id=phone_number).delete()
    session = UserSession(
        token=secrets.token_hex(16),
        user_id=phone_number,
        created_at=now,
        expires_at=_expiry(now, current_app.config['SESSION_TTL_SECONDS']),
    )
    token = session.token
    db.session.add(session)
    db.session.delete(challenge)
    db.session.commit()

    logger.info("Login succeeded for %s", phone_number)
    return token, phone_number


def resolve(token):
    if not token:
        raise Unauthenticated("No x-auth-token provided")

    session = db.session.get(UserSession, token)
    if session is None:
        raise Unauthenticated("Invalid sessionToken")

    if session.is_expired(utcnow()):
        db.session.delete(session)
        db.session.commit()
        raise Unauthenticated("Session expired, log in again")

    return session.user_id


def revoke(token):
    session = db.session.get(UserSession, token)
    if session is None:
        raise Unauthenticated("Invalid sessionToken")
    user_id = session.user_id
    db.session.delete(session)
    db.session.commit()
    logger.info("Session revoked for %s", user_id)
