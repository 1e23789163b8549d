import unittest
from datetime import timedelta
from unittest.mock import Mock, patch

import requests

from table_service.extensions import db, utcnow
from table_service.models import OtpChallenge, User, UserSession
from table_service.services import auth_service
from tests.base import ServiceTestCase, HOST_PHONE


class TestRequestOtp(ServiceTestCase):
    def test_code_is_six_digits(self):
        code = self.request_code(HOST_PHONE)
        self.assertEqual(len(code), 6)
        self.assertTrue(code.isdigit())

    def test_missing_phone_number(self):
        resp = self.client.post('/auth/request-otp', json={})
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.get_json()['success'])

        resp = self.client.post('/auth/request-otp', json={'phoneNumber': 5551230000})
        self.assertEqual(resp.status_code, 400)

    def test_second_request_overwrites_first(self):
        with patch('table_service.services.auth_service.generate_code', side_effect=['111111', '222222']):
            self.request_code(HOST_PHONE)
            self.request_code(HOST_PHONE)

        with self.app.app_context():
            self.assertEqual(OtpChallenge.query.filter_by(phone_number=HOST_PHONE).count(), 1)

        resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE, 'otp': '111111'})
        self.assertEqual(resp.status_code, 401)
        resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE, 'otp': '222222'})
        self.assertEqual(resp.status_code, 200)

    def test_code_is_not_stored_in_plain_text(self):
        code = self.request_code(HOST_PHONE)
        with self.app.app_context():
            challenge = db.session.get(OtpChallenge, HOST_PHONE)
            self.assertNotEqual(challenge.code_hash, code)
            self.assertTrue(challenge.check_code(code))

    def test_sms_failure_does_not_fail_request(self):
        self.app.config['SMS_GATEWAY_URL'] = 'http://sms.test/send'
        with patch('table_service.services.notifier.requests.post',
                   side_effect=requests.ConnectionError('gateway down')) as post:
            resp = self.client.post('/auth/request-otp', json={'phoneNumber': HOST_PHONE})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.get_json()['success'])
        self.assertEqual(post.call_count, 1)

        with self.app.app_context():
            self.assertIsNotNone(db.session.get(OtpChallenge, HOST_PHONE))

    def test_sms_gateway_receives_code(self):
        self.app.config['SMS_GATEWAY_URL'] = 'http://sms.test/send'
        with patch('table_service.services.auth_service.generate_code', return_value='123456'), \
                patch('table_service.services.notifier.requests.post',
                      return_value=Mock(status_code=200)) as post:
            resp = self.client.post('/auth/request-otp', json={'phoneNumber': HOST_PHONE})
        self.assertEqual(resp.status_code, 200)
        args, kwargs = post.call_args
        self.assertEqual(args[0], 'http://sms.test/send')
        self.assertEqual(kwargs['json']['to'], HOST_PHONE)
        self.assertIn('123456', kwargs['json']['message'])


class TestVerifyOtp(ServiceTestCase):
    def test_verify_returns_token_and_phone(self):
        code = self.request_code(HOST_PHONE)
        resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE, 'otp': code})
        self.assertEqual(resp.status_code, 200)
        data = resp.get_json()
        self.assertTrue(data['success'])
        self.assertEqual(data['phoneNumber'], HOST_PHONE)
        self.assertEqual(len(data['sessionToken']), 32)

        with self.app.app_context():
            self.assertIsNotNone(db.session.get(User, HOST_PHONE))

    def test_missing_fields(self):
        resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE})
        self.assertEqual(resp.status_code, 400)
        self.assertIn('otp', resp.get_json()['error'])

    def test_without_request(self):
        resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE, 'otp': '123456'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()['error_code'], 'OTP_NOT_FOUND')

    def test_mismatch_leaves_stores_untouched(self):
        self.request_code(HOST_PHONE)
        resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE, 'otp': '000000'})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.get_json()['error_code'], 'OTP_MISMATCH')

        with self.app.app_context():
            self.assertEqual(User.query.count(), 0)
            self.assertEqual(UserSession.query.count(), 0)
            self.assertIsNotNone(db.session.get(OtpChallenge, HOST_PHONE))

    def test_challenge_is_single_use(self):
        code = self.request_code(HOST_PHONE)
        resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE, 'otp': code})
        self.assertEqual(resp.status_code, 200)

        resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE, 'otp': code})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()['error_code'], 'OTP_NOT_FOUND')

    def test_numeric_otp_is_accepted(self):
        code = self.request_code(HOST_PHONE)
        resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE, 'otp': int(code)})
        self.assertEqual(resp.status_code, 200)

    def test_long_code_is_a_mismatch(self):
        self.request_code(HOST_PHONE)
        for otp in ('1' * 100, '12345', '1234567', 'abcdef', ['123456']):
            resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE, 'otp': otp})
            self.assertEqual(resp.status_code, 401)
            self.assertEqual(resp.get_json()['error_code'], 'OTP_MISMATCH')

        with self.app.app_context():
            self.assertIsNotNone(db.session.get(OtpChallenge, HOST_PHONE))

    def test_phone_number_must_be_a_string(self):
        for phone in (['a', 'b'], {'a': 1}, 15551230000):
            resp = self.client.post('/auth/verify-otp', json={'phoneNumber': phone, 'otp': '123456'})
            self.assertEqual(resp.status_code, 400)
            self.assertEqual(resp.get_json()['error_code'], 'INVALID_INPUT')

    def test_long_phone_number(self):
        phone = '+1' + '5' * 60
        token = self.login(phone)
        with self.app.app_context():
            self.assertEqual(auth_service.resolve(token), phone)
        self.assertIsNone(User.__table__.c.phone_number.type.length)
        self.assertIsNone(UserSession.__table__.c.user_id.type.length)
        self.assertIsNone(OtpChallenge.__table__.c.phone_number.type.length)

    def test_expired_challenge(self):
        code = self.request_code(HOST_PHONE)
        with self.app.app_context():
            challenge = db.session.get(OtpChallenge, HOST_PHONE)
            challenge.expires_at = utcnow() - timedelta(seconds=1)
            db.session.commit()

        resp = self.client.post('/auth/verify-otp', json={'phoneNumber': HOST_PHONE, 'otp': code})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()['error_code'], 'OTP_EXPIRED')

        with self.app.app_context():
            self.assertIsNone(db.session.get(OtpChallenge, HOST_PHONE))


class TestSessions(ServiceTestCase):
    def test_missing_token(self):
        resp = self.client.get('/tables/hosted')
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.get_json(), {
            'success': False,
            'error': 'No x-auth-token provided',
            'error_code': 'UNAUTHENTICATED',
        })

    def test_invalid_token(self):
        resp = self.client.get('/tables/hosted', headers=self.auth('not-a-token'))
        self.assertEqual(resp.status_code, 401)

    def test_token_resolves_to_phone_number(self):
        token = self.login(HOST_PHONE)
        with self.app.app_context():
            self.assertEqual(auth_service.resolve(token), HOST_PHONE)

    def test_new_login_invalidates_previous_token(self):
        first = self.login(HOST_PHONE)
        second = self.login(HOST_PHONE)
        self.assertNotEqual(first, second)

        self.assertEqual(self.client.get('/tables/hosted', headers=self.auth(first)).status_code, 401)
        self.assertEqual(self.client.get('/tables/hosted', headers=self.auth(second)).status_code, 200)

        with self.app.app_context():
            self.assertEqual(UserSession.query.filter_by(user_id=HOST_PHONE).count(), 1)

    def test_expired_session(self):
        token = self.login(HOST_PHONE)
        with self.app.app_context():
            session = db.session.get(UserSession, token)
            session.expires_at = utcnow() - timedelta(seconds=1)
            db.session.commit()

        resp = self.client.get('/tables/hosted', headers=self.auth(token))
        self.assertEqual(resp.status_code, 401)
        with self.app.app_context():
            self.assertIsNone(db.session.get(UserSession, token))

    def test_session_without_expiry(self):
        self.app.config['SESSION_TTL_SECONDS'] = 0
        token = self.login(HOST_PHONE)
        with self.app.app_context():
            self.assertIsNone(db.session.get(UserSession, token).expires_at)

    def test_logout_revokes_token(self):
        token = self.login(HOST_PHONE)
        resp = self.client.post('/auth/logout', headers=self.auth(token))
        self.assertEqual(resp.status_code, 200)

        resp = self.client.get('/tables/hosted', headers=self.auth(token))
        self.assertEqual(resp.status_code, 401)


if __name__ == '__main__':
    unittest.main()
