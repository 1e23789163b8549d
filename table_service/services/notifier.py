"""
OTP delivery — Table Service
Posts the code to an SMS gateway. Delivery is fire-and-forget: failures are
logged and never surface to the caller.
"""

import logging

import requests
from flask import current_app

logger = logging.getLogger(__name__)


def send_otp(phone_number, code):
    gateway_url = current_app.config.get('SMS_GATEWAY_URL')
    if not gateway_url:
        # No gateway configured: dev mode, the code only goes to the log.
        logger.info("[OTP][DEV] Code for %s: %s", phone_number, code)
        return False

    payload = {'to': phone_number, 'message': f"Your verification code is {code}"}
    headers = {'api-key': current_app.config.get('SMS_GATEWAY_KEY') or ''}
    try:
        response = requests.post(
            gateway_url,
            json=payload,
            headers=headers,
            timeout=current_app.config.get('SMS_TIMEOUT_SECONDS', 2.0),
        )
    except requests.RequestException as e:
        logger.warning("[OTP] SMS gateway unreachable for %s: %s", phone_number, e)
        return False

    if response.status_code >= 300:
        logger.warning("[OTP] SMS gateway returned %s: %s", response.status_code, response.text)
        return False
    return True
