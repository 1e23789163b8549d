from flask import Blueprint, request, jsonify
from table_service.schemas import require_fields
from table_service.security import session_required, get_session_identity, get_session_token
from table_service.services import auth_service

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/request-otp', methods=['POST'])
def request_otp():
    """
    Send a one-time code to a phone number
    ---
    tags:
      - Auth
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - phoneNumber
          properties:
            phoneNumber:
              type: string
    responses:
      200:
        description: OTP generated and sent
      400:
        description: Missing phoneNumber
    """
    data = require_fields(request.get_json(silent=True), 'phoneNumber')
    auth_service.request_challenge(data['phoneNumber'])
    return jsonify({'success': True, 'message': 'OTP generated & sent.'}), 200


@auth_bp.route('/verify-otp', methods=['POST'])
def verify_otp():
    """
    Verify a one-time code and open a session
    ---
    tags:
      - Auth
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - phoneNumber
            - otp
          properties:
            phoneNumber:
              type: string
            otp:
              type: string
    responses:
      200:
        description: Session token issued
      400:
        description: Missing fields, no OTP requested or OTP expired
      401:
        description: Invalid OTP
    """
    data = require_fields(request.get_json(silent=True), 'phoneNumber', 'otp')
    token, phone_number = auth_service.verify_challenge(data['phoneNumber'], data['otp'])
    return jsonify({
        'success': True,
        'sessionToken': token,
        'phoneNumber': phone_number
    }), 200


@auth_bp.route('/logout', methods=['POST'])
@session_required
def logout():
    """
    Revoke the current session
    ---
    tags:
      - Auth
    security:
      - SessionToken: []
    responses:
      200:
        description: Logout successful
      401:
        description: Missing or invalid token
    """
    auth_service.revoke(get_session_token())
    return jsonify({'success': True, 'message': f'Logged out {get_session_identity()}'}), 200
