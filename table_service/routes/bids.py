from flask import Blueprint, jsonify, request
from table_service.errors import InvalidInput
from table_service.schemas import BidFields, parse_payload, require_fields
from table_service.security import session_required, get_session_identity
from table_service.services.bid_service import (
    cancel_own_bid,
    create_bid,
    list_bids_for_table,
    list_own_bids,
    remove_approved_member,
    set_bid_status,
)

bids_bp = Blueprint('bids', __name__)


@bids_bp.route('/tables/<uuid:table_id>/bids', methods=['POST'])
@session_required
def create_bid_route(table_id):
    """
    Place a bid to join a table
    ---
    tags:
      - Bids
    security:
      - SessionToken: []
    parameters:
      - name: table_id
        in: path
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            bidAmount:
              type: number
            phoneNumber:
              type: string
            userSocialLinks:
              type: array
              items:
                type: string
            referredBy:
              type: string
            photoUri:
              type: string
    responses:
      200:
        description: Bid created with status pending
      400:
        description: Unknown or malformed field
    """
    fields = parse_payload(BidFields, request.get_json(silent=True))
    bid = create_bid(get_session_identity(), table_id, fields)
    return jsonify({'success': True, 'bidId': str(bid.bid_id)}), 200


@bids_bp.route('/tables/<uuid:table_id>/bids', methods=['GET'])
@session_required
def list_table_bids_route(table_id):
    """
    Host lists the bids on their table
    ---
    tags:
      - Bids
    security:
      - SessionToken: []
    responses:
      200:
        description: Bids for the table
      403:
        description: Not your table
      404:
        description: Table not found
    """
    bids = list_bids_for_table(get_session_identity(), table_id)
    return jsonify({'success': True, 'data': [b.to_dict() for b in bids]}), 200


@bids_bp.route('/tables/<uuid:table_id>/bids/<uuid:bid_id>', methods=['PATCH'])
@session_required
def update_bid_status_route(table_id, bid_id):
    """
    Host approves or denies a bid
    ---
    tags:
      - Bids
    security:
      - SessionToken: []
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - status
          properties:
            status:
              type: string
              enum: [approved, denied]
    responses:
      200:
        description: Status updated
      400:
        description: Invalid status
      403:
        description: Not your table
      404:
        description: Table or bid not found
    """
    data = require_fields(request.get_json(silent=True), 'status')
    bid = set_bid_status(get_session_identity(), table_id, bid_id, data['status'])
    return jsonify({'success': True, 'message': f'Bid {bid.status}'}), 200


@bids_bp.route('/bids', methods=['GET'])
@session_required
def list_own_bids_route():
    """
    List the caller's own bids
    ---
    tags:
      - Bids
    security:
      - SessionToken: []
    parameters:
      - name: mine
        in: query
        type: string
        required: true
        enum: ['true']
    responses:
      200:
        description: The caller's bids
      400:
        description: Missing or invalid query param
    """
    if request.args.get('mine') != 'true':
        raise InvalidInput('Missing or invalid query param')
    bids = list_own_bids(get_session_identity())
    return jsonify({'success': True, 'data': [b.to_dict() for b in bids]}), 200


@bids_bp.route('/bids/<uuid:bid_id>', methods=['DELETE'])
@session_required
def cancel_bid_route(bid_id):
    """
    Bidder cancels a pending bid
    ---
    tags:
      - Bids
    security:
      - SessionToken: []
    responses:
      200:
        description: Bid removed
      400:
        description: Bid is not pending
      403:
        description: Not your bid
      404:
        description: Bid not found
    """
    cancel_own_bid(get_session_identity(), bid_id)
    return jsonify({'success': True, 'message': 'Bid removed'}), 200


@bids_bp.route('/tables/<uuid:table_id>/members/<member_id>', methods=['DELETE'])
@session_required
def remove_member_route(table_id, member_id):
    """
    Host removes an approved member from their table
    ---
    tags:
      - Bids
    security:
      - SessionToken: []
    parameters:
      - name: member_id
        in: path
        type: string
        required: true
        description: The member's user id (phone number)
    responses:
      200:
        description: Member removed
      403:
        description: Not your table
      404:
        description: Table not found or member has no approved bid
    """
    remove_approved_member(get_session_identity(), table_id, member_id)
    return jsonify({'success': True, 'message': 'Member removed'}), 200
