from flask import Blueprint, jsonify, request
from table_service.schemas import TableFields, parse_payload
from table_service.security import session_required, get_session_identity
from table_service.services.table_registry import (
    create_table,
    delete_table,
    get_table,
    list_all_tables,
    list_hosted_tables,
)

tables_bp = Blueprint('tables', __name__)


@tables_bp.route('', methods=['POST'])
@session_required
def create_table_route():
    """
    Host a new table
    ---
    tags:
      - Tables
    security:
      - SessionToken: []
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            tableName:
              type: string
            hostName:
              type: string
            clubName:
              type: string
            reservationDate:
              type: string
            availableSpots:
              type: integer
            minJoiningFee:
              type: number
            hostSocialLinks:
              type: array
              items:
                type: string
            hostPhoneNumber:
              type: string
            hostBio:
              type: string
            tableDetails:
              type: string
            reservationConfirmationUri:
              type: string
    responses:
      200:
        description: Table created
      400:
        description: Unknown or malformed field
      401:
        description: Missing or invalid token
    """
    fields = parse_payload(TableFields, request.get_json(silent=True))
    table = create_table(get_session_identity(), fields)
    return jsonify({'success': True, 'tableId': str(table.table_id)}), 200


@tables_bp.route('/hosted', methods=['GET'])
@session_required
def list_hosted_route():
    """
    List tables hosted by the caller
    ---
    tags:
      - Tables
    security:
      - SessionToken: []
    responses:
      200:
        description: Hosted tables
    """
    tables = list_hosted_tables(get_session_identity())
    return jsonify({'success': True, 'data': [t.to_dict() for t in tables]}), 200


@tables_bp.route('', methods=['GET'])
def list_tables_route():
    """
    List all tables
    ---
    tags:
      - Tables
    responses:
      200:
        description: All tables
    """
    # ?public=true is accepted but every table is public.
    tables = list_all_tables()
    return jsonify({'success': True, 'data': [t.to_dict() for t in tables]}), 200


@tables_bp.route('/<uuid:table_id>', methods=['GET'])
def get_table_route(table_id):
    """
    Get a single table
    ---
    tags:
      - Tables
    parameters:
      - name: table_id
        in: path
        type: string
        required: true
    responses:
      200:
        description: Table details
      404:
        description: Table not found
    """
    return jsonify({'success': True, 'data': get_table(table_id).to_dict()}), 200


@tables_bp.route('/<uuid:table_id>', methods=['DELETE'])
@session_required
def delete_table_route(table_id):
    """
    Remove a hosted table
    ---
    tags:
      - Tables
    security:
      - SessionToken: []
    parameters:
      - name: table_id
        in: path
        type: string
        required: true
    responses:
      200:
        description: Table removed
      403:
        description: Not your table
      404:
        description: Table not found
    """
    delete_table(get_session_identity(), table_id)
    return jsonify({'success': True, 'message': 'Table removed'}), 200
