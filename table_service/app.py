"""
Table Service — Flask application
Hosts tables, takes bids on them and logs users in with phone OTP.
"""

import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify
from flasgger import Swagger
from sqlalchemy.orm.exc import StaleDataError
from werkzeug.exceptions import HTTPException

from table_service.errors import Conflict, Internal, ServiceError
from table_service.extensions import db
from table_service import models  # noqa: F401  (register models)

logger = logging.getLogger(__name__)


def _database_uri():
    if os.environ.get('DATABASE_URL'):
        return os.environ['DATABASE_URL']
    db_user = os.environ.get('DB_USER', 'table_svc_user')
    db_pass = os.environ.get('DB_PASS', 'password')
    db_host = os.environ.get('DB_HOST', 'tables-db')
    db_name = os.environ.get('DB_NAME', 'tables_db')
    return f"postgresql://{db_user}:{db_pass}@{db_host}/{db_name}"


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(StaleDataError)
    def handle_stale_data(e):
        db.session.rollback()
        error = Conflict("The record was changed by another request, retry")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if e.code is None or e.code < 400:
            return e
        return jsonify({
            'success': False,
            'error': e.description,
            'error_code': e.name.upper().replace(' ', '_'),
        }), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        logger.exception("Unhandled error: %s", e)
        error = Internal(str(e))
        return jsonify(error.to_dict()), error.status_code


def create_app(config=None):
    load_dotenv()
    app = Flask(__name__)

    # Configuration
    app.config['SQLALCHEMY_DATABASE_URI'] = _database_uri()
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['OTP_TTL_SECONDS'] = int(os.environ.get('OTP_TTL_SECONDS', 600))
    app.config['OTP_HASH_ROUNDS'] = int(os.environ.get('OTP_HASH_ROUNDS', 12))
    app.config['SESSION_TTL_SECONDS'] = int(os.environ.get('SESSION_TTL_SECONDS', 30 * 24 * 3600))
    app.config['SMS_GATEWAY_URL'] = os.environ.get('SMS_GATEWAY_URL')
    app.config['SMS_GATEWAY_KEY'] = os.environ.get('SMS_GATEWAY_KEY')
    app.config['SMS_TIMEOUT_SECONDS'] = float(os.environ.get('SMS_TIMEOUT_SECONDS', 2.0))
    app.config['LOG_LEVEL'] = os.environ.get('LOG_LEVEL', 'INFO')
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize Extensions
    db.init_app(app)

    Swagger(app, template={
        'info': {'title': 'Table Service API', 'version': '0.1.0'},
        'securityDefinitions': {
            'SessionToken': {'type': 'apiKey', 'name': 'x-auth-token', 'in': 'header'}
        },
    })

    register_error_handlers(app)

    # Register Blueprints
    from table_service.routes.auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')

    from table_service.routes.tables import tables_bp
    app.register_blueprint(tables_bp, url_prefix='/tables')

    from table_service.routes.bids import bids_bp
    app.register_blueprint(bids_bp)

    @app.route('/health')
    def health():
        try:
            db.session.execute(db.text('SELECT 1'))
            return {"service": "table-service", "status": "healthy"}, 200
        except Exception as e:
            return {"service": "table-service", "status": "unhealthy", "error": str(e)}, 503

    with app.app_context():
        db.create_all()

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
