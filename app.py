# app.py - Dashboard widget host
"""
Flask app hosting the Twitter dashboard widget.
Shows the friends timeline and posts status updates through the API client.
"""

from flask import Flask, Response, current_app, jsonify, request
from datetime import datetime
from functools import wraps
from typing import Optional
import hmac
import logging
import os

from twdash.api_client import TwitterAPIClient
from twdash.config import ClientConfig, build_client, load_config
from twdash.exceptions import TransportError, ValidationError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def require_api_key(f):
    """Decorator to require the X-API-Key header on routes that change state"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        api_key = request.headers.get('X-API-Key')
        expected = current_app.config.get('API_KEY')
        if api_key and expected and hmac.compare_digest(api_key, expected):
            return f(*args, **kwargs)
        logger.warning("Unauthorized API access attempt from %s", request.remote_addr)
        return jsonify({'error': 'Unauthorized - Invalid API key'}), 401
    return decorated_function


def create_app(config: Optional[ClientConfig] = None,
               client: Optional[TwitterAPIClient] = None) -> Flask:
    """Factory function to create the Flask app instance.
    This is useful for gunicorn and other WSGI servers, and for tests
    that pass in their own client."""
    app = Flask(__name__)

    config = config or load_config(os.environ.get('TWDASH_CONFIG'))
    if client is None:
        client = build_client(config)
    app.config['TWITTER_CLIENT'] = client
    app.config['API_KEY'] = config.api_key
    if not config.api_key:
        logger.warning("No API key configured (TWDASH_API_KEY); /update and /credentials are disabled")

    def get_client() -> TwitterAPIClient:
        return app.config['TWITTER_CLIENT']

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        """Invalid parameters never reach Twitter; tell the widget what was wrong"""
        logger.info("Rejected request: %s", e)
        return jsonify({'error': 'invalid_parameter', 'parameter': e.name, 'message': str(e)}), 400

    @app.errorhandler(TransportError)
    def handle_transport_error(e):
        logger.error("Twitter unreachable: %s", e)
        return jsonify({'error': 'twitter_unreachable', 'message': str(e)}), 502

    @app.route('/timeline', methods=['GET'])
    def timeline():
        """Friends timeline for the dashboard widget"""
        page = request.args.get('page', type=int)
        fmt = request.args.get('format', 'json')
        response = get_client().get_friends_timeline(fmt, page=page)

        # If Twitter returned an error (401, 503, etc), relay the status code
        if response.is_error():
            return jsonify({
                'error': 'twitter_error',
                'http_code': response.http_code,
                'message': response.get_data(),
            }), response.http_code

        return Response(response.get_data(), status=response.http_code,
                        content_type=response.content_type or 'application/json')

    @app.route('/update', methods=['POST'])
    @require_api_key
    def update():
        """Post a status update from the widget's update form"""
        body = request.get_json(silent=True) or request.form
        status = body.get('status') or body.get('twdash_update_text')
        if not status:
            return jsonify({'error': 'Status text required'}), 400

        response = get_client().update_status(status)
        logger.info("Status update returned HTTP %d", response.http_code)
        return Response(response.to_json(), status=response.http_code,
                        content_type='application/json')

    @app.route('/credentials', methods=['POST'])
    @require_api_key
    def credentials():
        """Replace the credentials used by the widget (kept in memory only)"""
        body = request.get_json(silent=True) or request.form
        username = body.get('username')
        password = body.get('password')
        if not username or not password:
            return jsonify({'error': 'username and password required'}), 400

        get_client().set_auth(username, password)
        logger.info("Credentials updated for %s", username)
        return jsonify({'success': True, 'username': username})

    @app.route('/health')
    def health_check():
        """Health check endpoint"""
        last = get_client().get_last_request_time()
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now().isoformat(),
            'last_request_time': datetime.fromtimestamp(last).isoformat() if last else None,
        })

    return app


if __name__ == '__main__':
    # For production, use a production WSGI server like gunicorn
    # gunicorn -w 1 -b 0.0.0.0:8000 'app:create_app()'
    port = int(os.environ.get('TWDASH_PORT', 5000))
    create_app().run(host='0.0.0.0', port=port, debug=False)
