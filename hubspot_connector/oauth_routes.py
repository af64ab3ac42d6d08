"""
HubSpot OAuth Routes
Flask blueprint the host application mounts to let a signed-in user connect
HubSpot. The connector instance is registered with init_hubspot_oauth().
"""

import logging
from functools import wraps

from flask import Blueprint, Flask, current_app, jsonify, redirect, request, session, url_for

from hubspot_connector.client import mask_tokens
from hubspot_connector.connector import HubSpotConnector
from hubspot_connector.exceptions import HubSpotConnectorError

logger = logging.getLogger(__name__)

hubspot_oauth_bp = Blueprint('hubspot_oauth', __name__, url_prefix='/hubspot')

EXTENSION_KEY = 'hubspot_connector'


def init_hubspot_oauth(app: Flask, connector: HubSpotConnector) -> None:
    """Attach connector to app and mount the blueprint."""
    connector.initialize()
    app.extensions[EXTENSION_KEY] = connector
    app.register_blueprint(hubspot_oauth_bp)


def _connector() -> HubSpotConnector:
    return current_app.extensions[EXTENSION_KEY]


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if 'user_id' not in session:
            return redirect('/login')
        return view(*args, **kwargs)
    return wrapped


@hubspot_oauth_bp.route('/')
@login_required
def status():
    """Show whether the signed-in user has HubSpot credentials"""
    user_id = session['user_id']
    return jsonify(
        connected=_connector().has_user_access_token(user_id),
        message=request.args.get('message'),
        error=request.args.get('error'),
    )


@hubspot_oauth_bp.route('/connect')
@login_required
def connect():
    """Send the user to HubSpot's authorization page"""
    user_id = session['user_id']
    try:
        url = _connector().authenticate(user_id)
    except HubSpotConnectorError as e:
        return redirect(url_for('hubspot_oauth.status', error=str(e)))
    return redirect(url)


@hubspot_oauth_bp.route('/callback')
@login_required
def callback():
    """Receive HubSpot's redirect and store the credentials it carries"""
    raw = request.query_string.decode('utf-8')
    try:
        user_id = _connector().authenticate_response(raw, expected_user_id=session['user_id'])
    except HubSpotConnectorError as e:
        error = mask_tokens(str(e))
        logger.warning(f'HubSpot authorization failed for user {session["user_id"]}: {error}')
        return redirect(url_for('hubspot_oauth.status', error=error))

    logger.info(f'HubSpot connected for user {user_id}')
    return redirect(url_for('hubspot_oauth.status', message='HubSpot connected successfully!'))


@hubspot_oauth_bp.route('/test', methods=['POST'])
@login_required
def test_connection():
    """Re-test the stored HubSpot credentials"""
    result = _connector().test_connection(session['user_id'])
    return jsonify(success=result.success, message=result.message)


@hubspot_oauth_bp.route('/disconnect', methods=['POST'])
@login_required
def disconnect():
    """Forget the signed-in user's HubSpot credentials"""
    _connector().revoke_credentials(session['user_id'])
    return redirect(url_for('hubspot_oauth.status', message='HubSpot disconnected'))
