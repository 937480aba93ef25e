#!/usr/bin/env python3
"""
Digital Archaeology Story Server

Serves the story-mode backend:
- REST API endpoints (mindset, anachronism filtering, scene filtering)
- Socket.IO push of mindset changes to the scene renderer
"""

import os
import logging
from flask import Flask, current_app
from flask_socketio import SocketIO, emit

import config
from routes import api
from session import StorySession, mindset_message

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

socketio = SocketIO()


def broadcast_mindset(event, payload):
    """Push a store notification to every connected client."""
    socketio.emit('message', mindset_message(event, payload))


def create_app(session: StorySession = None) -> Flask:
    """Build the app around one StorySession (a fresh one by default)."""
    app = Flask(__name__)
    app.config['SECRET_KEY'] = config.SESSION_SECRET or os.urandom(24).hex()

    session = session or StorySession()
    session.subscribe(broadcast_mindset)
    app.extensions['story_session'] = session

    debug_era = config.get_debug_era_id()
    if debug_era:
        logger.info(f"DEBUG: starting in era {debug_era}")
        session.enter_era(debug_era)

    app.register_blueprint(api)

    socketio.init_app(
        app,
        cors_allowed_origins="*",
        async_mode=config.SOCKETIO_ASYNC_MODE,
        ping_timeout=60,
        ping_interval=25
    )
    return app


@socketio.on('connect')
def handle_connect(auth=None):
    """Send the current mindset so a new client starts in sync"""
    session = current_app.extensions['story_session']
    logger.info("Client connected")
    emit('message', {'type': 'state', 'data': session.get_state()})


@socketio.on('disconnect')
def handle_disconnect(reason=None):
    logger.info("Client disconnected")


def main():
    app = create_app()
    port = int(os.environ.get('PORT', 5000))
    logger.info(f"Starting story server on port {port}")
    socketio.run(app, host='0.0.0.0', port=port, allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    main()
