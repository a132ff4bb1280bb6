"""HTTP entrypoint for Discord interactions.
Uses Functions Framework for Cloud Functions Gen2

Routes:
- POST /discord/interactions: verified interactions, answered by the router
- POST /register-commands: publish global and guild command descriptors
- GET /health: configuration check
"""
import asyncio
import json
from datetime import datetime, timezone
from functools import lru_cache

from functions_framework import http
from flask import Flask, Request, jsonify, request

from interaction_router import InteractionRouter, NotFound, verify_headers
from interaction_router.observability import init_observability, traced_function
from interaction_router.response_utils import get_error_response

from .bot import AppContext, build_router
from .config import Config
from .correlation import with_correlation
from .discord_service import DiscordService

logger, tracing = init_observability('interaction-gateway', app=None)


@lru_cache(maxsize=1)
def get_router() -> InteractionRouter:
    """Router shared by every request handled by this process."""
    return build_router(AppContext.from_config())


@http
@with_correlation(logger)
@traced_function("gateway_handler")
def gateway_handler(request: Request):
    """Main HTTP handler, routes requests based on path."""
    path = request.path
    method = request.method

    if path == "/health" and method == "GET":
        return health_handler(request)

    if path == "/discord/interactions" and method == "POST":
        return discord_interactions(request)

    if path == "/register-commands" and method == "POST":
        return register_commands(request)

    logger.warning("Unknown path", path=path, method=method)
    return jsonify({'error': 'Not found'}), 404


def health_handler(request: Request):
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'service': 'interaction-gateway',
        'environment': {
            'public_key_set': bool(Config.DISCORD_PUBLIC_KEY),
            'bot_token_set': bool(Config.DISCORD_BOT_TOKEN),
            'app_id_set': bool(Config.DISCORD_APPLICATION_ID),
            'replay_window_seconds': Config.SIGNATURE_MAX_AGE_SECONDS
        }
    }), 200


@traced_function("discord_interaction")
def discord_interactions(request: Request):
    """Verify a Discord interaction and answer it through the router."""
    correlation_id = getattr(request, 'correlation_id', request.headers.get('X-Correlation-ID'))

    if not Config.DISCORD_PUBLIC_KEY:
        logger.error("DISCORD_PUBLIC_KEY not configured", correlation_id=correlation_id)
        return jsonify({'error': 'Unauthorized'}), 401

    body = request.get_data()
    max_age = Config.SIGNATURE_MAX_AGE_SECONDS or None
    if not verify_headers(Config.DISCORD_PUBLIC_KEY, request.headers, body, max_age=max_age):
        logger.warning("Invalid Discord signature", correlation_id=correlation_id)
        return jsonify({'error': 'Unauthorized'}), 401

    try:
        interaction = json.loads(body)
    except ValueError:
        interaction = None
    if not isinstance(interaction, dict):
        logger.warning("Invalid JSON in Discord interaction", correlation_id=correlation_id)
        return jsonify({'error': 'Bad Request - Invalid JSON'}), 400

    logger.info(
        "Processing Discord interaction",
        correlation_id=correlation_id,
        interaction_type=interaction.get('type'),
        interaction_id=interaction.get('id')
    )

    try:
        response = asyncio.run(get_router().handle(interaction))
    except Exception as e:
        logger.error(
            "Critical error in discord_interactions",
            error=e,
            correlation_id=correlation_id,
            interaction_type=interaction.get('type')
        )
        response, status_code = get_error_response('internal')
        return jsonify(response), status_code

    if isinstance(response, NotFound):
        logger.warning(
            "Unhandled interaction",
            correlation_id=correlation_id,
            interaction_type=interaction.get('type'),
            key=response.key
        )
        response, status_code = get_error_response('unsupported', response.key or None)
        return jsonify(response), status_code

    # Components and modal submits answer out of band
    if response is None:
        return '', 204

    return jsonify(response), 200


def register_commands(request: Request):
    """Publish command descriptors to Discord."""
    if not Config.DISCORD_BOT_TOKEN or not Config.DISCORD_APPLICATION_ID:
        return jsonify({
            'error': 'DISCORD_BOT_TOKEN and DISCORD_APPLICATION_ID must be configured'
        }), 500

    results = DiscordService.register_all_commands(get_router(), Config.DISCORD_GUILD_IDS)
    failed = [result for result in results if result['status'] != 'success']

    return jsonify({
        'message': 'Registration completed' if not failed else 'Registration completed with errors',
        'results': results,
        'note': 'Global commands may take a few minutes to appear in Discord'
    }), 200 if not failed else 502


def create_app() -> Flask:
    """Flask app exposing the gateway, for local development and tests."""
    app = Flask(__name__)
    tracing.instrument_flask(app)

    @app.route("/", defaults={'path': ''}, methods=['GET', 'POST'])
    @app.route("/<path:path>", methods=['GET', 'POST'])
    def catch_all(path):
        return gateway_handler(request)

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=8080, debug=True)
