#!/usr/bin/env python3
"""
Token inspection route handlers
"""

from drama_providers.base.utils import logger


def setup_token_routes(app, client, service):
    """Setup token info and refresh routes"""

    @app.route("/api/token", method="GET")
    def get_token_info():
        """Snapshot of the cached token; never includes the token value"""
        return client.token_info()

    @app.route("/api/token/refresh", method="POST")
    def refresh_token():
        """Drop the cached token and mint a new one"""
        token = client.refresh_token()
        logger.info(f"Token refreshed via API (tier: {token.tier.value})")

        info = client.token_info()
        info["tier"] = token.tier.value
        return info
