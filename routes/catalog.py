#!/usr/bin/env python3
"""
Catalog, search and stream route handlers
"""

import json

from bottle import request, response
from drama_providers.base.exceptions import InvalidInput, UpstreamError
from drama_providers.base.utils import logger
from drama_providers.providers.dramabox.models import first_cdn_url, summarize_chapter


def _parse_page(raw) -> int:
    """Page number from the query string; missing, invalid or zero means 1"""
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return page or 1


def setup_catalog_routes(app, client, service):
    """Setup catalog browsing routes"""

    @app.route("/api/latest")
    def get_latest():
        """Latest dramas, paged with ?page=N"""
        page = _parse_page(request.query.get("page"))
        try:
            records = client.get_latest(page)
            response.content_type = "application/json"
            return json.dumps(records)
        except UpstreamError as api_err:
            logger.error(f"API Error in /api/latest (page {page}): {api_err}")
            response.status = 500
            return {"error": "Failed to fetch latest dramas"}
        except Exception as api_err:
            logger.error(f"Unexpected error in /api/latest: {api_err}", exc_info=True)
            response.status = 500
            return {"error": f"Internal server error: {str(api_err)}"}

    @app.route("/api/search")
    def search():
        """Search suggestions for ?q=keyword"""
        keyword = request.query.getunicode("q")
        if not keyword:
            response.status = 400
            return {"error": "Keyword is required"}

        try:
            results = client.search(keyword)
            response.content_type = "application/json"
            return json.dumps(results)
        except UpstreamError as api_err:
            logger.error(f"API Error in /api/search: {api_err}")
            response.status = 500
            return {"error": "Failed to search dramas"}
        except Exception as api_err:
            logger.error(f"Unexpected error in /api/search: {api_err}", exc_info=True)
            response.status = 500
            return {"error": f"Internal server error: {str(api_err)}"}

    @app.route("/api/stream/<book_id>/<episode>")
    def get_stream(book_id, episode):
        """
        Resolve the playable URL of an episode.

        Returns the first CDN URL of the first chapter plus a short listing
        of every chapter returned with it.
        """
        try:
            chapters = client.get_stream_links(book_id, episode)
        except InvalidInput as val_err:
            response.status = 400
            return {"error": str(val_err)}
        except UpstreamError as api_err:
            logger.error(f"API Error in /api/stream/{book_id}/{episode}: {api_err}")
            response.status = 500
            return {"error": "Failed to get stream link"}
        except Exception as api_err:
            logger.error(f"Unexpected error in /api/stream/{book_id}/{episode}: {api_err}", exc_info=True)
            response.status = 500
            return {"error": f"Internal server error: {str(api_err)}"}

        if not chapters:
            response.status = 404
            return {"error": "Episode not found"}

        return {
            "streamUrl": first_cdn_url(chapters[0]),
            "chapterList": [summarize_chapter(chapter) for chapter in chapters],
        }
