"""European headlines for the news panel.

``GET /api/news`` returns the cached selection (refreshed lazily after the
TTL). Clearing the cache is a POST to ``/api/clear_cache``.
"""
import json
import sys
import os
from http.server import BaseHTTPRequestHandler

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from euro_news_hub.aggregate import get_european_news


class handler(BaseHTTPRequestHandler):
    def _send_json(self, status, payload):
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json.dumps(payload, ensure_ascii=False).encode("utf-8"))

    def do_GET(self):
        try:
            result = get_european_news()
            self._send_json(200, {
                "articles": [a.as_dict() for a in result.articles],
                "lastUpdated": result.generated_at.isoformat(),
                "fromCache": result.from_cache,
                "stale": result.stale,
                "totalSourceArticles": result.total_source_articles,
                "uniqueAfterFiltering": result.unique_after_filtering,
            })
        except Exception as exc:
            self._send_json(200, {
                "articles": [],
                "fromCache": False,
                "error": str(exc),
            })

    def do_OPTIONS(self):
        self.send_response(204)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()
