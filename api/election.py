"""Election countdown data for the map tooltip.

``GET /api/election?code=FR`` returns one country, without ``code`` the
whole table sorted by date.
"""
import json
import sys
import os
from http.server import BaseHTTPRequestHandler
from urllib.parse import urlparse, parse_qs

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from euro_news_hub.elections import tooltip, upcoming


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        params = parse_qs(urlparse(self.path).query)
        code = params.get("code", [None])[0]

        if code is None:
            status, payload = 200, {"elections": upcoming()}
        else:
            info = tooltip(code)
            if info is None:
                status, payload = 404, {"error": f"No election data for '{code}'"}
            else:
                status, payload = 200, info

        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode())
