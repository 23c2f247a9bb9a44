"""Manual cache-bust for the European news panel."""

import json
from http.server import BaseHTTPRequestHandler

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from euro_news_hub.aggregate import clear_news_cache, get_cache_status


class handler(BaseHTTPRequestHandler):
    def do_POST(self):
        try:
            clear_news_cache()
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Access-Control-Allow-Origin", "*")
            self.end_headers()
            self.wfile.write(json.dumps({
                "status": "cleared",
                "cache": get_cache_status(),
            }).encode())

        except Exception as e:
            self.send_response(500)
            self.send_header("Content-Type", "application/json")
            self.send_header("Access-Control-Allow-Origin", "*")
            self.end_headers()
            self.wfile.write(json.dumps({"error": str(e)}).encode())

    def do_GET(self):
        """Report cache status without clearing it."""
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json.dumps({"cache": get_cache_status()}).encode())

    def do_OPTIONS(self):
        """Handle CORS preflight requests."""
        self.send_response(200)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()
