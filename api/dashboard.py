import sys
import os
from http.server import BaseHTTPRequestHandler

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from euro_news_hub.dashboard import load_dashboard, render_dashboard


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        html = render_dashboard(load_dashboard())

        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(html.encode("utf-8"))
