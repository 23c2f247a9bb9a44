import json
import sys
import os
from http.server import BaseHTTPRequestHandler
from dataclasses import asdict

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from euro_news_hub.config import get_settings
from euro_news_hub.contentful import fetch_editorial_headlines
from euro_news_hub.dashboard import group_headlines_by_day


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        try:
            headlines = fetch_editorial_headlines(get_settings())
            days = group_headlines_by_day(headlines)
            payload = {
                "headlines": [asdict(h) for h in headlines],
                "byDay": [
                    {
                        "date": bucket["date"],
                        "day": bucket["day"],
                        "articles": [asdict(h) for h in bucket["articles"]],
                    }
                    for bucket in days
                ],
            }
        except Exception as exc:
            payload = {"headlines": [], "byDay": [], "error": str(exc)}

        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json.dumps(payload, ensure_ascii=False).encode("utf-8"))
