#!/usr/bin/env python3
"""Canned Upsound catalog API for local runs: `upsound-mcp serve` with UPSOUND_BASE_URL=http://127.0.0.1:8089."""
from __future__ import annotations

import argparse
import json
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, unquote, urlparse

DEFAULT_ROBOTS = """User-agent: *
Disallow: /studios/private-
Allow: /

User-agent: BadBot
Disallow: /
"""

STUDIOS = [
    {"id": "abc123", "name": "Electric Lady", "country": "United States", "city": "New York", "price": 180},
    {"id": "def456", "name": "Sunset Sound", "country": "United States", "city": "Los Angeles", "price": 240},
    {"id": "ghi789", "name": "Abbey Road", "country": "United Kingdom", "city": "London", "price": 400},
    {"id": "private-001", "name": "Unlisted Room", "country": "United States", "city": "Austin", "price": 90},
]


def _json(handler: BaseHTTPRequestHandler, status: int, payload: dict) -> None:
    body = json.dumps(payload).encode("utf-8")
    handler.send_response(status)
    handler.send_header("Content-Type", "application/json")
    handler.send_header("Content-Length", str(len(body)))
    handler.end_headers()
    handler.wfile.write(body)


def search_studios(query: dict[str, list[str]]) -> list[dict]:
    country = query.get("country", [""])[0]
    term = query.get("term", [""])[0].lower()
    max_price = query.get("max_price", [""])[0]
    results = [studio for studio in STUDIOS if studio["country"] == country]
    if term:
        results = [studio for studio in results if term in studio["city"].lower() or term in studio["name"].lower()]
    if max_price:
        results = [studio for studio in results if studio["price"] <= float(max_price)]
    return results


class StubCatalogHandler(BaseHTTPRequestHandler):
    robots_txt: str = DEFAULT_ROBOTS
    seen_headers: list[dict[str, str]] = []

    def log_message(self, format: str, *args):
        _ = (format, args)

    def do_GET(self):
        self.seen_headers.append(dict(self.headers.items()))
        parsed = urlparse(self.path)
        path = parsed.path.rstrip("/") or "/"

        if path == "/robots.txt":
            if not self.robots_txt:
                _json(self, 404, {"error": "not_found"})
                return
            body = self.robots_txt.encode("utf-8")
            self.send_response(200)
            self.send_header("Content-Type", "text/plain; charset=utf-8")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
            return

        if path == "/studios":
            query = parse_qs(parsed.query)
            if "country" not in query:
                _json(self, 400, {"error": "country is required"})
                return
            results = search_studios(query)
            _json(self, 200, {"results": results, "total": len(results)})
            return

        if path.startswith("/studios/"):
            studio_id = unquote(path[len("/studios/"):])
            for studio in STUDIOS:
                if studio["id"] == studio_id:
                    _json(self, 200, studio)
                    return
            _json(self, 404, {"error": "studio_not_found", "id": studio_id})
            return

        _json(self, 404, {"error": "not_found"})


def make_server(host: str = "127.0.0.1", port: int = 8089, robots_txt: str = DEFAULT_ROBOTS) -> ThreadingHTTPServer:
    handler = type("BoundStubCatalogHandler", (StubCatalogHandler,), {"robots_txt": robots_txt, "seen_headers": []})
    return ThreadingHTTPServer((host, port), handler)


def main() -> None:
    parser = argparse.ArgumentParser(description="Stub Upsound catalog API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8089)
    args = parser.parse_args()
    server = make_server(args.host, args.port)
    print(f"stub catalog listening on {args.host}:{args.port}")
    server.serve_forever()


if __name__ == "__main__":
    main()
