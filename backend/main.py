"""
Minimal chat backend for the fine-tuned site assistant.

Exposes the chat endpoint used by the web frontend without introducing a web
framework: requests are forwarded to the fine-tuned model and the reply is
streamed back as chunked plain text.
"""

from __future__ import annotations

import argparse
import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict, Iterator, Optional

import openai
from dotenv import load_dotenv

from backend.chat_service import ChatService, create_chat_service, map_upstream_error
from sitetune.core.config import Config
from sitetune.core.exceptions import ConfigurationError
from sitetune.core.logging_config import configure_package_logging

load_dotenv()

logger = logging.getLogger("backend")

CHAT_SERVICE: Optional[ChatService] = None


def _chat_service() -> ChatService:
    global CHAT_SERVICE
    if CHAT_SERVICE is None:
        CHAT_SERVICE = create_chat_service(Config())
        logger.info("Serving fine-tuned model %s", CHAT_SERVICE.model_id)
    return CHAT_SERVICE


class BackendHandler(BaseHTTPRequestHandler):
    server_version = "SiteTuneBackend/1.0"
    protocol_version = "HTTP/1.1"

    def _send_json(self, status: int, payload: Dict[str, object]) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.send_header("Access-Control-Allow-Methods", "GET, POST, OPTIONS")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _read_json(self) -> Optional[Dict[str, object]]:
        try:
            length = int(self.headers.get("Content-Length", "0"))
        except ValueError:
            # Body size unknown, so the connection cannot be reused
            self.close_connection = True
            return None
        if length <= 0:
            return None
        data = self.rfile.read(length)
        try:
            payload = json.loads(data.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
        return payload if isinstance(payload, dict) else None

    def _write_chunk(self, text: str) -> None:
        data = text.encode("utf-8")
        self.wfile.write(f"{len(data):X}\r\n".encode("ascii") + data + b"\r\n")
        self.wfile.flush()

    def do_GET(self) -> None:
        if self.path == "/health":
            self._send_json(200, {"status": "ok"})
            return

        self._send_json(404, {"detail": "Not found"})

    def do_OPTIONS(self) -> None:
        self.send_response(204)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.send_header("Access-Control-Allow-Methods", "GET, POST, OPTIONS")
        self.send_header("Content-Length", "0")
        self.end_headers()

    def do_POST(self) -> None:
        if self.path == "/api/chat":
            self._handle_chat()
            return

        self.close_connection = True
        self._send_json(404, {"detail": "Not found"})

    def _handle_chat(self) -> None:
        payload = self._read_json()
        if payload is None or not isinstance(payload.get("messages"), list):
            self._send_json(400, {"error": "Invalid request format"})
            return

        try:
            service = _chat_service()
        except ConfigurationError as exc:
            logger.error("Chat API Error: %s", exc)
            self._send_json(500, {"error": "An error occurred. Please try again."})
            return

        messages = service.prepare_messages(payload["messages"])
        if not messages:
            self._send_json(400, {"error": "No valid messages provided"})
            return

        stream = service.stream(messages)
        try:
            first = next(stream, "")
        except openai.OpenAIError as exc:
            logger.error("Chat API Error: %s", exc)
            status, message = map_upstream_error(exc)
            self._send_json(status, {"error": message})
            return

        self.send_response(200)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Cache-Control", "no-cache, no-transform")
        self.send_header("X-Accel-Buffering", "no")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Transfer-Encoding", "chunked")
        self.end_headers()
        self._stream_body(first, stream)

    def _stream_body(self, first: str, rest: Iterator[str]) -> None:
        try:
            if first:
                self._write_chunk(first)
            for delta in rest:
                self._write_chunk(delta)
        except openai.OpenAIError as exc:
            # Headers are already sent; the client sees a truncated reply.
            logger.error("Stream interrupted: %s", exc)
        self.wfile.write(b"0\r\n\r\n")
        self.wfile.flush()


def run(host: str, port: int) -> None:
    configure_package_logging()
    logger.info("Starting backend server on %s:%s", host, port)
    server = ThreadingHTTPServer((host, port), BackendHandler)
    server.serve_forever()


def main() -> None:
    parser = argparse.ArgumentParser(description="Fine-tuned site assistant chat backend")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    run(args.host, args.port)


if __name__ == "__main__":
    main()
