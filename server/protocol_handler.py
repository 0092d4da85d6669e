"""
server/protocol_handler.py
--------------------------
Line-based TCP transport.

Each client gets its own thread. Every request line is handed to the
MessageHandler; the response goes back as one line:
    OK <json>    for any regular response (including KO statuses)
    ERR <json>   for an ErrorResponse
A "BYE" line closes the session without a reply. Lines longer than
MAX_LINE bytes are discarded and answered with an error.
"""

import socketserver

from handlers.message_handler import MessageHandler
from models.response import UNKNOWN_FORMAT_ERROR, ErrorResponse, ServerResponse
from utils.codec import encode_response
from utils.logger import get_logger

logger = get_logger(__name__)

ENCODING = "utf-8"
MAX_LINE = 64 * 1024


def render_envelope(response: ServerResponse) -> str:
    """Wrap a response in the outer OK/ERR envelope."""
    tag = "ERR" if response.is_error() else "OK"
    return f"{tag} {encode_response(response)}"


class ProtocolHandler(socketserver.StreamRequestHandler):
    """Serves one client session until BYE or disconnect."""

    def handle(self) -> None:
        message_handler: MessageHandler = self.server.message_handler
        logger.info(f"Client connected: {self.client_address}")

        while True:
            raw = self.rfile.readline(MAX_LINE)
            if not raw:
                break
            if len(raw) == MAX_LINE and not raw.endswith(b"\n"):
                logger.warning(f"Line over {MAX_LINE} bytes from {self.client_address}, discarded")
                self._discard_rest_of_line()
                response = ErrorResponse(UNKNOWN_FORMAT_ERROR)
            else:
                message = raw.decode(ENCODING, errors="replace").rstrip("\r\n")
                response = message_handler.handle_message(message)
                if response is None:
                    break
            try:
                self.wfile.write((render_envelope(response) + "\n").encode(ENCODING))
                self.wfile.flush()
            except OSError as e:
                logger.warning(f"Failed to reply to {self.client_address}: {e}")
                break

        logger.info(f"Client disconnected: {self.client_address}")

    def _discard_rest_of_line(self) -> None:
        while True:
            chunk = self.rfile.readline(MAX_LINE)
            if not chunk or chunk.endswith(b"\n"):
                return


class AccountServer(socketserver.ThreadingTCPServer):
    """Threaded TCP server sharing one MessageHandler across sessions."""

    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, address: tuple[str, int], message_handler: MessageHandler) -> None:
        self.message_handler = message_handler
        super().__init__(address, ProtocolHandler)
