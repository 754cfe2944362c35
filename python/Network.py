import socket
import json


# ==========================================
# OUTPUT STREAM
# ==========================================
class NetworkBridge:
    """
    Publishes one JSON line per processed frame to a single renderer client.
    Never raises into the frame loop.
    """

    def __init__(self, host="127.0.0.1", port=5555):
        self.addr = (host, port)
        self.sock = None
        self.conn = None
        self._setup_server()

    @classmethod
    def from_config(cls, cfg):
        n = (cfg or {}).get("network", {})
        return cls(n.get("host", "127.0.0.1"), int(n.get("port", 5555)))

    def _setup_server(self):
        try:
            self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self.sock.bind(self.addr)
            self.sock.listen(1)
            self.sock.setblocking(False)  # Non-blocking accept
            print(f"[NET] Listening on {self.addr}...")
        except OSError as e:
            print(f"[NET] Init Error: {e}")
            self.sock = None

    def update(self):
        """Check for new connections non-blockingly"""
        if self.conn is None and self.sock is not None:
            try:
                self.conn, addr = self.sock.accept()
                self.conn.setblocking(True)  # Blocking sends
                print(f"[NET] Connected: {addr}")
            except BlockingIOError:
                pass

    def send_event(self, event_data):
        if not self.conn:
            return False
        try:
            msg = json.dumps(event_data) + "\n"
            self.conn.sendall(msg.encode("utf-8"))
            return True
        except OSError:
            print("[NET] Client disconnected")
            self.conn.close()
            self.conn = None
            return False

    def close(self):
        if self.conn is not None:
            self.conn.close()
            self.conn = None
        if self.sock is not None:
            self.sock.close()
            self.sock = None
