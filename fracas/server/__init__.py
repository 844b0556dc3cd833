"""HTTP/WebSocket API for local Fracas games."""
