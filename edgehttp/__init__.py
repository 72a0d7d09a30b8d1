"""HTTP/1.x headers, connection and body type resolution, and WebSocket upgrade helpers."""

__version__ = "0.5.1"

__all__ = ["connection", "errors", "headers", "method", "ws"]