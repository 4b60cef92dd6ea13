"""WebSocket progress streaming for book sessions."""
from .connection_manager import ConnectionManager

__all__ = [
    'ConnectionManager'
]
