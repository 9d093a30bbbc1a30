import threading
from typing import Any, Set

from flask_socketio import SocketIO


class SocketIOGateway:
    """Outbound side of the socket.io transport.

    ``send`` targets a single connection handle (the socket.io sid);
    ``broadcast`` reaches every connection on the namespace. Delivery is
    fire-and-forget: a handle that has gone away simply misses the event.
    """

    def __init__(self, socketio: SocketIO, namespace: str = '/') -> None:
        self.socketio = socketio
        self.namespace = namespace
        self._connections: Set[str] = set()
        self._lock = threading.Lock()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def register(self, handle: str) -> None:
        with self._lock:
            self._connections.add(handle)

    def unregister(self, handle: str) -> None:
        with self._lock:
            self._connections.discard(handle)

    def send(self, handle: str, event: str, payload: Any = None) -> None:
        self.socketio.emit(event, payload, to=handle, namespace=self.namespace)

    def broadcast(self, event: str, payload: Any = None) -> None:
        self.socketio.emit(event, payload, namespace=self.namespace)
