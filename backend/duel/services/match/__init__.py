"""Match domain services: catalog, matchmaking, rooms and round timers.

Pure(ish) game logic imported by the Socket.IO handlers, keeping transport
concerns separated from core game mechanics.
"""

from .catalog import Catalog, load_catalog
from .lobby import GAME_STATE, MATCH_FOUND, Lobby
from .scheduler import ManualScheduler, SocketIOScheduler

__all__ = [
    'Catalog',
    'GAME_STATE',
    'Lobby',
    'MATCH_FOUND',
    'ManualScheduler',
    'SocketIOScheduler',
    'load_catalog',
]
