"""Realtime room/vote session core."""
from poker.realtime.gateway import Gateway, InMemoryGateway, SocketIOGateway
from poker.realtime.sessions import Connection, RoomSessionManager
from poker.realtime.engine import VoteEngine
from poker.realtime.dispatcher import CommandDispatcher

__all__ = [
    "Gateway",
    "InMemoryGateway",
    "SocketIOGateway",
    "Connection",
    "RoomSessionManager",
    "VoteEngine",
    "CommandDispatcher",
]
