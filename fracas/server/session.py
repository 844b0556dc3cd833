"""Game session management for local play against AI opponents."""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field

from fastapi import WebSocket

from ..engine.game_engine import GameEngine
from ..models.settings import GameSettings

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """One game hosted by the server.

    Wraps a GameEngine, serialises access to it, and fans state snapshots
    out to connected WebSocket clients.
    """

    id: str
    engine: GameEngine
    connections: list[WebSocket] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def get_state(self) -> dict:
        """Snapshot of the session's game."""
        return self.engine.snapshot()

    async def broadcast(self, message: dict):
        """Send message to all connected WebSocket clients.

        Args:
            message: Dictionary to send as JSON
        """
        disconnected = []
        for ws in self.connections:
            try:
                await ws.send_json(message)
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                disconnected.append(ws)

        # Remove disconnected clients
        for ws in disconnected:
            self.connections.remove(ws)

    async def broadcast_state(self):
        await self.broadcast({"type": "GAME_STATE", "gameId": self.id, "state": self.get_state()})

    def add_connection(self, websocket: WebSocket):
        """Add a WebSocket connection to this session."""
        self.connections.append(websocket)
        logger.info(f"WebSocket connected to game {self.id}, total: {len(self.connections)}")

    def remove_connection(self, websocket: WebSocket):
        """Remove a WebSocket connection from this session."""
        if websocket in self.connections:
            self.connections.remove(websocket)
            logger.info(
                f"WebSocket disconnected from game {self.id}, remaining: {len(self.connections)}"
            )


class GameSessionManager:
    """Manages all active game sessions.

    Sessions live in memory only and are lost when the server stops.
    """

    def __init__(self):
        self.sessions: dict[str, GameSession] = {}

    def create_session(self, settings: GameSettings) -> GameSession:
        """Create and initialize a new game.

        Args:
            settings: Game configuration

        Returns:
            Newly created GameSession with the game already running
        """
        game_id = f"game-{uuid.uuid4().hex[:8]}"

        engine = GameEngine(settings)
        engine.initialize_game()

        session = GameSession(id=game_id, engine=engine)
        self.sessions[game_id] = session

        logger.info(
            f"Created game {game_id}: {settings.effective_width}x{settings.effective_height}, "
            f"humans={settings.human_players}, ai={settings.ai_players}, seed={settings.seed}"
        )

        return session

    def get(self, game_id: str) -> GameSession | None:
        """Get a game session by ID.

        Args:
            game_id: Game session ID

        Returns:
            GameSession if found, None otherwise
        """
        return self.sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Delete a game session.

        Args:
            game_id: Game session ID

        Returns:
            True if deleted, False if not found
        """
        if game_id in self.sessions:
            del self.sessions[game_id]
            logger.info(f"Deleted game {game_id}")
            return True
        return False

    async def cleanup_all(self):
        """Clean up all sessions (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} game sessions")
        self.sessions.clear()
