"""FastAPI server for Fracas.

Provides an HTTP/WebSocket API that hosts local games against AI
opponents. Each session owns one GameEngine; clients poll the state
endpoint or subscribe to the WebSocket for snapshots after every change.
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from .schemas.requests import CellRequest, CreateGameRequest, PurchaseRequest
from .schemas.responses import CreateGameResponse, GameStateResponse
from .session import GameSession, GameSessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Fracas server starting...")
    yield
    logger.info("Fracas server shutting down...")
    await sessions.cleanup_all()


app = FastAPI(
    title="Fracas API",
    description="Web API for local territory-conquest games against AI opponents",
    version="1.0.0",
    lifespan=lifespan,
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_session(game_id: str) -> GameSession:
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _state_response(session: GameSession) -> GameStateResponse:
    state = session.get_state()
    return GameStateResponse(
        gameId=session.id,
        gameState=state["gameState"],
        message=state["message"],
        winner=state["winner"],
        state=state,
    )


async def _apply(session: GameSession, operation: Callable[[], None]) -> GameStateResponse:
    """Run one engine operation under the session lock and broadcast the result.

    Engine-level rejections (illegal move, not enough money) are not errors
    here: they come back as a normal response carrying the engine message.
    """
    async with session.lock:
        try:
            operation()
        except ValueError as e:
            # Raised for positions outside the grid
            raise HTTPException(status_code=400, detail=str(e))
        response = _state_response(session)

    await session.broadcast_state()
    return response


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Fracas",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new game.

    Example:
        POST /api/games
        {"gridWidth": 10, "gridHeight": 10, "humanPlayers": 1, "aiPlayers": 3, "seed": 42}
    """
    try:
        settings = request.to_settings()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session = sessions.create_session(settings)
    return CreateGameResponse(gameId=session.id, seed=settings.seed, state=session.get_state())


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
async def get_game_state(game_id: str):
    """Get current game state."""
    return _state_response(_get_session(game_id))


@app.post("/api/games/{game_id}/click", response_model=GameStateResponse)
async def click_cell(game_id: str, request: CellRequest):
    """Click a cell: select, reselect, deselect, or attack.

    Example:
        POST /api/games/game-abc123/click
        {"x": 3, "y": 4}
    """
    session = _get_session(game_id)
    return await _apply(session, lambda: session.engine.on_cell_click((request.x, request.y)))


@app.post("/api/games/{game_id}/end-turn", response_model=GameStateResponse)
async def end_turn(game_id: str):
    """End the current turn. AI players move before this returns."""
    session = _get_session(game_id)
    return await _apply(session, session.engine.end_turn)


@app.post("/api/games/{game_id}/purchase", response_model=GameStateResponse)
async def purchase_troops(game_id: str, request: PurchaseRequest):
    """Buy troops for one of the current player's cells."""
    session = _get_session(game_id)
    return await _apply(
        session,
        lambda: session.engine.purchase_troops((request.x, request.y), request.count),
    )


@app.post("/api/games/{game_id}/upgrade", response_model=GameStateResponse)
async def upgrade_to_capital(game_id: str, request: CellRequest):
    """Upgrade one of the current player's cells to a capital."""
    session = _get_session(game_id)
    return await _apply(
        session, lambda: session.engine.upgrade_to_capital((request.x, request.y))
    )


@app.post("/api/games/{game_id}/reload", response_model=GameStateResponse)
async def reload_board(game_id: str):
    """Start the game over with the same settings."""
    session = _get_session(game_id)
    return await _apply(session, session.engine.reload_board)


@app.delete("/api/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    else:
        raise HTTPException(status_code=404, detail="Game not found")


# ============================================
# WEBSOCKET ENDPOINT
# ============================================


@app.websocket("/ws/games/{game_id}")
async def websocket_endpoint(websocket: WebSocket, game_id: str):
    """WebSocket connection for real-time game updates.

    Clients receive:
    - CONNECTED: Initial connection confirmation with the current state
    - GAME_STATE: A fresh snapshot after every change
    - PONG: Reply to a PING keepalive
    """
    session = sessions.get(game_id)
    if not session:
        await websocket.close(code=1008, reason="Game not found")
        return

    await websocket.accept()
    session.add_connection(websocket)

    try:
        await websocket.send_json(
            {"type": "CONNECTED", "gameId": game_id, "state": session.get_state()}
        )

        while True:
            data = await websocket.receive_json()

            # Handle ping/pong for keepalive
            if data.get("type") == "PING":
                await websocket.send_json({"type": "PONG"})

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected from game {game_id}")
    except Exception as e:
        logger.error(f"WebSocket error in game {game_id}: {e}", exc_info=True)
    finally:
        session.remove_connection(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
