"""Authoritative game engine.

The engine owns the grid, the players, and the turn/selection state, and is
the only thing that mutates them. Operations are synchronous and run to
completion; observers only ever see the state between operations.

State machine:
    LOADING -> RUNNING -> GAME_OVER

Read accessors return copies. Presentation layers that want a single
consistent view should use snapshot().
"""

import copy
import logging
from typing import Optional, Union

from ..models.cell import Cell
from ..models.game_state import GameState
from ..models.player import Player
from ..models.settings import GameSettings
from ..utils.constants import UNOWNED
from ..utils.rng import GameRNG
from ..utils.snapshot import build_snapshot
from .ai import ScriptedAI
from .combat import can_attack, execute_attack
from .economy import (
    TransactionError,
    apply_turn_income,
    purchase_troops,
    update_player_stats,
    upgrade_to_capital,
)
from .grid import adjacent_cells, build_board, build_fallback_board, get_cell, iter_cells
from .victory import check_game_over, check_player_defeat, game_over_message

logger = logging.getLogger(__name__)

# Anything that identifies a cell: a Cell (possibly a snapshot copy) or (x, y)
CellRef = Union[Cell, tuple[int, int]]


class GameEngine:
    """Turn-based territory conquest engine.

    Example:
        engine = GameEngine(GameSettings(seed=7))
        engine.initialize_game()
        engine.on_cell_click((2, 3))  # select
        engine.on_cell_click((3, 3))  # attack
        engine.end_turn()
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        rng: Optional[GameRNG] = None,
        ai: Optional[ScriptedAI] = None,
    ):
        """Create an engine in the LOADING state.

        Args:
            settings: Game configuration (defaults if omitted)
            rng: Random source; seeded from settings.seed if omitted
            ai: AI controller used for every AI seat
        """
        self.settings = settings or GameSettings()
        self.rng = rng or GameRNG(self.settings.seed)
        self.ai = ai or ScriptedAI()

        self._game_state = GameState.LOADING
        self._grid: list[list[Cell]] = []
        self._players: list[Player] = []
        self._current_player_index = 0
        self._selected_cell: Optional[Cell] = None
        self._moves_available = 0
        self._message = ""
        self._turn = 0
        self._events: list[dict] = []
        self._ai_running = False

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    @property
    def game_state(self) -> GameState:
        return self._game_state

    @property
    def is_running(self) -> bool:
        return self._game_state == GameState.RUNNING

    @property
    def grid(self) -> list[list[Cell]]:
        """Deep copy of the grid, indexed grid[y][x]."""
        return copy.deepcopy(self._grid)

    @property
    def players(self) -> list[Player]:
        """Deep copy of the player list."""
        return copy.deepcopy(self._players)

    @property
    def current_player_index(self) -> int:
        return self._current_player_index

    @property
    def current_player(self) -> Player:
        return copy.copy(self._current_player())

    @property
    def selected_cell(self) -> Optional[Cell]:
        return copy.copy(self._selected_cell) if self._selected_cell else None

    @property
    def moves_available(self) -> int:
        return self._moves_available

    @property
    def message(self) -> str:
        return self._message

    @property
    def turn(self) -> int:
        """Number of turns started so far (1 for the opening turn)."""
        return self._turn

    @property
    def events(self) -> list[dict]:
        """Attack and elimination records from the most recent operation."""
        return copy.deepcopy(self._events)

    @property
    def winner(self) -> Optional[Player]:
        """Sole surviving player once the game is over, else None."""
        if self._game_state != GameState.GAME_OVER:
            return None
        _, winner = check_game_over(self._players)
        return copy.copy(winner) if winner else None

    @property
    def width(self) -> int:
        return len(self._grid[0]) if self._grid else 0

    @property
    def height(self) -> int:
        return len(self._grid)

    def cell_at(self, x: int, y: int) -> Cell:
        """Copy of the cell at (x, y).

        Raises:
            ValueError: If (x, y) lies outside the grid
        """
        return copy.copy(get_cell(self._grid, x, y))

    def snapshot(self) -> dict:
        """Fully copied, JSON-ready view of the whole game."""
        return build_snapshot(
            game_state=self._game_state.value,
            grid=self._grid,
            players=self._players,
            current_player_index=self._current_player_index,
            selected_cell=self._selected_cell,
            moves_available=self._moves_available,
            message=self._message,
            turn=self._turn,
            winner=self.winner,
            events=self._events,
            settings=self.settings,
        )

    # =========================================================================
    # GAME SETUP
    # =========================================================================

    def initialize_game(self, settings: Optional[GameSettings] = None) -> None:
        """Start a new game.

        Creates players and grid, places one capital per player, and hands
        the first turn to player 0. If setup fails the engine falls back to a
        fixed default board, so there is always something to render.

        Args:
            settings: New configuration; keeps the current one if omitted
        """
        if settings is not None:
            self.settings = settings
            if settings.seed is not None:
                self.rng = GameRNG(settings.seed)

        self._game_state = GameState.LOADING
        self._selected_cell = None
        self._events = []

        try:
            self._grid, self._players = build_board(self.settings, self.rng)
            update_player_stats(self._grid, self._players)
            self._message = f"Game started! {self._players[0].name}'s turn"
        except Exception:
            logger.exception("Failed to initialize game, using default board")
            self._grid, self._players = build_fallback_board()
            update_player_stats(self._grid, self._players)
            self._message = "Error initializing game. Using default board."

        self._current_player_index = 0
        self._moves_available = self.settings.troops_per_turn
        self._turn = 1
        self._game_state = GameState.RUNNING

        logger.info(f"Game started: {self.width}x{self.height} grid, {len(self._players)} players")

        self._run_ai_turns()
        self._check_invariants()

    def reload_board(self) -> None:
        """Start over with the current settings."""
        self.initialize_game()

    def load_board(
        self,
        grid: list[list[Cell]],
        players: list[Player],
        current_player_index: int = 0,
    ) -> None:
        """Start a running game on an explicit board.

        Used for scripted scenarios and tests. The board is copied; players
        are marked active exactly when they own a capital. AI seats do not
        move until the next end_turn.

        Args:
            grid: Rows of cells, indexed grid[y][x]
            players: Players whose ids match their list positions
            current_player_index: Player to move first

        Raises:
            ValueError: If the board is malformed
        """
        if not grid or any(len(row) != len(grid[0]) for row in grid):
            raise ValueError("Grid must be a non-empty rectangle")
        for y, row in enumerate(grid):
            for x, cell in enumerate(row):
                if cell.position != (x, y):
                    raise ValueError(f"Cell {cell.position} stored at ({x}, {y})")
                if cell.owner >= len(players):
                    raise ValueError(f"Cell {cell.position} owned by unknown player {cell.owner}")
        for index, player in enumerate(players):
            if player.id != index:
                raise ValueError(f"Player {player.name} has id {player.id} at position {index}")
        if not 0 <= current_player_index < len(players):
            raise ValueError(f"No player with index {current_player_index}")

        self._game_state = GameState.LOADING
        self._grid = copy.deepcopy(grid)
        self._players = copy.deepcopy(players)
        update_player_stats(self._grid, self._players)
        for player in self._players:
            player.is_active = player.capitals > 0

        self._current_player_index = current_player_index
        self._selected_cell = None
        self._events = []
        self._moves_available = self.settings.troops_per_turn
        self._turn = 1
        self._message = f"{self._current_player().name}'s turn"
        self._game_state = GameState.RUNNING
        self._check_invariants()

    # =========================================================================
    # PLAYER OPERATIONS
    # =========================================================================

    def on_cell_click(self, cell: CellRef) -> None:
        """Handle a human click on a cell.

        - Nothing selected: select an own cell with more than one troop
        - Same cell clicked again: deselect
        - Another own cell: switch selection
        - Attackable cell: attack it and clear the selection
        - Anything else: report an invalid move, keep the selection

        Ignored unless the game is running and a human is to move.

        Args:
            cell: Clicked cell or its (x, y) position
        """
        if not self.is_running or self._current_player().is_ai:
            return

        self._events = []
        target = self._resolve(cell)
        player_id = self._current_player_index
        selected = self._selected_cell

        if selected is None:
            if target.is_owned_by(player_id) and target.troops > 1:
                self._select(target)
            elif target.is_owned_by(player_id):
                self._message = "Not enough troops to move."
            return

        if target is selected:
            self._selected_cell = None
            self._message = "Selection canceled."
        elif target.is_owned_by(player_id):
            self._select(target)
        elif can_attack(selected, target, self._moves_available):
            self._selected_cell = None
            self._execute_attack(selected, target)
        else:
            self._message = "Invalid move! Target too far."

        self._check_invariants()

    def can_attack(self, source: CellRef, target: CellRef) -> bool:
        """Check if source may attack target right now.

        Adjacency (Chebyshev <= 1 and Manhattan <= 2), more than one troop
        on source, moves left this turn, and different owners.
        """
        return can_attack(self._resolve(source), self._resolve(target), self._moves_available)

    def legal_targets(self, source: CellRef) -> list[Cell]:
        """Copies of every cell source may attack right now."""
        origin = self._resolve(source)
        return [
            copy.copy(cell)
            for cell in adjacent_cells(self._grid, origin)
            if can_attack(origin, cell, self._moves_available)
        ]

    def attack(self, source: CellRef, target: CellRef) -> bool:
        """Attack on behalf of the current player without the click flow.

        Used by the AI. The source must belong to the current player and the
        attack must be legal.

        Returns:
            True if the attack was carried out
        """
        if not self.is_running:
            return False

        origin = self._resolve(source)
        destination = self._resolve(target)
        if not origin.is_owned_by(self._current_player_index):
            return False
        if not can_attack(origin, destination, self._moves_available):
            return False

        if not self._ai_running:
            self._events = []
        self._selected_cell = None
        self._execute_attack(origin, destination)
        self._check_invariants()
        return True

    def end_turn(self) -> None:
        """Pass play to the next active player.

        The player whose turn ends collects capital income. If the next
        player is an AI, AI turns are played before this returns.

        With no active human left, an AI can be the current player between
        calls. Its turn is played rather than skipped.
        """
        if not self.is_running:
            return

        self._events = []
        if not self._current_player().is_ai:
            self._advance_turn()
        self._run_ai_turns()
        self._check_invariants()

    def purchase_troops(self, cell: CellRef, count: int) -> None:
        """Buy count troops for one of the current player's cells.

        On failure nothing changes and the message says why.
        """
        if not self.is_running:
            return

        self._events = []
        target = self._resolve(cell)
        player = self._current_player()
        try:
            cost = purchase_troops(player, target, count, self.settings.troop_cost)
        except TransactionError as e:
            self._message = str(e)
            return

        update_player_stats(self._grid, self._players)
        self._message = f"Purchased {count} troops for {cost} money."
        logger.debug(f"{player.name} bought {count} troops at {target.position}")
        self._check_invariants()

    def upgrade_to_capital(self, cell: CellRef) -> None:
        """Turn one of the current player's cells into a capital.

        On failure nothing changes and the message says why.
        """
        if not self.is_running:
            return

        self._events = []
        target = self._resolve(cell)
        player = self._current_player()
        try:
            cost = upgrade_to_capital(player, target, self.settings.capital_cost)
        except TransactionError as e:
            self._message = str(e)
            return

        update_player_stats(self._grid, self._players)
        self._message = f"Upgraded cell to a capital for {cost} money."
        logger.debug(f"{player.name} built a capital at {target.position}")
        self._check_invariants()

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _current_player(self) -> Player:
        assert 0 <= self._current_player_index < len(self._players), (
            f"No player with index {self._current_player_index}"
        )
        return self._players[self._current_player_index]

    def _resolve(self, cell: CellRef) -> Cell:
        """Map a Cell or (x, y) onto the engine's own cell at that position."""
        if isinstance(cell, Cell):
            return get_cell(self._grid, cell.x, cell.y)
        x, y = cell
        return get_cell(self._grid, x, y)

    def _select(self, cell: Cell) -> None:
        self._selected_cell = cell
        self._message = f"Selected {cell.troops} troops. Click destination cell."

    def _execute_attack(self, source: Cell, target: Cell) -> None:
        """Resolve an attack, then apply its consequences.

        Order: combat, elimination of a player who lost their last capital,
        move budget, stats, game-over check, and finally the automatic end
        of turn when the budget is spent.
        """
        defender = target.owner
        event = execute_attack(source, target, self.rng)
        self._events.append(event.to_dict())

        if event.captured:
            self._message = "Attack successful! Captured territory."
            if event.capital_captured and defender != UNOWNED:
                elimination = check_player_defeat(self._grid, self._players, defender)
                if elimination:
                    self._events.append(elimination.to_dict())
                    self._message = f"{elimination.name} was defeated!"
                    logger.info(f"{elimination.name} was eliminated")
        else:
            self._message = f"Attack failed! Lost {event.attacker_losses} troops."

        outcome = "captured" if event.captured else "repelled"
        logger.debug(f"Player {event.attacker} attacked {event.source} -> {event.target}: {outcome}")

        self._moves_available -= 1
        update_player_stats(self._grid, self._players)
        self._check_game_over()

        if self.is_running and self._moves_available <= 0:
            self._advance_turn()
            self._run_ai_turns()

    def _check_game_over(self) -> None:
        over, winner = check_game_over(self._players)
        if over:
            self._game_state = GameState.GAME_OVER
            self._selected_cell = None
            self._message = game_over_message(winner)
            logger.info(self._message)

    def _next_active_index(self) -> int:
        """Index of the next active player, cyclically; stays put if none."""
        count = len(self._players)
        index = (self._current_player_index + 1) % count
        while not self._players[index].is_active and index != self._current_player_index:
            index = (index + 1) % count
        return index

    def _advance_turn(self) -> None:
        """End the current turn and start the next active player's turn."""
        next_index = self._next_active_index()
        self._selected_cell = None

        ending = self._current_player()
        income = apply_turn_income(ending, self.settings.money_per_capital)

        self._current_player_index = next_index
        self._moves_available = self.settings.troops_per_turn
        self._turn += 1
        self._message = f"{self._current_player().name}'s turn"
        logger.debug(
            f"{ending.name} collected {income}; turn {self._turn} goes to {self._current_player().name}"
        )

    def _run_ai_turns(self) -> None:
        """Play AI turns until a human is to move or the game ends.

        Bounded to one AI turn per player seat per call, so games with no
        active human advance one round at a time.
        """
        if self._ai_running:
            return

        self._ai_running = True
        try:
            for _ in range(len(self._players)):
                if not self.is_running or not self._current_player().is_ai:
                    break
                ai_index = self._current_player_index
                self.ai.take_turn(self)
                # Budget exhaustion already advanced the turn
                if self.is_running and self._current_player_index == ai_index:
                    self._advance_turn()
        finally:
            self._ai_running = False

    def _check_invariants(self) -> None:
        for cell in iter_cells(self._grid):
            assert not (cell.is_capital and cell.is_empty()), f"Unowned capital at {cell.position}"
        if self._game_state == GameState.LOADING:
            return
        for player in self._players:
            assert player.is_active == (player.capitals > 0), (
                f"{player.name}: is_active={player.is_active} with {player.capitals} capitals"
            )
