"""ASCII grid rendering.

Renders engine snapshots as text, one cell per column, with row and column
headers so players can read off coordinates.
"""

from typing import Optional


class MapRenderer:
    """Renders a game snapshot as an ASCII map."""

    # Symbols for player ids 0-9; higher ids wrap around
    OWNER_SYMBOLS = "0123456789"

    def render(self, snapshot: dict, highlight: Optional[list[tuple[int, int]]] = None) -> str:
        """Render the grid from a snapshot.

        Output format (5 chars per cell):
              0    1    2    3
          0   .    .    .    .
          1   .   0@5   .   1:3
        ...

        Legend:
        - ' . ' = unowned cell
        - '0@5' = capital of player 0 with 5 troops (troops capped at 9 as '+')
        - '0:3' = cell of player 0 with 3 troops
        - '[x]' brackets mark the selected cell
        - ' * ' = legal attack target for the selected cell

        Args:
            snapshot: Dictionary produced by GameEngine.snapshot()
            highlight: Positions to mark as attack targets

        Returns:
            Multi-line ASCII art string representing the grid
        """
        targets = set(highlight or [])
        selected = snapshot.get("selectedCell")
        selected_pos = (selected["x"], selected["y"]) if selected else None

        width = snapshot["width"]
        header = "    " + "".join(f"{x:^5}" for x in range(width))
        lines = [header.rstrip()]

        for y, row in enumerate(snapshot["grid"]):
            cells = []
            for cell in row:
                position = (cell["x"], cell["y"])
                text = self._render_cell(cell, position in targets)
                if position == selected_pos:
                    cells.append(f"[{text}]")
                else:
                    cells.append(f" {text} ")
            lines.append(f"{y:>3} " + "".join(cells).rstrip())

        return "\n".join(lines)

    def _render_cell(self, cell: dict, is_target: bool) -> str:
        """Render a single cell as a 3-character string."""
        if cell["owner"] < 0:
            return " * " if is_target else " . "

        symbol = self.OWNER_SYMBOLS[cell["owner"] % len(self.OWNER_SYMBOLS)]
        marker = "@" if cell["isCapital"] else ":"
        troops = str(cell["troops"]) if cell["troops"] <= 9 else "+"
        text = f"{symbol}{marker}{troops}"
        return text.replace(marker, "*") if is_target else text

    def render_players(self, snapshot: dict) -> str:
        """Render the player table.

        Example:
            > 0 Player 1   money 10  capitals 1  cells 1  troops 5
              1 AI 1       money 10  capitals 1  cells 1  troops 5  [out]
        """
        lines = []
        for player in snapshot["players"]:
            marker = ">" if player["id"] == snapshot["currentPlayer"] else " "
            status = "" if player["isActive"] else "  [out]"
            lines.append(
                f"{marker} {player['id']} {player['name']:<10} "
                f"money {player['money']:<3} capitals {player['capitals']:<2} "
                f"cells {player['totalCells']:<3} troops {player['totalTroops']}{status}"
            )
        return "\n".join(lines)

    def render_status(self, snapshot: dict) -> str:
        """One-line status bar: turn, player to move, moves left, message."""
        current = snapshot["players"][snapshot["currentPlayer"]]
        return (
            f"Turn {snapshot['turn']} | {current['name']} | "
            f"moves {snapshot['movesAvailable']} | {snapshot['message']}"
        )
