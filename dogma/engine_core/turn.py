"""Turn - whose turn it is and which of their two actions comes next."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Turn:
    """
    Two actions per turn.

    ``is_second_action`` starts True by default so the first player's first
    turn has a single action.
    """
    num_players: int
    current_player: int = 0
    is_second_action: bool = True
    action_index: int = 0

    def next(self) -> tuple[int, int]:
        """Advance one action. Returns (previous player, current player)."""
        previous = self.current_player
        if self.is_second_action:
            self.current_player = (self.current_player + 1) % self.num_players
        self.is_second_action = not self.is_second_action
        self.action_index += 1
        return previous, self.current_player

    @property
    def turn_changed(self) -> bool:
        """True right after ``next`` moved to a new player."""
        return not self.is_second_action
