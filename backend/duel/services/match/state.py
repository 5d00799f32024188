"""Per-match game state, the deal procedure and the client snapshot."""

import random
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Optional

from .catalog import Card, Catalog

PLAYING = 'playing'
COMPARING = 'comparing'
GAME_OVER = 'game_over'

# Round resolution sub-states, only set while phase == COMPARING
AWAITING_REVEAL = 'awaiting_reveal'
REVEALED = 'revealed'
RESOLVED = 'resolved'

SEATS = (1, 2)


def other_seat(seat: int) -> int:
    return 2 if seat == 1 else 1


@dataclass
class Comparison:
    attribute: str
    value1: float
    value2: float
    winning_seat: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'attribute': self.attribute,
            'player1Value': self.value1,
            'player2Value': self.value2,
            'winner': self.winning_seat,
        }


@dataclass
class GameState:
    stocks: Dict[int, Deque[Card]]
    current_seat: int
    phase: str = PLAYING
    pot: Deque[Card] = field(default_factory=deque)
    comparison: Optional[Comparison] = None
    reveal: bool = False
    winner: Optional[int] = None
    round_no: int = 0
    round_stage: Optional[str] = None

    def top_card(self, seat: int) -> Optional[Card]:
        stock = self.stocks[seat]
        return stock[0] if stock else None

    def card_count(self) -> int:
        return len(self.stocks[1]) + len(self.stocks[2]) + len(self.pot)


def deal(catalog: Catalog, rng: Optional[random.Random] = None) -> GameState:
    """Shuffle the full deck and split it alternately between the two seats.

    Seat 1 receives the even positions, so with an odd deck it holds one card
    more than seat 2. The starting seat is drawn from the same random source.
    """
    rng = rng or random.Random()
    cards = list(catalog.cards)
    rng.shuffle(cards)
    return GameState(
        stocks={1: deque(cards[0::2]), 2: deque(cards[1::2])},
        current_seat=rng.choice(SEATS),
    )


def serialize_state(state: GameState) -> Dict[str, Any]:
    """Project the state for clients without exposing either full stock."""
    card1 = state.top_card(1)
    card2 = state.top_card(2)
    return {
        'gamePhase': state.phase,
        'currentPlayer': state.current_seat,
        'player1Card': card1.to_dict() if card1 else None,
        'player2Card': card2.to_dict() if card2 else None,
        'player1CardCount': len(state.stocks[1]),
        'player2CardCount': len(state.stocks[2]),
        'potCount': len(state.pot),
        'currentComparison': state.comparison.to_dict() if state.comparison else None,
        'roundWinner': state.comparison.winning_seat if state.comparison else None,
        'gameWinner': state.winner,
        'showResults': state.reveal,
    }
