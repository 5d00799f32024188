"""Game rules: attribute comparison, round resolution and forfeits.

These functions mutate a GameState in place and never schedule anything.
Callers decide when each step runs (see resolution.py).
"""

from typing import Optional

from .catalog import AttributeRule, Catalog, Direction
from .rooms import MatchSession
from .state import (
    AWAITING_REVEAL, COMPARING, GAME_OVER, PLAYING, RESOLVED, REVEALED,
    Comparison, GameState, other_seat,
)


def compare(rule: AttributeRule, value1, value2) -> Optional[int]:
    """Return the winning seat for one attribute, or None on a tie."""
    if value1 == value2:
        return None
    if rule.direction is Direction.MAXIMIZE:
        return 1 if value1 > value2 else 2
    return 1 if value1 < value2 else 2


def choose_attribute(session: MatchSession, participant, attribute: str,
                     catalog: Catalog) -> Optional[Comparison]:
    """Open a comparison on ``attribute`` for the seat whose turn it is.

    Any failed precondition (wrong phase, out of turn, empty stock, unknown
    attribute) leaves the state untouched and returns None.
    """
    state = session.state
    if state.phase != PLAYING:
        return None
    if session.seat_of(participant) != state.current_seat:
        return None
    card1 = state.top_card(1)
    card2 = state.top_card(2)
    if card1 is None or card2 is None:
        return None
    rule = catalog.rule(attribute)
    if rule is None:
        return None

    value1 = card1.attrs[attribute]
    value2 = card2.attrs[attribute]
    state.comparison = Comparison(
        attribute=attribute,
        value1=value1,
        value2=value2,
        winning_seat=compare(rule, value1, value2),
    )
    state.phase = COMPARING
    state.reveal = False
    state.round_no += 1
    state.round_stage = AWAITING_REVEAL
    return state.comparison


def reveal(state: GameState) -> None:
    state.reveal = True
    state.round_stage = REVEALED


def _check_game_over(state: GameState) -> bool:
    count1 = len(state.stocks[1])
    count2 = len(state.stocks[2])
    if count1 and count2:
        return False
    state.phase = GAME_OVER
    if count1 > count2:
        state.winner = 1
    elif count2 > count1:
        state.winner = 2
    else:
        state.winner = None
    return True


def resolve_round(state: GameState) -> Optional[int]:
    """Apply the open comparison to the stocks and close the round.

    The played cards go first in the pile, followed by whatever the pot held.
    A decisive winner takes the pile and the next turn; a tie moves the pile
    into the pot and keeps the turn where it was. Returns the round winner.
    """
    winning_seat = state.comparison.winning_seat
    pile = [state.stocks[1].popleft(), state.stocks[2].popleft()]
    pile.extend(state.pot)
    state.pot.clear()

    if winning_seat is None:
        state.pot.extend(pile)
    else:
        state.stocks[winning_seat].extend(pile)
        state.current_seat = winning_seat

    if not _check_game_over(state):
        state.phase = PLAYING
    state.comparison = None
    state.reveal = False
    state.round_stage = RESOLVED
    return winning_seat


def forfeit(state: GameState, leaving_seat: int) -> None:
    """End the match in favour of the seat that stayed."""
    state.phase = GAME_OVER
    state.winner = other_seat(leaving_seat)
    state.comparison = None
    state.reveal = False
    state.round_stage = None
