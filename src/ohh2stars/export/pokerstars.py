from dataclasses import dataclass
from typing import Dict, List, Optional

from loguru import logger

from ..domain.models import Action, HandRecord, Round
from .formatting import format_card, format_cards, format_money, format_timestamp

POST_SB = "Post SB"
POST_BB = "Post BB"
POST_ANTE = "Post Ante"
DEALT_CARDS = "Dealt Cards"
BET = "Bet"
RAISE = "Raise"

BLIND_ACTIONS = (POST_SB, POST_BB, POST_ANTE)
AGGRESSIVE_ACTIONS = (BET, RAISE)

UNKNOWN_NAME = "Unknown"
UNKNOWN_SEAT = 0


@dataclass(frozen=True)
class BetContext:
    """Where a Bet/Raise stands relative to the betting before it on its street."""
    prior: float
    total: float
    had_prior_bet: bool


class PokerStarsWriter:
    CLIENT_NAME = "PokerStars"
    BOARD_STREETS = ('Flop', 'Turn', 'River')
    BLIND_LABELS = {POST_SB: 'small blind', POST_BB: 'big blind', POST_ANTE: 'the ante'}
    ALLIN_SUFFIX = " and is all-in"

    # ─── Lookups ───────────────────────────────────────────

    @staticmethod
    def name_by_id(hand: HandRecord, pid: str) -> str:
        p = hand.player(pid)
        return p.name if p else UNKNOWN_NAME

    @staticmethod
    def seat_by_id(hand: HandRecord, pid: str) -> int:
        p = hand.player(pid)
        return p.seat if p else UNKNOWN_SEAT

    # ─── Hand preamble ─────────────────────────────────────

    def header(self, hand: HandRecord) -> str:
        sb = format_money(hand.small_blind_amount)
        bb = format_money(hand.big_blind_amount)
        ts = format_timestamp(hand.start_date_utc)
        return (
            f"{self.CLIENT_NAME} Hand #{hand.game_number}: Hold'em No Limit "
            f"({sb}/{bb} {hand.currency_code}) - {ts} UTC"
        )

    def table_line(self, hand: HandRecord) -> str:
        return f"Table '{hand.table_name}' {hand.table_size}-max Seat #{hand.dealer_seat} is the button"

    def seats(self, hand: HandRecord) -> List[str]:
        return [
            f"Seat {p.seat}: {p.name} ({format_money(p.starting_stack)} in chips)"
            for p in sorted(hand.players, key=lambda p: p.seat)
        ]

    # ─── Streets ───────────────────────────────────────────

    def street_header(self, street: str, cards: List[str], board: List[str]) -> str:
        """Header for ``street``; ``cards`` are this round's, ``board`` is everything dealt so far."""
        if street == 'Preflop':
            return "*** HOLE CARDS ***"
        if street == 'Flop':
            return f"*** FLOP *** [{format_cards(cards)}]"
        if street == 'Turn':
            if len(board) >= 4:
                return f"*** TURN *** [{format_cards(board[:3])}] [{format_card(board[3])}]"
            return f"*** TURN *** [{format_cards(cards)}]"
        if street == 'River':
            if len(board) >= 5:
                return f"*** RIVER *** [{format_cards(board[:4])}] [{format_card(board[4])}]"
            return f"*** RIVER *** [{format_cards(cards)}]"
        if street == 'Showdown':
            return "*** SHOW DOWN ***"
        return ""

    def action_line(self, hand: HandRecord, a: Action, tracker: Dict[int, BetContext]) -> Optional[str]:
        if a.player_id is None:
            return None

        n = self.name_by_id(hand, a.player_id)
        amt = a.amount if a.amount is not None else 0.0
        allin = self.ALLIN_SUFFIX if a.is_allin else ""
        kind = a.action

        if kind in BLIND_ACTIONS:
            return f"{n}: posts {self.BLIND_LABELS[kind]} {format_money(amt)}"
        if kind == DEALT_CARDS:
            if hand.hero_player_id is not None and hand.hero_player_id != a.player_id:
                return None
            if a.cards and len(a.cards) >= 2:
                return f"Dealt to {n} [{format_card(a.cards[0])} {format_card(a.cards[1])}]"
            return None
        if kind == 'Fold':
            return f"{n}: folds"
        if kind == 'Check':
            return f"{n}: checks"
        if kind == 'Call':
            return f"{n}: calls {format_money(amt)}{allin}"
        if kind in AGGRESSIVE_ACTIONS:
            ctx = tracker.get(a.action_number)
            # a Raise only needs a baseline; a Bet also needs an earlier bet this street
            if ctx is not None and ctx.prior > 0 and (kind == RAISE or ctx.had_prior_bet):
                return f"{n}: raises {format_money(amt - ctx.prior)} to {format_money(amt)}{allin}"
            return f"{n}: bets {format_money(amt)}{allin}"
        if kind == 'Shows Cards':
            if a.cards and len(a.cards) >= 2:
                return f"{n}: shows [{format_card(a.cards[0])} {format_card(a.cards[1])}]"
            return f"{n}: shows"
        if kind == 'Muck':
            return f"{n}: mucks hand"

        logger.debug(f"hand {hand.game_number}: skipping action {kind!r} (#{a.action_number})")
        return None

    def street_lines(self, hand: HandRecord, rnd: Round, board: List[str]) -> List[str]:
        """Narrate one round. Blinds, then deals, then the rest, whatever order the source used."""
        tracker: Dict[int, BetContext] = {}
        last_bet = 0.0
        has_bet = False

        blind_lines: List[str] = []
        dealt_lines: List[str] = []
        other_lines: List[str] = []

        for a in rnd.actions:
            if a.amount is not None:
                if a.action in BLIND_ACTIONS:
                    last_bet = a.amount
                elif a.action in AGGRESSIVE_ACTIONS:
                    tracker[a.action_number] = BetContext(prior=last_bet, total=a.amount, had_prior_bet=has_bet)
                    last_bet = a.amount
                    has_bet = True

            line = self.action_line(hand, a, tracker)
            if line is None:
                continue
            if a.action in BLIND_ACTIONS:
                blind_lines.append(line)
            elif a.action == DEALT_CARDS:
                dealt_lines.append(line)
            else:
                other_lines.append(line)

        header = self.street_header(rnd.street, list(rnd.cards), board)
        header_lines = [header] if header else []

        if rnd.street == 'Preflop':
            return blind_lines + header_lines + dealt_lines + other_lines
        return header_lines + blind_lines + dealt_lines + other_lines

    # ─── Summary ───────────────────────────────────────────

    def summary(self, hand: HandRecord) -> str:
        if not hand.pots:
            return "*** SUMMARY ***\nTotal pot $0.00 | Rake $0.00"

        # only the first pot is summarized
        pot = hand.pots[0]
        lines = [
            "*** SUMMARY ***",
            f"Total pot {format_money(pot.amount)} | Rake {format_money(pot.rake)}",
        ]

        board = [c for r in hand.rounds if r.street in self.BOARD_STREETS for c in r.cards]
        if board:
            lines.append(f"Board [{format_cards(board)}]")

        for w in pot.player_wins:
            seat = self.seat_by_id(hand, w.player_id)
            name = self.name_by_id(hand, w.player_id)
            lines.append(f"Seat {seat}: {name} collected ({format_money(w.win_amount)})")

        return "\n".join(lines)

    # ─── Whole hand ────────────────────────────────────────

    def write(self, hand: HandRecord) -> str:
        lines = [self.header(hand), self.table_line(hand)]
        lines.extend(self.seats(hand))

        board: List[str] = []
        for rnd in hand.rounds:
            board.extend(rnd.cards)
            lines.extend(self.street_lines(hand, rnd, board))

        lines.append(self.summary(hand))
        return "\n".join(lines)


def render(hand: HandRecord) -> str:
    return PokerStarsWriter().write(hand)
