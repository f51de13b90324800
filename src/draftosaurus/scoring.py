"""
Scoring engine
-----

Every enclosure has a ScoringRule (see enclosures.py). Each rule is one small function; SCORING_RULES maps them.
Progressive tables are indexed by occupant count, and counts past the end of a table get the last entry.
"""

from collections import Counter
from typing import Callable, Optional, Sequence

from src.core.shared_types import TIE, EnclosureId, Species
from src.draftosaurus.board import Board
from src.draftosaurus.enclosures import ScoringRule, get_enclosure

MEADOW_PROGRESSION = (0, 2, 4, 8, 12, 18, 24)
SAMENESS_PROGRESSION = (0, 1, 3, 6, 10, 15, 21)
TRIO_POINTS = 7
KING_POINTS = 7
SOLITARY_POINTS = 7
PAIR_POINTS = 5


def _progression(table: tuple[int, ...], count: int) -> int:
    return table[min(count, len(table) - 1)]


# --- SCORING RULES ---
# Every rule gets: the pieces in the enclosure, the opponent's pieces in the same enclosure, and the full board they sit on.
ScoringFn = Callable[[tuple[Species, ...], tuple[Species, ...], Board], int]


def score_meadow_progression(
    pieces: tuple[Species, ...], opponent_pieces: tuple[Species, ...], board: Board
) -> int:
    return _progression(MEADOW_PROGRESSION, len(pieces))


def score_sameness_progression(
    pieces: tuple[Species, ...], opponent_pieces: tuple[Species, ...], board: Board
) -> int:
    return _progression(SAMENESS_PROGRESSION, len(pieces))


def score_trio(
    pieces: tuple[Species, ...], opponent_pieces: tuple[Species, ...], board: Board
) -> int:
    return TRIO_POINTS if len(pieces) == 3 else 0


def score_king_of_the_jungle(
    pieces: tuple[Species, ...], opponent_pieces: tuple[Species, ...], board: Board
) -> int:
    """Ties go to both players (so two empty enclosures would score for both)."""
    return KING_POINTS if len(pieces) >= len(opponent_pieces) else 0


def score_solitary(
    pieces: tuple[Species, ...], opponent_pieces: tuple[Species, ...], board: Board
) -> int:
    """Alone in the enclosure AND the only one of its species on the whole board."""
    if len(pieces) != 1:
        return 0
    return SOLITARY_POINTS if board.species_count(pieces[0]) == 1 else 0


def score_pairs(
    pieces: tuple[Species, ...], opponent_pieces: tuple[Species, ...], board: Board
) -> int:
    pairs = sum(count // 2 for count in Counter(pieces).values())
    return PAIR_POINTS * pairs


def score_per_piece(
    pieces: tuple[Species, ...], opponent_pieces: tuple[Species, ...], board: Board
) -> int:
    return len(pieces)


SCORING_RULES: dict[ScoringRule, ScoringFn] = {
    ScoringRule.MEADOW_PROGRESSION: score_meadow_progression,
    ScoringRule.SAMENESS_PROGRESSION: score_sameness_progression,
    ScoringRule.TRIO: score_trio,
    ScoringRule.KING_OF_THE_JUNGLE: score_king_of_the_jungle,
    ScoringRule.SOLITARY: score_solitary,
    ScoringRule.PAIRS: score_pairs,
    ScoringRule.PER_PIECE: score_per_piece,
}


def score_enclosure(
    enclosure_id: EnclosureId,
    pieces: Sequence[Species],
    opponent_pieces: Sequence[Species] = (),
    board: Optional[Board] = None,
) -> int:
    """
    Points for one enclosure.

    `board` is the rest of this player's board; only the solitary rule looks at it.
    Without one, the enclosure is treated as the only occupied part of the board.
    """
    enclosure = get_enclosure(enclosure_id)
    own = tuple(pieces)
    if board is None:
        board = Board({enclosure.id: own})
    rule = SCORING_RULES[enclosure.scoring]
    return rule(own, tuple(opponent_pieces), board)


def score_breakdown(board: Board, opponent_board: Board) -> dict[EnclosureId, int]:
    """Points per occupied enclosure. Empty enclosures do not score."""
    return {
        enclosure_id: score_enclosure(
            enclosure_id,
            board.pieces(enclosure_id),
            opponent_board.pieces(enclosure_id),
            board,
        )
        for enclosure_id in board.occupied_enclosures()
    }


def score_board(board: Board, opponent_board: Board) -> int:
    return sum(score_breakdown(board, opponent_board).values())


def decide_winner(scores: tuple[int, int], players: tuple[str, str]) -> str:
    """Strictly higher total wins, otherwise it is a tie."""
    if scores[0] > scores[1]:
        return players[0]
    if scores[1] > scores[0]:
        return players[1]
    return TIE
