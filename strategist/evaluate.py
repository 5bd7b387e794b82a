"""
Greedy evaluation: material plus pawn/knight piece-square tables.

The search needs a number for every leaf it reaches. This evaluator is
intentionally simple and material-dominant: each piece is worth its fixed
centipawn value, and pawns and knights get a small bonus or penalty from
their piece-square table. There is no game-phase interpolation, king safety,
mobility, or pawn-structure term. Because captures move the score far more
than any placement change, the search is biased toward winning material.

The score is returned from the perspective of the side to move (the negamax
convention): positive means the side to move is ahead.
"""

import chess

from strategist.constants import PIECE_VALUES, PST


def _pst_row(piece: chess.Piece, square: chess.Square) -> int:
    """
    Row of a piece-square table for a piece standing on ``square``.

    Tables are written from the owner's side of the board (row 0 = own back
    rank). python-chess ranks count from White's side, so White reads the
    rank directly and Black reads it mirrored.
    """
    rank = chess.square_rank(square)
    return rank if piece.color == chess.WHITE else 7 - rank


def piece_score(piece: chess.Piece, square: chess.Square) -> int:
    """Material value of ``piece`` plus its positional bonus on ``square``."""
    score = PIECE_VALUES[piece.piece_type]
    table = PST.get(piece.piece_type)
    if table is not None:
        score += table[_pst_row(piece, square)][chess.square_file(square)]
    return score


def evaluate(board: chess.Board) -> int:
    """
    Centipawn evaluation from the side-to-move's perspective.

    Every occupied square contributes ``piece_score``: added when the piece
    belongs to the side to move, subtracted otherwise.

    Args:
        board: The position to score. Not modified.

    Returns:
        Signed integer score. Positive = side to move is ahead.

    Example:
        >>> import chess
        >>> evaluate(chess.Board())  # symmetric start position
        0
    """
    total = 0
    for square, piece in board.piece_map().items():
        score = piece_score(piece, square)
        total += score if piece.color == board.turn else -score
    return total
