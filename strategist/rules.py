"""
Rules-engine contract over python-chess.

python-chess owns legality, move generation, check/mate/stalemate detection,
FEN serialization, and undo. This module wraps the handful of board
operations the game layer needs so that illegal input comes back as None
instead of an exception, and adds the board queries the interactive game
uses (king location, threat scan, move lookup by piece and target, promotion
detection).

The search in strategist.search talks to chess.Board directly; everything
else goes through here.
"""

from dataclasses import dataclass
from typing import Iterable

import chess


@dataclass(frozen=True)
class AppliedMove:
    """
    Record of a move that was played on a board.

    Attributes:
        move:      The move as played.
        san:       Standard algebraic notation, computed before the move.
        piece:     Type of the moving piece (chess.PAWN .. chess.KING).
        captured:  Type of the captured piece, or None for a quiet move.
                   En passant reports chess.PAWN.
        promotion: Promotion piece type, or None.
    """

    move: chess.Move
    san: str
    piece: chess.PieceType
    captured: chess.PieceType | None
    promotion: chess.PieceType | None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None


def legal_moves(board: chess.Board, square: chess.Square | None = None) -> list[chess.Move]:
    """All legal moves, or only those starting on ``square``."""
    if square is None:
        return list(board.legal_moves)
    return list(board.generate_legal_moves(from_mask=chess.BB_SQUARES[square]))


def parse_move(board: chess.Board, move: chess.Move | str) -> chess.Move | None:
    """
    Resolve ``move`` to a legal chess.Move for the current position.

    Strings are tried as UCI first ("e2e4", "e7e8q") and then as SAN
    ("e4", "Nf3", "O-O"). Returns None for anything unparsable or illegal.
    """
    if isinstance(move, str):
        text = move.strip()
        try:
            candidate = chess.Move.from_uci(text)
        except ValueError:
            try:
                candidate = board.parse_san(text)
            except ValueError:
                return None
    else:
        candidate = move
    return candidate if board.is_legal(candidate) else None


def apply_move(board: chess.Board, move: chess.Move | str) -> AppliedMove | None:
    """
    Play ``move`` on ``board`` in place.

    Returns:
        An AppliedMove describing what happened, or None if the move is
        illegal or cannot be parsed. The board is untouched in that case.
    """
    legal = parse_move(board, move)
    if legal is None:
        return None

    piece = board.piece_type_at(legal.from_square)
    if board.is_en_passant(legal):
        captured = chess.PAWN
    else:
        captured = board.piece_type_at(legal.to_square)
    san = board.san(legal)

    board.push(legal)
    return AppliedMove(
        move=legal,
        san=san,
        piece=piece,
        captured=captured,
        promotion=legal.promotion,
    )


def undo_last_move(board: chess.Board) -> chess.Move | None:
    """Take back the most recent move. Returns None when there is none."""
    if not board.move_stack:
        return None
    return board.pop()


def is_checkmate(board: chess.Board) -> bool:
    return board.is_checkmate()


def is_game_over(board: chess.Board) -> bool:
    return board.is_game_over()


def side_to_move(board: chess.Board) -> chess.Color:
    return board.turn


def serialize(board: chess.Board) -> str:
    """FEN of the current position."""
    return board.fen()


def king_square(board: chess.Board, color: chess.Color) -> chess.Square | None:
    return board.king(color)


def is_square_attacked(board: chess.Board, square: chess.Square, by_color: chess.Color) -> bool:
    """True if any piece of ``by_color`` attacks ``square``."""
    return board.is_attacked_by(by_color, square)


def find_move_from_intent(
    board: chess.Board,
    piece_type: chess.PieceType | None,
    target: chess.Square,
) -> chess.Move | None:
    """
    First legal move landing on ``target`` with a piece of ``piece_type``.

    ``piece_type`` None matches any piece. Move generation order decides
    which candidate wins when several pieces can reach the target.
    """
    for move in board.legal_moves:
        if move.to_square != target:
            continue
        if piece_type is None or board.piece_type_at(move.from_square) == piece_type:
            return move
    return None


def needs_promotion(board: chess.Board, from_square: chess.Square, to_square: chess.Square) -> bool:
    """
    True if a pawn on ``from_square`` can legally move to ``to_square`` and
    has to choose a promotion piece when it does.
    """
    if board.piece_type_at(from_square) != chess.PAWN:
        return False
    if chess.square_rank(to_square) not in (0, 7):
        return False
    return any(
        move.to_square == to_square and move.promotion is not None
        for move in legal_moves(board, from_square)
    )


def board_from_history(fen: str | None = None, moves: Iterable[str] = ()) -> chess.Board:
    """
    Build a board from a starting FEN and the UCI moves played since.

    Args:
        fen:   Starting position. None means the standard start position.
        moves: UCI move strings, applied in order.

    Raises:
        ValueError: if the FEN is invalid or describes an impossible position
                    (missing king, side not to move in check), or if a move
                    is malformed or illegal.
    """
    board = chess.Board() if fen is None else chess.Board(fen)
    if not board.is_valid():
        raise ValueError(f"illegal position: {board.status()!r}")
    for index, uci in enumerate(moves):
        move = chess.Move.from_uci(uci)
        if not board.is_legal(move):
            raise ValueError(f"illegal move #{index + 1} in history: {uci}")
        board.push(move)
    return board
