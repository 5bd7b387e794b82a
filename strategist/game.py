"""
Game session: one human player against the engine on a single board.

The session is the caller the search expects. It owns the board outright,
runs the engine synchronously on it, and translates "no move" results into
a pass or a finished game rather than an error. Presentation (rendering,
voice, flavour text) is not handled here; it reads status() and the
AppliedMove records the methods return.
"""

import logging
import random
from dataclasses import dataclass

import chess

from strategist import rules
from strategist.constants import DEFAULT_DEPTH
from strategist.search import get_best_move

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameStatus:
    """
    Snapshot of the game for display.

    Attributes:
        fen:          Current position.
        turn:         Side to move.
        in_check:     Whether the side to move is in check.
        check_square: Square of the checked king, or None.
        game_over:    Checkmate, stalemate, or a drawing rule applies.
        checkmate:    The side to move has been mated.
        winner:       Winning colour after checkmate, else None.
        result:       "1-0", "0-1", "1/2-1/2" or "*".
    """

    fen: str
    turn: chess.Color
    in_check: bool
    check_square: chess.Square | None
    game_over: bool
    checkmate: bool
    winner: chess.Color | None
    result: str


class GameSession:
    """
    Stateful human-vs-engine game.

    Attributes:
        board:        The single live position. Never shared with another
                      session or thread while a method is running.
        player_color: Colour the human plays. The engine plays the other side.
        depth:        Search depth used by engine_reply().
        rng:          Random generator handed to the search for tie-breaking.
                      None means a fresh unseeded generator per search.
    """

    def __init__(
        self,
        board: chess.Board | None = None,
        player_color: chess.Color = chess.WHITE,
        depth: int = DEFAULT_DEPTH,
        rng: random.Random | None = None,
    ) -> None:
        self.board: chess.Board = board if board is not None else chess.Board()
        self.player_color: chess.Color = player_color
        self.depth: int = depth
        self.rng: random.Random | None = rng

    @property
    def is_player_turn(self) -> bool:
        return self.board.turn == self.player_color

    # -----------------------------------------------------------------------
    # Player actions
    # -----------------------------------------------------------------------

    def legal_targets(self, square: chess.Square) -> list[chess.Square]:
        """Destination squares of the legal moves from ``square``, without duplicates."""
        targets: list[chess.Square] = []
        for move in rules.legal_moves(self.board, square):
            if move.to_square not in targets:
                targets.append(move.to_square)
        return targets

    def needs_promotion(self, from_square: chess.Square, to_square: chess.Square) -> bool:
        return rules.needs_promotion(self.board, from_square, to_square)

    def play(self, move: chess.Move | str) -> rules.AppliedMove | None:
        """Apply the player's move. Returns None if it is illegal."""
        applied = rules.apply_move(self.board, move)
        if applied is None:
            _log.info("rejected move %s in %s", move, self.board.fen())
            return None
        _log.info("player played %s", applied.san)
        return applied

    def play_intent(
        self,
        piece_type: chess.PieceType | None,
        target: chess.Square,
        promotion: chess.PieceType = chess.QUEEN,
    ) -> rules.AppliedMove | None:
        """
        Resolve an already-parsed intent ("knight to f3") and play it.

        Pawn moves onto the last rank promote to ``promotion``.
        """
        move = rules.find_move_from_intent(self.board, piece_type, target)
        if move is None:
            return None
        if move.promotion is not None:
            move = chess.Move(move.from_square, move.to_square, promotion=promotion)
        return self.play(move)

    # -----------------------------------------------------------------------
    # Engine
    # -----------------------------------------------------------------------

    def engine_reply(self) -> tuple[rules.AppliedMove, int, int] | None:
        """
        Let the engine move if it is its turn.

        Returns:
            (applied_move, score, nodes), or None when it is not the engine's
            turn, the game is over, or the search found no move.
        """
        if self.is_player_turn or self.board.is_game_over():
            return None

        move, score, nodes = get_best_move(self.board, self.depth, rng=self.rng)
        if move is None:
            return None

        applied = rules.apply_move(self.board, move)
        _log.info("engine played %s score=%d nodes=%d", applied.san, score, nodes)
        return (applied, score, nodes)

    # -----------------------------------------------------------------------
    # Game control
    # -----------------------------------------------------------------------

    def backtrack(self, plies: int = 2) -> int:
        """
        Take back up to ``plies`` half-moves (default: the last player move and
        the engine's answer). Returns the number actually undone.
        """
        undone = 0
        while undone < plies and rules.undo_last_move(self.board) is not None:
            undone += 1
        _log.info("undid %d plies", undone)
        return undone

    def reset(self) -> None:
        self.board.reset()
        _log.info("new game")

    def suggestions(self, limit: int = 3) -> list[chess.Move]:
        """The first ``limit`` legal moves for the player, empty on the engine's turn."""
        if not self.is_player_turn:
            return []
        return rules.legal_moves(self.board)[:limit]

    def threat_scan(self, square: chess.Square) -> bool:
        """
        Whether the piece on ``square`` is attacked by the opposing side.

        An empty square is scanned as if it belonged to the player.
        """
        piece = self.board.piece_at(square)
        owner = piece.color if piece is not None else self.player_color
        return rules.is_square_attacked(self.board, square, not owner)

    def status(self) -> GameStatus:
        board = self.board
        in_check = board.is_check()
        checkmate = rules.is_checkmate(board)
        return GameStatus(
            fen=rules.serialize(board),
            turn=rules.side_to_move(board),
            in_check=in_check,
            check_square=rules.king_square(board, board.turn) if in_check else None,
            game_over=rules.is_game_over(board),
            checkmate=checkmate,
            winner=(not board.turn) if checkmate else None,
            result=board.result(),
        )
