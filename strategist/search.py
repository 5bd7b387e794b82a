"""
Search entry point: fixed-depth minimax in negamax form with alpha-beta pruning.

This module defines the stable interface the game session and the HTTP API
depend on. get_best_move() always returns (move, score, nodes).

Shape of the search:

1. The root lists the legal moves and shuffles them with an injectable random
   generator. Ties are broken in favour of the move seen first (strictly
   greater comparisons only), so identical-scoring lines vary from game to
   game unless the caller passes a seeded generator.

2. Each root move is scored with a full window by negating the value of the
   position it leads to. Below the root, negamax() keeps a single scoring
   perspective (the side to move at the top of the call) and alternates a
   ``maximizing`` flag, raising alpha on maximizing nodes and lowering beta
   on minimizing nodes. A node stops looking at siblings as soon as
   beta <= alpha.

3. Leaves are scored with evaluate(). Checkmate scores MATE_SCORE against the
   mated side, stalemate scores DRAW_SCORE. Both are detected before the depth
   test, so a mate delivered on the last ply is still recognised as a mate.

Board ownership:
    The search never copies the board. It pushes and pops moves on the single
    board it was given and every push is matched by exactly one pop, also on
    cutoffs. The board is therefore identical before and after the call, but
    it must not be touched by anyone else while the search runs. There is no
    cancellation: callers that need responsiveness run the search on a worker
    thread with its own board.
"""

import logging
import random
from dataclasses import dataclass

import chess

from strategist.constants import (
    DEFAULT_DEPTH,
    DRAW_SCORE,
    MATE_SCORE,
    SCORE_INFINITY,
)
from strategist.evaluate import evaluate

_log = logging.getLogger(__name__)


@dataclass
class SearchState:
    """
    Per-call counters for a single search.

    Attributes:
        node_count: Number of negamax nodes visited (root children included).
        cutoffs:    Number of times a node stopped early on beta <= alpha.
        prune:      When False, cutoffs are disabled and the search is a plain
                    full-width minimax. Used as a reference for the pruned
                    search and by the benchmark.
    """

    node_count: int = 0
    cutoffs: int = 0
    prune: bool = True


def negamax(
    board: chess.Board,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    state: SearchState,
) -> int:
    """
    Depth-limited minimax with alpha-beta pruning, written as one function.

    Args:
        board:      Current position. Modified in place via push/pop and
                    restored before returning.
        depth:      Remaining plies. At depth <= 0 the position is scored
                    statically.
        alpha:      Lower bound of the window (best score the perspective
                    side is already guaranteed).
        beta:       Upper bound of the window (best score the other side
                    already holds against it).
        maximizing: True when the side to move at this node is the side whose
                    perspective the score is expressed in.
        state:      Counters and the pruning switch.

    Returns:
        Integer score from the perspective side's point of view.
    """
    state.node_count += 1

    if not any(board.legal_moves):
        if board.is_checkmate():
            # The side to move is mated: bad for the perspective side when it
            # is the one to move, good otherwise.
            return -MATE_SCORE if maximizing else MATE_SCORE
        return DRAW_SCORE

    if depth <= 0:
        score = evaluate(board)
        return score if maximizing else -score

    if maximizing:
        value = -SCORE_INFINITY
        for move in board.legal_moves:
            board.push(move)
            value = max(value, negamax(board, depth - 1, alpha, beta, False, state))
            board.pop()
            alpha = max(alpha, value)
            if state.prune and beta <= alpha:
                state.cutoffs += 1
                break
        return value

    value = SCORE_INFINITY
    for move in board.legal_moves:
        board.push(move)
        value = min(value, negamax(board, depth - 1, alpha, beta, True, state))
        board.pop()
        beta = min(beta, value)
        if state.prune and beta <= alpha:
            state.cutoffs += 1
            break
    return value


def get_best_move(
    board: chess.Board,
    depth: int = DEFAULT_DEPTH,
    rng: random.Random | None = None,
    prune: bool = True,
) -> tuple[chess.Move | None, int, int]:
    """
    Return the best move for the side to move.

    This is a blocking, CPU-bound call. The board is used in place and is
    back in its original state when the function returns.

    Args:
        board: The current position.
        depth: Search depth in plies. 0 is accepted and behaves like depth 1
               (each root move is scored by the static evaluation).
        rng:   Random generator used to shuffle the root moves. A fresh,
               OS-seeded generator is used when None, so ties are broken
               differently on every call. Pass random.Random(seed) for
               reproducible play.
        prune: Disable to run the full-width reference search.

    Returns:
        Tuple of (move, score, nodes):
            - move:  The chosen move, or None when there are no legal moves
                     (the caller decides whether that is mate or stalemate).
            - score: Value of the chosen move from the side-to-move's
                     perspective.
            - nodes: Number of positions visited.
    """
    moves = list(board.legal_moves)
    if not moves:
        return (None, DRAW_SCORE, 0)

    if rng is None:
        rng = random.Random()
    rng.shuffle(moves)

    state = SearchState(prune=prune)
    best_move = moves[0]
    best_score = -SCORE_INFINITY

    for move in moves:
        board.push(move)
        score = -negamax(board, depth - 1, -SCORE_INFINITY, SCORE_INFINITY, True, state)
        board.pop()

        if score > best_score:
            best_score = score
            best_move = move

    _log.debug(
        "best move %s score=%d depth=%d nodes=%d cutoffs=%d",
        best_move.uci(),
        best_score,
        depth,
        state.node_count,
        state.cutoffs,
    )
    return (best_move, best_score, state.node_count)
