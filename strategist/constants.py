"""
Engine constants: piece values, piece-square tables, and search parameters.

Every number the evaluator and the search depend on lives here so tuning
never means hunting for magic numbers across modules.

Piece values use centipawns (1 pawn = 100 cp). The queen is deliberately
heavy (950) and the king carries a nominal 30000 so the material term
dominates the evaluation: the engine plays greedily and goes for captures.
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 320
BISHOP_VALUE: int = 330
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 950
KING_VALUE: int = 30_000  # Both kings are always on the board, so this cancels out

PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Piece-square tables
# ---------------------------------------------------------------------------
# Row 0 is the owning side's back rank, row 7 the far rank; columns are files
# a..h and are never mirrored. The evaluator flips the row for Black.
# Only pawns and knights get a positional bonus. Bishops, rooks, queens and
# kings are scored on material alone.

PAWN_PST: list[list[int]] = [
    [0, 0, 0, 0, 0, 0, 0, 0],
    [50, 50, 50, 50, 50, 50, 50, 50],
    [10, 10, 20, 30, 30, 20, 10, 10],
    [5, 5, 10, 25, 25, 10, 5, 5],
    [0, 0, 0, 20, 20, 0, 0, 0],
    [5, -5, -10, 0, 0, -10, -5, 5],
    [5, 10, 10, -20, -20, 10, 10, 5],
    [0, 0, 0, 0, 0, 0, 0, 0],
]

KNIGHT_PST: list[list[int]] = [
    [-50, -40, -30, -30, -30, -30, -40, -50],
    [-40, -20, 0, 0, 0, 0, -20, -40],
    [-30, 0, 10, 15, 15, 10, 0, -30],
    [-30, 5, 15, 20, 20, 15, 5, -30],
    [-30, 0, 15, 20, 20, 15, 0, -30],
    [-30, 5, 10, 15, 15, 10, 5, -30],
    [-40, -20, 0, 5, 5, 0, -20, -40],
    [-50, -40, -30, -30, -30, -30, -40, -50],
]

PST: dict[int, list[list[int]]] = {
    chess.PAWN:   PAWN_PST,
    chess.KNIGHT: KNIGHT_PST,
}

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# Integers only, so alpha-beta comparisons never mix ints and floats.
# MATE_SCORE must stay far above any reachable material swing so a forced
# mate always beats winning material. Mate distance is not encoded.

MATE_SCORE: int = 20_000
DRAW_SCORE: int = 0

# Bound for the alpha-beta window. Stands in for +/- infinity and is larger
# than any score evaluate() or the search can produce.
SCORE_INFINITY: int = 1_000_000

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# The search is fixed-depth with no clock: depth is the only tuning lever.
# Each extra ply multiplies the work by roughly the branching factor, so
# MAX_DEPTH caps what HTTP clients may request.

DEFAULT_DEPTH: int = 3
MAX_DEPTH: int = 4
