#!/usr/bin/env python3
"""
Benchmark: nodes and time per move, alpha-beta vs full-width search.

Runs every position twice at the same depth and seed, once with pruning and
once without. Both runs must pick the same move with the same score; the
node counts show how much work pruning saves.

Usage: python3 tools/bench.py [depth]
"""
import os
import random
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

import chess

from strategist.constants import DEFAULT_DEPTH
from strategist.search import get_best_move

SEED = 1234

# Fixed positions spanning opening, middlegame, and endgame.
# Same positions for every comparison run.
POSITIONS = [
    ("Start",        chess.STARTING_FEN),
    ("After 1.e4",   "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"),
    ("Italian",      "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"),
    ("Mid-open",     "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Fool's mate",  "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2"),
    ("Back rank",    "6k1/5ppp/8/8/8/2N5/q4PPP/3R2K1 w - - 0 1"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def run_position(label: str, fen: str, depth: int, prune: bool) -> dict:
    """Search one position and return move, score, nodes, and time."""
    board = chess.Board(fen)
    start = time.monotonic()
    move, score, nodes = get_best_move(board, depth, rng=random.Random(SEED), prune=prune)
    elapsed_ms = max(1, int((time.monotonic() - start) * 1000))
    return {
        "label": label,
        "move": move.uci() if move is not None else "(none)",
        "score": score,
        "nodes": nodes,
        "nps": nodes * 1000 // elapsed_ms,
        "time_ms": elapsed_ms,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    depth = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DEPTH
    print(f"Shadow Strategist benchmark — {sys.executable}, depth {depth}, seed {SEED}")
    print()
    print(
        f"{'Position':<12} {'Move':<7} {'Score':>6} {'AB nodes':>9} {'AB ms':>7} {'AB NPS':>8} "
        f"{'Full nodes':>10} {'Full ms':>8} {'Same':>5}"
    )
    print("-" * 81)

    pruned_total = full_total = 0
    for label, fen in POSITIONS:
        ab = run_position(label, fen, depth, prune=True)
        full = run_position(label, fen, depth, prune=False)
        same = ab["move"] == full["move"] and ab["score"] == full["score"]
        pruned_total += ab["nodes"]
        full_total += full["nodes"]
        print(
            f"{label:<12} {ab['move']:<7} {ab['score']:>6} {ab['nodes']:>9,} "
            f"{ab['time_ms']:>7,} {ab['nps']:>8,} "
            f"{full['nodes']:>10,} {full['time_ms']:>8,} {'yes' if same else 'NO':>5}"
        )

    print("-" * 81)
    if full_total:
        print(f"Alpha-beta visited {pruned_total:,} of {full_total:,} nodes "
              f"({100 * pruned_total // full_total}%).")


if __name__ == "__main__":
    main()
