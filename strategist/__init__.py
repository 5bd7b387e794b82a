"""
Shadow Strategist engine package.

This package implements the computer opponent of a human-vs-engine chess
game: a fixed-depth negamax search with alpha-beta pruning and random
tie-breaking over a greedy material + piece-square-table evaluation.
python-chess provides the rules.

Modules:
    constants — Piece values, PST arrays, mate scores, and search depth
    evaluate  — Static position evaluation (material + pawn/knight PSTs)
    search    — Negamax search with alpha-beta pruning
    rules     — Rules-engine contract over python-chess
    game      — Human-vs-engine game session
"""
