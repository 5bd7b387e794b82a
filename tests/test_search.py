"""Tests for negamax search with alpha-beta pruning."""

import random

import chess
import pytest

from strategist.constants import DRAW_SCORE, MATE_SCORE, SCORE_INFINITY
from strategist.search import SearchState, get_best_move, negamax
from tests.positions import BACK_RANK, FOOLS_MATE_SETUP

# Positions for comparing the pruned search with the full-width one.
SAMPLE_FENS = [
    chess.STARTING_FEN,
    "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4",
    "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3",
    BACK_RANK,
    "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1",
]


def test_no_legal_moves_returns_none(mated_board, stalemate_board):
    assert get_best_move(mated_board, 3) == (None, DRAW_SCORE, 0)
    assert get_best_move(stalemate_board, 3) == (None, DRAW_SCORE, 0)


def test_start_position_returns_legal_move(start_board):
    move, _, nodes = get_best_move(start_board, 1)
    assert move in start_board.legal_moves
    assert nodes > 0


def test_board_is_restored_after_search():
    board = chess.Board()
    for san in ("e4", "e5", "Nf3", "Nc6", "Bc4"):
        board.push_san(san)
    fen = board.fen()
    stack = list(board.move_stack)

    get_best_move(board, 3, rng=random.Random(7))

    assert board.fen() == fen
    assert board.move_stack == stack


def test_same_seed_same_result():
    board = chess.Board(SAMPLE_FENS[1])
    first = get_best_move(board, 2, rng=random.Random(42))
    second = get_best_move(board, 2, rng=random.Random(42))
    assert first == second


def test_equal_moves_are_broken_by_shuffle_order(start_board):
    # At depth 1, Nf3 and Nc3 improve the knight by the same amount and
    # beat every other first move.
    chosen = set()
    for seed in range(32):
        move, score, _ = get_best_move(start_board, 1, rng=random.Random(seed))
        assert score == 50
        chosen.add(move.uci())
    assert chosen == {"g1f3", "b1c3"}


def test_unseeded_search_works(start_board):
    move, _, _ = get_best_move(start_board, 1)
    assert move is not None


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_mate_beats_winning_the_queen(depth):
    board = chess.Board(BACK_RANK)
    move, score, _ = get_best_move(board, depth, rng=random.Random(depth))
    assert move == chess.Move.from_uci("d1d8")
    assert score == MATE_SCORE


def test_black_finds_mate_in_one_at_depth_three():
    board = chess.Board(FOOLS_MATE_SETUP)
    move, score, _ = get_best_move(board, 3, rng=random.Random(3))
    assert move == chess.Move.from_uci("d8h4")
    assert score == MATE_SCORE


def test_greedy_capture_at_depth_one():
    board = chess.Board("4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1")
    move, _, _ = get_best_move(board, 1, rng=random.Random(0))
    assert move == chess.Move.from_uci("d1d5")


def test_depth_zero_matches_depth_one():
    board = chess.Board(SAMPLE_FENS[1])
    assert get_best_move(board, 0, rng=random.Random(5)) == get_best_move(board, 1, rng=random.Random(5))


def test_stalemate_scores_zero(stalemate_board):
    for depth in (0, 2):
        for maximizing in (True, False):
            score = negamax(
                stalemate_board, depth, -SCORE_INFINITY, SCORE_INFINITY, maximizing, SearchState()
            )
            assert score == 0


def test_checkmate_scores_against_the_mated_side(mated_board):
    state = SearchState()
    assert negamax(mated_board, 0, -SCORE_INFINITY, SCORE_INFINITY, True, state) == -MATE_SCORE
    assert negamax(mated_board, 0, -SCORE_INFINITY, SCORE_INFINITY, False, state) == MATE_SCORE


def test_leaf_is_static_evaluation():
    board = chess.Board("4k3/8/8/8/8/8/8/3QK3 w - - 0 1")
    state = SearchState()
    assert negamax(board, 0, -SCORE_INFINITY, SCORE_INFINITY, True, state) == 950
    assert negamax(board, 0, -SCORE_INFINITY, SCORE_INFINITY, False, state) == -950
    assert state.node_count == 2


@pytest.mark.parametrize("fen", SAMPLE_FENS)
def test_pruning_does_not_change_the_result(fen):
    board = chess.Board(fen)
    for depth in (1, 2):
        pruned = get_best_move(board, depth, rng=random.Random(11))
        full = get_best_move(board, depth, rng=random.Random(11), prune=False)
        assert pruned[:2] == full[:2]
        assert pruned[2] <= full[2]


@pytest.mark.parametrize("fen", [BACK_RANK, SAMPLE_FENS[4]])
def test_pruning_does_not_change_the_result_at_depth_three(fen):
    board = chess.Board(fen)
    pruned = get_best_move(board, 3, rng=random.Random(2))
    full = get_best_move(board, 3, rng=random.Random(2), prune=False)
    assert pruned[:2] == full[:2]
    assert pruned[2] < full[2]


def test_cutoffs_are_counted():
    board = chess.Board(SAMPLE_FENS[1])
    pruned, full = SearchState(), SearchState(prune=False)
    a = negamax(board, 3, -SCORE_INFINITY, SCORE_INFINITY, True, pruned)
    b = negamax(board, 3, -SCORE_INFINITY, SCORE_INFINITY, True, full)
    assert a == b
    assert pruned.cutoffs > 0
    assert full.cutoffs == 0
