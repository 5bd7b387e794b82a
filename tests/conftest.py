"""Shared fixtures for the test suite."""

import chess
import pytest

from tests.positions import FOOLS_MATE_FINAL, STALEMATE


@pytest.fixture
def start_board() -> chess.Board:
    return chess.Board()


@pytest.fixture
def mated_board() -> chess.Board:
    return chess.Board(FOOLS_MATE_FINAL)


@pytest.fixture
def stalemate_board() -> chess.Board:
    return chess.Board(STALEMATE)
