"""
FastAPI web application for playing against the Shadow Strategist engine.

Every endpoint takes the game as a starting FEN plus the UCI moves played
since, rebuilds the board, and answers. No board state is kept on the server
between requests.

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for the blocking, CPU-bound engine search.
- One board per request: each handler builds its own chess.Board, so two
  searches never share a position.
"""

import logging
import random
from typing import Annotated

import chess
from fastapi import FastAPI, HTTPException
from pydantic import AfterValidator, BaseModel, field_validator

from strategist import rules
from strategist.constants import DEFAULT_DEPTH, MAX_DEPTH
from strategist.game import GameSession, GameStatus

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Shadow Strategist", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


def _check_square(value: str) -> str:
    value = value.strip().lower()
    chess.parse_square(value)  # raises ValueError for anything but a1..h8
    return value


SquareName = Annotated[str, AfterValidator(_check_square)]


class GameRequest(BaseModel):
    """
    A game as sent by the client.

    Fields:
        fen: Starting position. None means the standard start position.
        moves: UCI moves played from ``fen``, oldest first.
    """

    fen: str | None = None
    moves: list[str] = []


class EngineMoveRequest(GameRequest):
    """
    Ask the engine to move.

    Fields:
        depth: Search depth in plies, clamped to [0, MAX_DEPTH].
        seed: Optional seed for tie-breaking. Omit for varied play.
    """

    depth: int = DEFAULT_DEPTH
    seed: int | None = None

    @field_validator("depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        """Clamp depth to a safe operating range."""
        return max(0, min(v, MAX_DEPTH))


class PlayRequest(GameRequest):
    """A player move in UCI ("e2e4", "e7e8q") or SAN ("Nf3") notation."""

    move: str


class LegalRequest(GameRequest):
    square: SquareName | None = None


class ThreatRequest(GameRequest):
    square: SquareName


class UndoRequest(GameRequest):
    plies: int = 2

    @field_validator("plies")
    @classmethod
    def non_negative(cls, v: int) -> int:
        return max(0, v)


class StatusResponse(BaseModel):
    """
    Game status for display.

    Fields:
        turn: "white" or "black".
        check_square: Square of the king in check, e.g. "e1", else None.
        winner: "white", "black", or None if nobody has won.
        result: PGN result string ("1-0", "0-1", "1/2-1/2", "*").
    """

    fen: str
    turn: str
    in_check: bool
    check_square: str | None
    game_over: bool
    checkmate: bool
    winner: str | None
    result: str


class MoveResponse(BaseModel):
    """
    A move that was played, plus the resulting position.

    Fields:
        move: Move in UCI notation.
        san: Move in standard algebraic notation.
        captured: Whether the move captured a piece.
        fen: Board FEN after the move.
    """

    move: str
    san: str
    captured: bool
    fen: str
    status: StatusResponse


class EngineMoveResponse(MoveResponse):
    """
    Engine move response.

    Fields:
        score: Evaluation in centipawns from the engine's perspective.
        depth: Search depth used.
        nodes: Positions visited by the search.
    """

    score: int
    depth: int
    nodes: int


class LegalResponse(BaseModel):
    moves: list[str]


class ThreatResponse(BaseModel):
    square: str
    attacked: bool


class UndoResponse(BaseModel):
    undone: int
    fen: str
    moves: list[str]
    status: StatusResponse


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _color_name(color: chess.Color | None) -> str | None:
    if color is None:
        return None
    return "white" if color == chess.WHITE else "black"


def _status_response(status: GameStatus) -> StatusResponse:
    return StatusResponse(
        fen=status.fen,
        turn=_color_name(status.turn),
        in_check=status.in_check,
        check_square=(
            chess.square_name(status.check_square) if status.check_square is not None else None
        ),
        game_over=status.game_over,
        checkmate=status.checkmate,
        winner=_color_name(status.winner),
        result=status.result,
    )


def _load_board(request: GameRequest) -> chess.Board:
    """Rebuild the board for a request, mapping bad input to HTTP 400."""
    try:
        return rules.board_from_history(request.fen, request.moves)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid game: {exc}") from exc


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.get("/api/status", response_model=StatusResponse)
def api_status() -> StatusResponse:
    """Status of a fresh game. Doubles as a health check."""
    return _status_response(GameSession().status())


@app.post("/api/move", response_model=EngineMoveResponse)
def api_move(request: EngineMoveRequest) -> EngineMoveResponse:
    """
    Compute and play the engine's move for the side to move.

    Raises:
        HTTPException 400: Malformed game or game already over.
        HTTPException 500: The search failed or returned no move.
    """
    board = _load_board(request)

    if board.is_game_over():
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {board.result()}",
        )

    rng = random.Random(request.seed) if request.seed is not None else None
    session = GameSession(board, player_color=not board.turn, depth=request.depth, rng=rng)

    try:
        reply = session.engine_reply()
    except Exception as exc:
        _log.exception("Engine search failed for fen=%s moves=%s", request.fen, request.moves)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if reply is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    applied, score, nodes = reply
    _log.info(
        "Move=%s score=%d depth=%d nodes=%d fen=%s",
        applied.move.uci(),
        score,
        request.depth,
        nodes,
        board.fen()[:40],
    )

    return EngineMoveResponse(
        move=applied.move.uci(),
        san=applied.san,
        captured=applied.is_capture,
        fen=board.fen(),
        status=_status_response(session.status()),
        score=score,
        depth=request.depth,
        nodes=nodes,
    )


@app.post("/api/play", response_model=MoveResponse)
def api_play(request: PlayRequest) -> MoveResponse:
    """
    Play the human's move.

    Raises:
        HTTPException 400: Malformed game, game over, or illegal move.
    """
    board = _load_board(request)
    if board.is_game_over():
        raise HTTPException(status_code=400, detail=f"Game is already over: {board.result()}")

    session = GameSession(board, player_color=board.turn)
    applied = session.play(request.move)
    if applied is None:
        raise HTTPException(status_code=400, detail=f"Illegal move: {request.move}")

    return MoveResponse(
        move=applied.move.uci(),
        san=applied.san,
        captured=applied.is_capture,
        fen=board.fen(),
        status=_status_response(session.status()),
    )


@app.post("/api/legal", response_model=LegalResponse)
def api_legal(request: LegalRequest) -> LegalResponse:
    """Legal moves in UCI notation, optionally only those from one square."""
    board = _load_board(request)
    square = chess.parse_square(request.square) if request.square is not None else None
    return LegalResponse(moves=[move.uci() for move in rules.legal_moves(board, square)])


@app.post("/api/threat", response_model=ThreatResponse)
def api_threat(request: ThreatRequest) -> ThreatResponse:
    """Whether the piece on a square is attacked by the other side."""
    board = _load_board(request)
    session = GameSession(board, player_color=board.turn)
    attacked = session.threat_scan(chess.parse_square(request.square))
    return ThreatResponse(square=request.square, attacked=attacked)


@app.post("/api/undo", response_model=UndoResponse)
def api_undo(request: UndoRequest) -> UndoResponse:
    """Take back the last ``plies`` half-moves (default: one full turn)."""
    board = _load_board(request)
    session = GameSession(board)
    undone = session.backtrack(request.plies)
    return UndoResponse(
        undone=undone,
        fen=board.fen(),
        moves=[move.uci() for move in board.move_stack],
        status=_status_response(session.status()),
    )
