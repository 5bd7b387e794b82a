"""
Web application package for the Shadow Strategist engine.

Provides a stateless FastAPI REST API for playing against the engine:
the client sends the game (start FEN + UCI moves) with every request.
Run with: uvicorn web.app:app
"""
