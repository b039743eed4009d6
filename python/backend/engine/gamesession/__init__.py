from backend.engine.gamesession.session import GameSession

__all__ = ["GameSession"]
