from backend.engine.gamegenerator.generator import WalkGenerator

__all__ = ["WalkGenerator"]
