from backend.engine.gameplay.game import PuzzleEngine, SequenceKind, SolvedEvent, StepSequence

__all__ = ["PuzzleEngine", "SequenceKind", "SolvedEvent", "StepSequence"]
