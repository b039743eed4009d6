from backend.engine.gamemode.machine import GameModeMachine, Scheduler, TimerHandle

__all__ = ["GameModeMachine", "Scheduler", "TimerHandle"]
