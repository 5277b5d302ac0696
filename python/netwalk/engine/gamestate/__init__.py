from netwalk.engine.gamestate.state import GameState

__all__ = ["GameState"]
