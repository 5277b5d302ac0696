from netwalk.engine.gamegenerator.generator import DENSITY, GameGenerator

__all__ = ["DENSITY", "GameGenerator"]
