from netwalk.engine.gamesolver.solver import Solver

__all__ = ["Solver"]
