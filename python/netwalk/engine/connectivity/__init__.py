from netwalk.engine.connectivity.evaluator import Evaluator
from netwalk.engine.connectivity.verifier import WinVerifier

__all__ = ["Evaluator", "WinVerifier"]
