# Observability Package
from observability.stats import EngineStats

__all__ = ["EngineStats"]
