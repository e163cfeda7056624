"""Evolution operations over UI documents."""

from .applier import EvolutionApplier

__all__ = ["EvolutionApplier"]
