"""Versioned engine: history store, submission queue and orchestrator."""

from .engine import ENGINE_VERSION, ActionOutcome, Engine, EngineState, Listener
from .store import StoreStats, VersionStore
from .turnstile import CancellationToken, Turnstile

__all__ = [
    "ENGINE_VERSION",
    "ActionOutcome",
    "Engine",
    "EngineState",
    "Listener",
    "StoreStats",
    "VersionStore",
    "CancellationToken",
    "Turnstile",
]
