"""
Schema Engine - the single writer of the authoritative UI document.

Candidates and evolution operations go through the validator and the
applier, get committed to the version store, and are fanned out to
subscribers. Submissions are admitted one at a time in arrival order.

Architecture:
    producer → Engine.process_candidate / process_evolution
             → Turnstile (FIFO, bounded, cancellable)
             → Validator / EvolutionApplier (pure)
             → VersionStore.commit
             → listeners (in registration order, failures isolated)
"""

import threading
import time
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from returns.pipeline import is_successful

from ..core import (
    LogContext,
    Settings,
    get_logger,
    get_settings,
    extract_json,
    validate_json_size,
    JSONParseError,
)
from ..core.errors import (
    BusyError,
    EngineError,
    InvalidOperation,
    ListenerError,
    NoDocumentError,
    SchemaValidationError,
    TargetNotFound,
    ValidationIssue,
)
from ..evolution import EvolutionApplier
from ..monitoring import metrics_collector
from ..registry import RegistryView
from ..schema import ROOT_TARGET, ActionBinding, ComponentNode, EvolutionOperation, Schema
from ..schema.frozen import freeze
from ..schema.traversal import collect_ids, dangling_targets, find_node
from ..validation import Sanitizer, ValidationResult, Validator
from ..version import __version__
from .store import VersionStore
from .turnstile import CancellationToken, Turnstile

logger = get_logger(__name__)

ENGINE_VERSION = __version__

Listener = Callable[[Schema], None]


class EngineState(str, Enum):
    """Engine lifecycle states."""

    IDLE = "idle"
    PROCESSING = "processing"


@dataclass(frozen=True)
class ActionOutcome:
    """Result of triggering an action binding."""

    intent: str
    handler: str | None
    document: Schema
    committed: bool


class _Subscription:
    __slots__ = ("listener",)

    def __init__(self, listener: Listener) -> None:
        self.listener = listener


def _listener_name(listener: Any) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)


class Engine:
    """
    Versioned state machine over UI documents.

    Public operations return the new current document or raise an
    ``EngineError``. A failed submission never changes the current document.

    Listeners run synchronously on the submitting thread while the commit
    lock is held; they may read the engine or move its history, but a
    submission from a listener fails with ``BusyError``.
    """

    def __init__(
        self,
        registry: RegistryView,
        settings: Settings | None = None,
        validator: Validator | None = None,
        applier: EvolutionApplier | None = None,
        store: VersionStore | None = None,
        on_listener_error: Callable[[ListenerError], None] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        settings = settings or get_settings()

        self.registry = registry
        self.validator = validator or Validator(
            registry,
            Sanitizer(
                max_string_length=settings.max_string_length,
                max_depth=settings.max_prop_depth,
            ),
        )
        self.applier = applier or EvolutionApplier(self.validator)
        self.max_candidate_size = settings.max_candidate_size
        self.on_listener_error = on_listener_error

        self._store = store or VersionStore(max_depth=settings.history_depth)
        self._turnstile = Turnstile(max_waiting=settings.max_queue_depth)
        self._lock = threading.RLock()
        self._subscriptions: list[_Subscription] = []
        self._subscriptions_lock = threading.Lock()
        self._notifying = threading.local()
        self._version = self._store.current.version if self._store.current else 0
        self._clock = clock or (lambda: datetime.now(timezone.utc))

        logger.info(
            "engine_initialized",
            history_depth=self._store.max_depth,
            max_queue_depth=self._turnstile.max_waiting,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        return EngineState.PROCESSING if self._turnstile.busy else EngineState.IDLE

    def get_current(self) -> Schema | None:
        """Current authoritative document, or None before the first commit."""
        with self._lock:
            return self._store.current

    @property
    def can_rewind(self) -> bool:
        with self._lock:
            return self._store.can_rewind

    @property
    def can_advance(self) -> bool:
        with self._lock:
            return self._store.can_advance

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    def process_candidate(
        self, candidate: Schema | Mapping[str, Any] | str | bytes, *, token: CancellationToken | None = None
    ) -> Schema:
        """
        Validate a candidate and commit it as a brand-new document.

        Args:
            candidate: Document mapping, Schema, or raw model output text
            token: Optional cancellation token for while the call is queued

        Returns:
            The committed document

        Raises:
            SchemaValidationError: Candidate rejected
            BusyError: Too many submissions waiting
            SubmissionCancelled: Token cancelled before the turn began
        """
        with self._cycle("candidate", token):
            data = self._parse_candidate(candidate)
            result = self.validator.validate(data)
            document = self._accept(result)

            logger.info(
                "candidate_accepted",
                schema_id=document.id,
                components=len(document.components),
                warnings=len(result.warnings),
            )
            return self._commit(self._stamp(self._with_defaults(document)))

    def process_evolution(
        self, operation: EvolutionOperation | Mapping[str, Any], *, token: CancellationToken | None = None
    ) -> Schema:
        """
        Apply one evolution operation to the current document and commit.

        Raises:
            NoDocumentError: Nothing committed yet
            EvolutionError: Operation could not be applied
            SchemaValidationError: Result is not a valid document
            BusyError / SubmissionCancelled: As for process_candidate
        """
        with self._cycle("evolution", token):
            return self._evolve((operation,))

    def process_evolutions(
        self,
        operations: Iterable[EvolutionOperation | Mapping[str, Any]],
        *,
        token: CancellationToken | None = None,
    ) -> Schema:
        """Apply several operations as one atomic commit."""
        operations = tuple(operations)
        with self._cycle("evolution_batch", token):
            if not operations:
                raise InvalidOperation("empty evolution batch")
            return self._evolve(operations)

    def trigger_action(
        self, node_id: str, action_id: str, *, token: CancellationToken | None = None
    ) -> ActionOutcome:
        """
        Fire an action binding of a node in the current document.

        Its declarative updates are applied as one atomic commit; an action
        without updates only reports its intent.
        """
        with self._cycle("action", token):
            current = self._require_current()
            action = self._find_action(current, node_id, action_id)

            if not action.updates:
                return ActionOutcome(action.intent, action.handler, current, committed=False)

            document = self._evolve(action.updates)
            return ActionOutcome(action.intent, action.handler, document, committed=True)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def rewind(self) -> Schema | None:
        """Step back one document. Returns None (no move) at the oldest entry."""
        return self._move("rewind", self._store.rewind)

    def advance(self) -> Schema | None:
        """Step forward one document. Returns None (no move) at the newest entry."""
        return self._move("advance", self._store.advance)

    def _move(self, direction: str, step: Callable[[], Schema | None]) -> Schema | None:
        with self._lock:
            document = step()
            metrics_collector.record_history_move(direction, document is not None)

            if document is None:
                logger.info("history_boundary", direction=direction)
                return None

            logger.info("history_moved", direction=direction, version=document.version)
            self._notify(document)
            return document

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for every commit and history move.

        Returns:
            A function that removes this registration (safe to call twice)
        """
        subscription = _Subscription(listener)
        with self._subscriptions_lock:
            self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            with self._subscriptions_lock:
                if subscription in self._subscriptions:
                    self._subscriptions.remove(subscription)

        return unsubscribe

    def _notify(self, document: Schema) -> None:
        with self._subscriptions_lock:
            subscriptions = list(self._subscriptions)

        # Listeners run under the commit lock, so a submission from one
        # would wait on a cycle that is waiting on this thread.
        depth = getattr(self._notifying, "depth", 0)
        self._notifying.depth = depth + 1
        try:
            for subscription in subscriptions:
                try:
                    subscription.listener(document)
                except Exception as e:
                    self._report_listener_error(subscription.listener, e)
        finally:
            self._notifying.depth = depth

    def _report_listener_error(self, listener: Listener, original: Exception) -> None:
        name = _listener_name(listener)
        error = ListenerError(f"listener {name} raised: {original}", listener, original)
        metrics_collector.record_listener_error()
        logger.error("listener_failed", listener=name, error=str(original), exc_info=original)

        if self.on_listener_error is not None:
            try:
                self.on_listener_error(error)
            except Exception as e:
                logger.error("listener_error_hook_failed", error=str(e))

    # ------------------------------------------------------------------
    # Cycle internals
    # ------------------------------------------------------------------

    @contextmanager
    def _cycle(self, source: str, token: CancellationToken | None) -> Iterator[None]:
        admitted = False
        start = 0.0
        try:
            if getattr(self._notifying, "depth", 0):
                raise BusyError("submission from inside a listener")
            with self._turnstile.turn(token):
                admitted = True
                metrics_collector.set_waiting(self._turnstile.waiting)
                start = time.perf_counter()
                with self._lock, LogContext(cycle=source):
                    yield
        except EngineError as e:
            if admitted:
                metrics_collector.record_failure(source, e.code, time.perf_counter() - start)
                logger.warning("cycle_failed", source=source, code=e.code, error=e.message)
            else:
                metrics_collector.record_failure(source, e.code)
                logger.warning("submission_refused", source=source, code=e.code, error=e.message)
            raise
        else:
            metrics_collector.record_success(source, time.perf_counter() - start)
        finally:
            metrics_collector.set_waiting(self._turnstile.waiting)

    def _parse_candidate(self, candidate: Any) -> Any:
        if isinstance(candidate, bytes):
            candidate = candidate.decode("utf-8", errors="replace")
        if not isinstance(candidate, str):
            return candidate

        try:
            validate_json_size(candidate, self.max_candidate_size, "candidate")
            return extract_json(candidate, repair=True)
        except JSONParseError as e:
            raise SchemaValidationError(
                f"candidate is not a JSON document: {e}",
                issues=[ValidationIssue("structure", str(e))],
            ) from e

    def _accept(self, result: ValidationResult) -> Schema:
        outcome = result.as_result()
        if not is_successful(outcome):
            raise outcome.failure()

        sanitized = [w for w in result.warnings if w.code == "sanitized"]
        metrics_collector.record_sanitized(len(sanitized))
        for warning in result.warnings:
            logger.warning("validation_warning", code=warning.code, node_id=warning.node_id, message=warning.message)
        return outcome.unwrap()

    def _require_current(self) -> Schema:
        current = self._store.current
        if current is None:
            raise NoDocumentError("no document has been committed yet")
        return current

    def _find_action(self, document: Schema, node_id: str, action_id: str) -> ActionBinding:
        node = find_node(document.components, node_id)
        if node is None:
            raise TargetNotFound(f"node '{node_id}' not found", target=node_id)
        for action in node.actions:
            if action.id == action_id:
                return action
        raise InvalidOperation(f"node '{node_id}' has no action '{action_id}'", target=node_id)

    def _evolve(self, operations: tuple[EvolutionOperation | Mapping[str, Any], ...]) -> Schema:
        current = self._require_current()

        outcome = self.applier.apply_all(current, operations)
        if not is_successful(outcome):
            raise outcome.failure()

        # References to ids that existed before (removed or morphed away)
        # are tolerated; references to ids that never existed are not.
        tolerated = set(collect_ids(current.components))
        tolerated |= dangling_targets(current.components, (ROOT_TARGET,))

        document = self._accept(self.validator.validate(outcome.unwrap(), tolerated_refs=tolerated))
        return self._commit(self._stamp(self._with_defaults(document)))

    def _with_defaults(self, document: Schema) -> Schema:
        """Merge registry default props beneath each node's own props."""
        return document.model_copy(update={"components": self._defaults_for(document.components)})

    def _defaults_for(self, nodes: tuple[ComponentNode, ...]) -> tuple[ComponentNode, ...]:
        merged = []
        for node in nodes:
            definition = self.registry.resolve(node.type)
            changes: dict[str, Any] = {}
            if definition is not None and definition.default_props:
                missing = {k: v for k, v in definition.default_props.items() if k not in node.props}
                if missing:
                    changes["props"] = freeze({**missing, **node.props})
            if node.children:
                changes["children"] = self._defaults_for(node.children)
            merged.append(node.model_copy(update=changes) if changes else node)
        return tuple(merged)

    def _stamp(self, document: Schema) -> Schema:
        now = self._clock().isoformat()
        metadata = document.metadata.model_copy(
            update={
                "timestamp": document.metadata.timestamp or now,
                "processed_at": now,
                "engine_version": ENGINE_VERSION,
            }
        )
        return document.model_copy(update={"version": self._version + 1, "metadata": metadata})

    def _commit(self, document: Schema) -> Schema:
        self._store.commit(document)
        self._version = document.version

        logger.info("committed", schema_id=document.id, version=document.version)
        self._notify(document)
        return document


__all__ = ["Engine", "EngineState", "ActionOutcome", "Listener", "ENGINE_VERSION"]
