"""
Risk cycle scheduling.

One cycle = optional tracking refresh, bulk risk assessment, then demurrage
accrual. Cycles never overlap within a worker process: a cycle that starts
while another is running is skipped, not queued.
"""
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Optional
from uuid import UUID
import logging
import threading

from sqlalchemy.orm import Session

from app.services.demurrage import DemurrageCalculator, DemurrageRunSummary
from app.services.risk import (
    AssessmentRunSummary,
    ContainerRiskUpdate,
    ContainerStore,
    ExceptionStore,
    NotificationStore,
    RiskAssessmentService,
)

logger = logging.getLogger(__name__)


class ContainerNotFoundError(LookupError):
    """Raised when a single-container run names an unknown container."""

    def __init__(self, container_id: Any):
        self.container_id = container_id
        super().__init__(f"Container {container_id} not found")


class SingleFlightGuard:
    """Lock-protected running flag."""

    def __init__(self):
        self._lock = threading.Lock()
        self._running = False

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running

    def try_acquire(self) -> bool:
        """Set the flag if clear. Returns False when a run is in flight."""
        with self._lock:
            if self._running:
                return False
            self._running = True
            return True

    def release(self) -> None:
        with self._lock:
            self._running = False

    @contextmanager
    def hold(self) -> Iterator[bool]:
        """
        Yield whether the flag was acquired, releasing it on exit.

        Usage:
            with guard.hold() as acquired:
                if not acquired:
                    return
                ...
        """
        acquired = self.try_acquire()
        try:
            yield acquired
        finally:
            if acquired:
                self.release()


@dataclass
class CycleResult:
    """Outcome of one scheduled cycle."""
    started_at: datetime
    skipped: bool = False
    failed: bool = False
    error: Optional[str] = None
    risk: Optional[AssessmentRunSummary] = None
    demurrage: Optional[DemurrageRunSummary] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "started_at": self.started_at.isoformat(),
            "skipped": self.skipped,
            "failed": self.failed,
            "error": self.error,
            "risk": self.risk.to_dict() if self.risk else None,
            "demurrage": self.demurrage.to_dict() if self.demurrage else None,
        }


def build_risk_service(session: Session) -> RiskAssessmentService:
    """Wire the risk engine to SQLAlchemy stores sharing one session."""
    return RiskAssessmentService(
        containers=ContainerStore(session),
        exceptions=ExceptionStore(session),
        notifications=NotificationStore(session),
    )


def build_demurrage_calculator(session: Session) -> DemurrageCalculator:
    return DemurrageCalculator(
        containers=ContainerStore(session),
        notifications=NotificationStore(session),
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RiskScheduler:
    """
    Runs risk cycles against sessions from ``session_factory``.

    Args:
        session_factory: Callable returning a context-managed Session
        refresh: Optional hook run before assessment (e.g. tracking feed poll);
            a failing refresh is logged and the cycle uses stored data
        guard: Single-flight guard, one per worker process by default
        clock: Returns the evaluation instant (UTC)
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        refresh: Optional[Callable[[Session], Any]] = None,
        guard: Optional[SingleFlightGuard] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.session_factory = session_factory
        self.refresh = refresh
        self.guard = guard or SingleFlightGuard()
        self.clock = clock

    @property
    def is_running(self) -> bool:
        return self.guard.is_running

    def run_cycle(self) -> CycleResult:
        """Run one cycle unless another is already in flight."""
        result = CycleResult(started_at=self.clock())

        with self.guard.hold() as acquired:
            if not acquired:
                logger.debug("Risk cycle already running, skipping")
                result.skipped = True
                return result

            try:
                with self.session_factory() as session:
                    self._refresh(session)
                    result.risk = build_risk_service(session).assess_all_containers(
                        result.started_at
                    )
                    result.demurrage = build_demurrage_calculator(session).calculate_all_demurrage(
                        result.started_at
                    )
            except Exception as e:
                result.failed = True
                result.error = str(e)
                logger.exception(f"Risk cycle failed: {e}")

        return result

    def assess_container(self, container_id: UUID) -> ContainerRiskUpdate:
        """
        Assess one container immediately, outside the cycle guard.

        Raises:
            ContainerNotFoundError: Unknown container id
        """
        with self.session_factory() as session:
            service = build_risk_service(session)
            container = service.containers.get_container(container_id)
            if container is None:
                raise ContainerNotFoundError(container_id)

            now = self.clock()
            update = service.update_container_risk(container, now)
            build_demurrage_calculator(session).calculate_single_container(container, now)
            return update

    def _refresh(self, session: Session) -> None:
        if self.refresh is None:
            return
        try:
            self.refresh(session)
        except Exception as e:
            logger.error(f"Tracking refresh failed, assessing stored data: {e}")
