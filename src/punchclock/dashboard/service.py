from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from datetime import date, datetime, timedelta
from typing import Any, Callable, Optional, Union

from ..common.datetime_utils import now_local
from ..core.constants import (
    ADMIN_AVG_WINDOW_DAYS,
    DEFAULT_DASHBOARD_QUERY_TIMEOUT,
    DEFAULT_DASHBOARD_WORKERS,
    EMPLOYEE_WINDOW_DAYS,
    HOURS_PRECISION,
)
from ..core.enums import Role
from ..core.exceptions import StoreError
from .model import AdminSummary, EmployeeSummary
from .repository import DashboardRepository

logger = logging.getLogger(__name__)


class DashboardService:
    """Role-scoped live metrics.

    Sub-queries run concurrently and are combined only once all of them
    have completed; any failure or timeout fails the whole summary.
    """

    def __init__(
        self,
        metrics: DashboardRepository,
        *,
        executor: Optional[Executor] = None,
        max_workers: int = DEFAULT_DASHBOARD_WORKERS,
        timeout: float = DEFAULT_DASHBOARD_QUERY_TIMEOUT,
        clock: Callable[[], datetime] = now_local,
    ):
        self._metrics = metrics
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dashboard")
        self._timeout = float(timeout)
        self._clock = clock

    def summarize(
        self,
        *,
        requester_id: int,
        requester_role: Role,
        today: Optional[date] = None,
    ) -> Union[AdminSummary, EmployeeSummary]:
        today = today or self._clock().date()

        if requester_role == Role.ADMIN:
            since = today - timedelta(days=ADMIN_AVG_WINDOW_DAYS)
            r = self._gather(
                {
                    "total_employees": self._metrics.count_employees,
                    "present_today": lambda: self._metrics.count_present_on(today),
                    "pending_leaves": lambda: self._metrics.count_pending_leaves(),
                    "avg_hours": lambda: self._metrics.average_hours_since(since),
                }
            )
            return AdminSummary(
                total_employees=int(r["total_employees"] or 0),
                present_today=int(r["present_today"] or 0),
                pending_leaves=int(r["pending_leaves"] or 0),
                avg_hours=round(float(r["avg_hours"] or 0), HOURS_PRECISION),
            )

        since = today - timedelta(days=EMPLOYEE_WINDOW_DAYS)
        user_id = int(requester_id)
        r = self._gather(
            {
                "days_present": lambda: self._metrics.count_records_since(user_id, since),
                "total_hours": lambda: self._metrics.sum_hours_since(user_id, since),
                "pending_leaves": lambda: self._metrics.count_pending_leaves(user_id),
            }
        )
        return EmployeeSummary(
            days_present=int(r["days_present"] or 0),
            total_hours=round(float(r["total_hours"] or 0), HOURS_PRECISION),
            pending_leaves=int(r["pending_leaves"] or 0),
        )

    def _gather(self, queries: dict[str, Callable[[], Any]]) -> dict[str, Any]:
        futures: dict[str, Future] = {name: self._executor.submit(fn) for name, fn in queries.items()}

        _, not_done = wait(futures.values(), timeout=self._timeout)
        if not_done:
            for f in not_done:
                f.cancel()
            logger.error("Dashboard aggregation timed out after %.1fs", self._timeout)
            raise StoreError("Dashboard query timed out")

        results: dict[str, Any] = {}
        for name, f in futures.items():
            try:
                results[name] = f.result()
            except StoreError:
                raise
            except Exception as e:
                logger.exception("Dashboard metric %s failed", name)
                raise StoreError("Database error") from e
        return results

    def close(self) -> None:
        self._executor.shutdown(wait=False)
