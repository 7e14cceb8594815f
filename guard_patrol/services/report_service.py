"""
Service de rapports journaliers / Daily report service.
"""

from guard_patrol.schemas.report import DailySummary, GuardProgress


class ReportService:
    """Indicateurs du jour / Same-day indicators."""

    @staticmethod
    def completion_rate(completed: int, expected: int) -> int:
        """Taux de realisation / Completion rate (%)."""
        if expected <= 0:
            return 0
        return round((completed / expected) * 100)

    @staticmethod
    def daily_summary(date: str, completed: int, active_guards: int, target: int) -> DailySummary:
        expected = active_guards * target
        return DailySummary(
            date=date,
            completed=completed,
            expected=expected,
            missed=max(0, expected - completed),
            completion_rate=ReportService.completion_rate(completed, expected),
            active_guards=active_guards,
        )

    @staticmethod
    def guard_progress(guard_id: int, date: str, completed: int, target: int) -> GuardProgress:
        return GuardProgress(
            guard_id=guard_id,
            date=date,
            completed=completed,
            target=target,
            remaining=max(0, target - completed),
        )
