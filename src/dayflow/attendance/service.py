from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

from ..company.repository import CompanyRepository
from ..core import constants
from ..core.enums import AttendanceStatus, DayStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..leaves.repository import LeaveRepository
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import (
    AttendanceHistory,
    AttendancePolicy,
    AttendanceRecord,
    AttendanceSummary,
    BoardRow,
    DailyBoard,
)
from .repository import AttendanceRepository
from .status import derive_day_status, extra_hours, worked_hours

logger = logging.getLogger(__name__)

BOARD_VIEWERS = {Role.ADMIN, Role.HR}


def summarize_records(records: list[AttendanceRecord]) -> AttendanceSummary:
    return AttendanceSummary(
        total_days=len(records),
        present_days=sum(1 for r in records if r.status == AttendanceStatus.PRESENT),
        late_days=sum(1 for r in records if r.status == AttendanceStatus.LATE),
        half_days=sum(1 for r in records if r.status == AttendanceStatus.HALF_DAY),
        total_work_hours=round(sum(r.work_hours or 0.0 for r in records), 2),
        total_extra_hours=round(sum(r.extra_hours or 0.0 for r in records), 2),
    )


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        companies: CompanyRepository,
        leaves: LeaveRepository | None = None,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        min_checkout_minutes: int = constants.MIN_CHECKOUT_MINUTES,
        default_grace_minutes: int = constants.DEFAULT_GRACE_MINUTES,
    ):
        self._attendance = attendance
        self._users = users
        self._companies = companies
        self._leaves = leaves
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._min_checkout = timedelta(minutes=int(min_checkout_minutes))
        self._default_grace = int(default_grace_minutes)

    def _policy_for(self, company_id: int) -> AttendancePolicy:
        company = self._companies.get_by_id(int(company_id))
        if not company:
            # Unknown company: fall back to the default office hours
            return AttendancePolicy(grace_minutes=self._default_grace)
        return AttendancePolicy.from_company(company)

    def _get_user(self, user_id: int):
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def check_in(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or datetime.now()
        today = now.date()

        user = self._get_user(user_id)
        if self._attendance.get_for_user_and_date(user.user_id, today):
            raise ValidationError("Already checked in today")

        policy = self._policy_for(user.company_id)
        strategy = self._factory.for_checkin(now=now, today=today, policy=policy)
        decision = strategy.decide_checkin()

        attendance_id = self._attendance.create_checkin(
            user_id=user.user_id,
            work_date=today,
            check_in_time=now,
            status=decision.status,
        )
        logger.info("User %s checked in at %s (%s)", user.user_id, now.isoformat(), decision.status.value)
        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user.user_id,
            work_date=today,
            check_in_time=now,
            check_out_time=None,
            status=decision.status,
        )

    def check_out(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        """Close every open record and return the newest one.

        Records left open on earlier days are closed at the same time. The
        minimum duration only applies to the newest check-in.
        """

        now = now or datetime.now()

        user = self._get_user(user_id)
        open_records = list(self._attendance.list_open(user.user_id))
        if not open_records:
            raise ValidationError("No active check-in found")
        if now - open_records[0].check_in_time < self._min_checkout:
            raise ValidationError("Cannot check out within a minute of checking in")

        policy = self._policy_for(user.company_id)
        closed = [self._close(record, now=now, policy=policy) for record in open_records]
        if len(closed) > 1:
            logger.warning("User %s had %d open records; closed them all", user.user_id, len(closed))
        return closed[0]

    def _close(self, record: AttendanceRecord, *, now: datetime, policy: AttendancePolicy) -> AttendanceRecord:
        hours = worked_hours(record.check_in_time, now)
        strategy = self._factory.for_checkout(worked_hours=hours, policy=policy)
        decision = strategy.decide_checkout(current=record.status)

        work_hours = round(hours, 2)
        overtime = round(extra_hours(hours, policy), 2)
        if not self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            status=decision.status,
            work_hours=work_hours,
            extra_hours=overtime,
        ):
            raise ValidationError("No active check-in found")

        logger.info("User %s checked out after %.2fh (%s)", record.user_id, work_hours, decision.status.value)
        return replace(
            record,
            check_out_time=now,
            status=decision.status,
            work_hours=work_hours,
            extra_hours=overtime,
        )

    def _approved_leave_ids(self, company_id: int, day: date) -> set[int]:
        if not self._leaves:
            return set()
        return set(self._leaves.approved_user_ids_on(company_id=int(company_id), day=day))

    def _day_over(self, day: date, now: datetime, policy: AttendancePolicy) -> bool:
        end_of_day = datetime.combine(day, policy.start_time) + timedelta(hours=policy.work_hours)
        return now >= end_of_day

    def today(self, user_id: int, *, now: datetime | None = None) -> tuple[Optional[AttendanceRecord], DayStatus]:
        now = now or datetime.now()
        day = now.date()

        user = self._get_user(user_id)
        record = self._attendance.get_for_user_and_date(user.user_id, day)
        policy = self._policy_for(user.company_id)
        status = derive_day_status(
            record,
            on_leave=user.user_id in self._approved_leave_ids(user.company_id, day),
            day_over=self._day_over(day, now, policy),
        )
        return record, status

    def history(
        self,
        user_id: int,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
        today: date | None = None,
    ) -> AttendanceHistory:
        end_date = end_date or today or date.today()
        start_date = start_date or end_date - timedelta(days=constants.DEFAULT_HISTORY_LIMIT - 1)
        if start_date > end_date:
            raise ValidationError("Start date must be before end date")

        records = list(self._attendance.list_for_user(int(user_id), start_date=start_date, end_date=end_date))
        return AttendanceHistory(records=records, summary=summarize_records(records))

    def daily_board(
        self,
        *,
        current_role: Role,
        company_id: int,
        day: date | None = None,
        now: datetime | None = None,
    ) -> DailyBoard:
        if current_role not in BOARD_VIEWERS:
            raise AuthorizationError("Admin or HR access required")

        now = now or datetime.now()
        day = day or now.date()
        policy = self._policy_for(company_id)
        day_over = self._day_over(day, now, policy)

        by_user = {r.user_id: r for r in self._attendance.list_for_company_date(int(company_id), day)}
        on_leave = self._approved_leave_ids(company_id, day)

        rows: list[BoardRow] = []
        stats = {"total": 0, "present": 0, "late": 0, "half_day": 0, "absent": 0, "on_leave": 0, "not_checked_in": 0}
        for employee in self._users.list_for_company(int(company_id)):
            if not employee.is_active:
                continue
            record = by_user.get(employee.user_id)
            status = derive_day_status(record, on_leave=employee.user_id in on_leave, day_over=day_over)
            rows.append(BoardRow(employee=employee, record=record, status=status))

            stats["total"] += 1
            if status in (DayStatus.CHECKED_IN, DayStatus.CHECKED_OUT, DayStatus.LATE):
                # Late arrivals still count as present
                stats["present"] += 1
                if status == DayStatus.LATE:
                    stats["late"] += 1
            elif status == DayStatus.HALF_DAY:
                stats["half_day"] += 1
            elif status == DayStatus.ON_LEAVE:
                stats["on_leave"] += 1
            elif status == DayStatus.ABSENT:
                stats["absent"] += 1
            else:
                stats["not_checked_in"] += 1

        return DailyBoard(work_date=day, rows=rows, stats=stats)
