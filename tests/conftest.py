from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from dayflow.attendance.model import AttendanceRecord, AttendanceReportRow
from dayflow.company.model import Company
from dayflow.container import build_services
from dayflow.core.enums import AttendanceStatus, LeaveStatus, NotificationType, PayrollStatus, Role
from dayflow.core.exceptions import DuplicateRecordError, ValidationError
from dayflow.leaves.model import LeaveBalance, LeaveRequest
from dayflow.notifications.model import Notification
from dayflow.payroll.model import PayrollHistoryRow, PayrollRecord
from dayflow.salary.model import EmployeeSalary, SalaryInfo
from dayflow.users.model import User


class InMemoryCompanies:
    def __init__(self, *companies: Company):
        self.companies = {c.company_id: c for c in companies}

    def get_by_id(self, company_id: int) -> Optional[Company]:
        return self.companies.get(company_id)

    def update_settings(self, company_id, settings) -> bool:
        c = self.companies[company_id]
        self.companies[company_id] = replace(
            c, start_time=settings.start_time, work_hours=settings.work_hours, grace_period=settings.grace_period
        )
        return True


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}
        self.counters: dict[tuple[int, int], int] = {}

    def add(self, user: User) -> User:
        self.users[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_login(self, login: str) -> Optional[User]:
        for u in self.users.values():
            if u.login_id == login or u.email == login.lower():
                return u
        return None

    def email_exists(self, email: str) -> bool:
        return any(u.email == email for u in self.users.values())

    def next_serial(self, *, company_id: int, year: int) -> int:
        key = (company_id, year)
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]

    def create_user(self, **kwargs) -> int:
        user_id = max(self.users, default=0) + 1
        self.users[user_id] = User(user_id=user_id, is_first_login=True, **kwargs)
        return user_id

    def update_password(self, user_id: int, *, password_hash: str, is_first_login: bool) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], password_hash=password_hash, is_first_login=is_first_login)
        return True

    def list_for_company(self, company_id: int):
        return [u for u in self.users.values() if u.company_id == company_id]

    def update_profile(self, user_id: int, *, changes) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], **changes)
        return True


class InMemorySalaries:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.rows: dict[int, SalaryInfo] = {}

    def get_for_user(self, user_id: int) -> Optional[SalaryInfo]:
        return self.rows.get(user_id)

    def upsert(self, *, user_id, wage, yearly_wage, components) -> None:
        self.rows[user_id] = SalaryInfo(
            user_id=user_id,
            monthly_wage=wage.monthly_wage,
            yearly_wage=yearly_wage,
            components=components,
            working_days=wage.working_days,
            working_hours=wage.working_hours,
        )

    def list_with_employees(self, *, company_id: int, user_id: Optional[int] = None):
        out = []
        for uid, info in self.rows.items():
            user = self._users.get_by_id(uid)
            if user.company_id != company_id or (user_id is not None and uid != user_id):
                continue
            out.append(EmployeeSalary(info=info, employee=user))
        return out


class InMemoryPayrolls:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.records: dict[int, PayrollRecord] = {}

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        return self.records.get(payroll_id)

    def get_for_user_and_period(self, user_id: int, pay_period: str) -> Optional[PayrollRecord]:
        for r in self.records.values():
            if r.user_id == user_id and r.pay_period == pay_period:
                return r
        return None

    def create(self, payroll) -> int:
        if self.get_for_user_and_period(payroll.user_id, payroll.pay_period):
            raise DuplicateRecordError("Payroll already exists for this period")
        payroll_id = len(self.records) + 1
        self.records[payroll_id] = PayrollRecord(
            payroll_id=payroll_id,
            user_id=payroll.user_id,
            pay_period=payroll.pay_period,
            basic_salary=payroll.basic_salary,
            allowances=payroll.allowances,
            deductions=payroll.deductions,
            net_salary=payroll.net_salary,
            status=PayrollStatus.DRAFT,
        )
        return payroll_id

    def mark_processed(self, payroll_id: int, *, processed_at: datetime) -> bool:
        r = self.records.get(payroll_id)
        if not r or r.status != PayrollStatus.DRAFT:
            return False
        self.records[payroll_id] = replace(r, status=PayrollStatus.PROCESSED, processed_at=processed_at)
        return True

    def list_history(self, *, company_id: int, user_id: Optional[int] = None, pay_period: Optional[str] = None):
        rows = []
        for r in self.records.values():
            user = self._users.get_by_id(r.user_id)
            if user.company_id != company_id:
                continue
            if user_id is not None and r.user_id != user_id:
                continue
            if pay_period is not None and r.pay_period != pay_period:
                continue
            rows.append(
                PayrollHistoryRow(record=r, login_id=user.login_id, full_name=user.full_name, department=user.department)
            )
        rows.sort(key=lambda row: row.record.pay_period, reverse=True)
        return rows


class InMemoryAttendance:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.records: dict[int, AttendanceRecord] = {}

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self.records[record.attendance_id] = record
        return record

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in self.records.values():
            if r.user_id == user_id and r.work_date == work_date:
                return r
        return None

    def list_open(self, user_id: int) -> list[AttendanceRecord]:
        open_records = [r for r in self.records.values() if r.user_id == user_id and r.check_out_time is None]
        return sorted(open_records, key=lambda r: r.check_in_time, reverse=True)

    def create_checkin(self, *, user_id: int, work_date: date, check_in_time: datetime, status: AttendanceStatus) -> int:
        attendance_id = len(self.records) + 1
        self.records[attendance_id] = AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            status=status,
        )
        return attendance_id

    def update_checkout(self, *, attendance_id, check_out_time, status, work_hours, extra_hours) -> bool:
        r = self.records.get(attendance_id)
        if not r or r.check_out_time is not None:
            return False
        self.records[attendance_id] = replace(
            r, check_out_time=check_out_time, status=status, work_hours=work_hours, extra_hours=extra_hours
        )
        return True

    def list_for_user(self, user_id: int, *, start_date: date, end_date: date):
        rows = [r for r in self.records.values() if r.user_id == user_id and start_date <= r.work_date <= end_date]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)

    def list_for_company_date(self, company_id: int, work_date: date):
        return [
            r
            for r in self.records.values()
            if r.work_date == work_date and self._users.get_by_id(r.user_id).company_id == company_id
        ]

    def count_by_date(self, company_id: int, *, start_date: date, end_date: date):
        counts: dict[date, int] = {}
        for r in self.records.values():
            if start_date <= r.work_date <= end_date and self._users.get_by_id(r.user_id).company_id == company_id:
                counts[r.work_date] = counts.get(r.work_date, 0) + 1
        return counts

    def get_report_rows(self, *, company_id, start_date=None, end_date=None, user_id=None):
        rows = []
        for r in self.records.values():
            user = self._users.get_by_id(r.user_id)
            if user.company_id != company_id or (user_id is not None and r.user_id != user_id):
                continue
            if (start_date and r.work_date < start_date) or (end_date and r.work_date > end_date):
                continue
            rows.append(
                AttendanceReportRow(record=r, login_id=user.login_id, full_name=user.full_name, department=user.department)
            )
        return sorted(rows, key=lambda x: (-x.record.work_date.toordinal(), x.full_name))


class InMemoryLeaves:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.requests: dict[int, LeaveRequest] = {}
        self.balances: dict[int, LeaveBalance] = {}

    def create(self, *, user_id, company_id, leave_type, start_date, end_date, reason) -> int:
        request_id = len(self.requests) + 1
        user = self._users.get_by_id(user_id)
        self.requests[request_id] = LeaveRequest(
            request_id=request_id,
            user_id=user_id,
            company_id=company_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            employee_name=user.full_name,
            login_id=user.login_id,
        )
        return request_id

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        return self.requests.get(request_id)

    def list_requests(self, *, company_id, user_id=None, status=None):
        return [
            r
            for r in self.requests.values()
            if r.company_id == company_id
            and (user_id is None or r.user_id == user_id)
            and (status is None or r.status == status)
        ]

    def decide(self, request_id: int, *, status, admin_comment) -> bool:
        r = self.requests.get(request_id)
        if not r or r.status != LeaveStatus.PENDING:
            return False
        self.requests[request_id] = replace(r, status=status, admin_comment=admin_comment)
        return True

    def approve(self, request_id: int, *, user_id, leave_type, days: int, admin_comment) -> bool:
        r = self.requests.get(request_id)
        if not r or r.status != LeaveStatus.PENDING:
            return False
        b = self.balances.get(user_id)
        if not b or b.available(leave_type) < days:
            raise ValidationError("Insufficient leave balance")
        field = f"{leave_type.value}_days_left"
        self.balances[user_id] = replace(b, **{field: getattr(b, field) - days})
        self.requests[request_id] = replace(r, status=LeaveStatus.APPROVED, admin_comment=admin_comment)
        return True

    def approved_user_ids_on(self, *, company_id: int, day: date):
        return [
            r.user_id
            for r in self.requests.values()
            if r.company_id == company_id and r.status == LeaveStatus.APPROVED and r.covers(day)
        ]

    def count_by_status(self, company_id: int):
        counts: dict[LeaveStatus, int] = {}
        for r in self.requests.values():
            if r.company_id == company_id:
                counts[r.status] = counts.get(r.status, 0) + 1
        return counts

    def get_balance(self, user_id: int) -> Optional[LeaveBalance]:
        return self.balances.get(user_id)

    def create_balance(self, user_id: int, *, year: int) -> LeaveBalance:
        self.balances[user_id] = LeaveBalance(user_id=user_id, year=year)
        return self.balances[user_id]


class InMemoryNotifications:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.items: dict[int, Notification] = {}

    def create_many(self, *, user_ids, type, title, message) -> int:
        for uid in user_ids:
            nid = len(self.items) + 1
            self.items[nid] = Notification(notification_id=nid, user_id=uid, type=type, title=title, message=message)
        return len(user_ids)

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        return self.items.get(notification_id)

    def _in_company(self, n: Notification, company_id: int) -> bool:
        return self._users.get_by_id(n.user_id).company_id == company_id

    def list_for_company(self, company_id, *, type=None, unread_only=False, limit=100):
        rows = [
            n
            for n in self.items.values()
            if self._in_company(n, company_id)
            and (type is None or n.type == type)
            and (not unread_only or not n.is_read)
        ]
        return rows[:limit]

    def list_for_user(self, user_id, *, limit=100):
        return [n for n in self.items.values() if n.user_id == user_id][:limit]

    def count_unread(self, *, company_id=None, user_id=None) -> int:
        return sum(
            1
            for n in self.items.values()
            if not n.is_read
            and (company_id is None or self._in_company(n, company_id))
            and (user_id is None or n.user_id == user_id)
        )

    def count_by_type(self, company_id):
        counts: dict[NotificationType, int] = {}
        for n in self.items.values():
            if self._in_company(n, company_id):
                counts[n.type] = counts.get(n.type, 0) + 1
        return counts

    def mark_read(self, notification_id, *, user_id) -> bool:
        n = self.items.get(notification_id)
        if not n or n.user_id != user_id:
            return False
        self.items[notification_id] = replace(n, is_read=True)
        return True

    def delete(self, notification_id) -> bool:
        return self.items.pop(notification_id, None) is not None


COMPANY_ID = 1
OTHER_COMPANY_ID = 2
PASSWORD = "secret123"
PASSWORD_HASH = generate_password_hash(PASSWORD)


def make_user(user_id: int, *, role: Role = Role.EMPLOYEE, company_id: int = COMPANY_ID, department=None, name=None) -> User:
    name = name or f"User {user_id}"
    return User(
        user_id=user_id,
        company_id=company_id,
        login_id=f"OIUSER2025{user_id:04d}",
        full_name=name,
        email=f"user{user_id}@example.com",
        password_hash=PASSWORD_HASH,
        role=role,
        department=department,
        job_title=None,
        date_joined=date(2025, 1, 1),
    )


class Repos:
    def __init__(self):
        self.companies = InMemoryCompanies(
            Company(company_id=COMPANY_ID, name="Odoo India", initials="OI", start_time=time(9, 0), work_hours=9.0, grace_period=15),
            Company(company_id=OTHER_COMPANY_ID, name="Other Co", initials="OC"),
        )
        self.users = InMemoryUsers()
        self.salaries = InMemorySalaries(self.users)
        self.payrolls = InMemoryPayrolls(self.users)
        self.attendance = InMemoryAttendance(self.users)
        self.leaves = InMemoryLeaves(self.users)
        self.notifications = InMemoryNotifications(self.users)

        self.admin = self.users.add(make_user(1, role=Role.ADMIN, name="Admin User"))
        self.hr = self.users.add(make_user(2, role=Role.HR, department="HR", name="Hannah Reyes"))
        self.alice = self.users.add(make_user(3, department="Engineering", name="Alice Smith"))
        self.bob = self.users.add(make_user(4, department="Sales", name="Bob Jones"))
        self.outsider = self.users.add(make_user(5, company_id=OTHER_COMPANY_ID, name="Olga Out"))


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 10, 9, 0, 0)


@pytest.fixture
def repos() -> Repos:
    return Repos()


@pytest.fixture
def services(repos):
    return build_services(
        users_repo=repos.users,
        companies_repo=repos.companies,
        salaries_repo=repos.salaries,
        payrolls_repo=repos.payrolls,
        attendance_repo=repos.attendance,
        leaves_repo=repos.leaves,
        notifications_repo=repos.notifications,
    )


@pytest.fixture
def password() -> str:
    return PASSWORD
