from datetime import date, datetime, time

from dayflow.attendance.factory import AttendanceStrategyFactory
from dayflow.attendance.model import AttendancePolicy
from dayflow.attendance.strategies.base import CheckInStrategy, CheckOutStrategy
from dayflow.attendance.strategies.half_day_strategy import HalfDayStrategy
from dayflow.attendance.strategies.late_strategy import LateStrategy
from dayflow.attendance.strategies.normal_strategy import NormalStrategy
from dayflow.core.enums import AttendanceStatus

POLICY = AttendancePolicy(start_time=time(9, 0), grace_minutes=15, work_hours=9.0)


def test_factory_checkin_on_time_within_grace():
    today = date(2025, 1, 1)
    now = datetime(2025, 1, 1, 9, 15, 0)

    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=now, today=today, policy=POLICY)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkin().status == AttendanceStatus.PRESENT


def test_factory_checkin_late_after_grace():
    today = date(2025, 1, 1)
    now = datetime(2025, 1, 1, 9, 15, 1)

    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=now, today=today, policy=POLICY)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin().status == AttendanceStatus.LATE


def test_factory_checkout_half_day_below_half_the_hours():
    factory = AttendanceStrategyFactory()

    strategy = factory.for_checkout(worked_hours=4.49, policy=POLICY)

    assert isinstance(strategy, HalfDayStrategy)
    decision = strategy.decide_checkout(current=AttendanceStatus.LATE)
    assert decision.status == AttendanceStatus.HALF_DAY


def test_factory_checkout_keeps_checkin_status():
    factory = AttendanceStrategyFactory()

    strategy = factory.for_checkout(worked_hours=4.5, policy=POLICY)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkout(current=AttendanceStatus.LATE).status == (
        AttendanceStatus.LATE
    )


def test_strategies_only_cover_their_phase():
    assert isinstance(NormalStrategy(), CheckInStrategy)
    assert isinstance(NormalStrategy(), CheckOutStrategy)
    assert not isinstance(LateStrategy(), CheckOutStrategy)
    assert not isinstance(HalfDayStrategy(), CheckInStrategy)
