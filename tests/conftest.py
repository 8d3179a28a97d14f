"""Pytest fixtures for testing"""

import pytest
from dataclasses import replace
from datetime import date
from labor_engine.domain.models import OvertimeRule, PolicySettings


@pytest.fixture
def policy() -> PolicySettings:
    """Organization defaults with the rolling-duration overtime rule"""
    return PolicySettings(
        regular_hours_per_day=8,
        early_overtime_standard_hour=7,
        early_leave_standard_hour=17,
        overtime_standard_hour=17,
        late_night_start_hour=22,
        late_night_end_hour=5,
        overtime_rate=25,
        default_hourly_rate=1200,
        overtime_rule=OvertimeRule.ROLLING_DURATION,
    )


@pytest.fixture
def fixed_policy(policy: PolicySettings) -> PolicySettings:
    """Same thresholds, fixed clock-hour overtime boundary"""
    return replace(policy, overtime_rule=OvertimeRule.FIXED_BOUNDARY)


@pytest.fixture
def policy_record() -> dict:
    """system_settings row as stored"""
    return {
        "id": "settings-1",
        "regularHoursPerDay": 8,
        "defaultBreakMinutes": 60,
        "breakMinutesFor6Hours": 45,
        "breakMinutesFor8Hours": 60,
        "overtimeThreshold": 45,
        "overtimeRate": 25,
        "excessOvertimeRate": 50,
        "lateNightRate": 25,
        "holidayRate": 35,
        "lateNightStartHour": 22,
        "lateNightEndHour": 5,
        "earlyOvertimeStandardHour": 7,
        "earlyLeaveStandardHour": 17,
        "overtimeStandardHour": 17,
        "defaultHourlyRate": 1200,
    }


@pytest.fixture
def work_date() -> date:
    return date(2025, 2, 12)


@pytest.fixture
def staff_records() -> list[dict]:
    """Staff rows covering each compensation basis"""
    return [
        {
            "id": "staff_salaried",
            "name": "Sato",
            "monthlySalary": 300000,
            "allowances": [{"name": "commute", "amount": 15000}],
            "deductions": [{"name": "social insurance", "amount": 35000}],
        },
        {
            "id": "staff_hourly",
            "name": "Suzuki",
            "hourlyRate": 1500,
            "allowances": None,
            "deductions": [],
        },
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Tanaka",
        },
    ]


@pytest.fixture
def attendance_records() -> list[dict]:
    """February 2025 attendance plus one row outside the month"""
    return [
        {"date": "2025-02-03", "staffId": "staff_salaried", "startTime": "09:00", "endTime": "18:00", "workHours": 8},
        {"date": "2025-02-03", "staffId": "staff_hourly", "startTime": "09:00", "endTime": "19:00", "workHours": 10},
        {"date": "2025-02-04", "staffId": "staff_hourly", "startTime": "09:00", "endTime": "18:00", "workHours": 9},
        {"date": "2025-02-05", "staffId": "staff_hourly", "startTime": "09:00", "endTime": "17:00", "workHours": 8},
        {
            "date": "2025-02-05",
            "staffId": "550e8400-e29b-41d4-a716-446655440000",
            "startTime": "10:00",
            "endTime": "18:00",
            "workHours": 8,
        },
        {"date": "2025-02-28", "staffId": "staff_salaried", "startTime": "09:00", "endTime": "21:00", "workHours": 11},
        {"date": "2025-03-01", "staffId": "staff_salaried", "startTime": "09:00", "endTime": "18:00", "workHours": 8},
    ]
