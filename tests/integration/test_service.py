"""Integration tests for the record service entry points"""

import logging
import pytest
from datetime import date
from prometheus_client import REGISTRY
from labor_engine.domain.exceptions import MalformedInputError, PolicyGapError
from labor_engine.service import analyze_work_time, calculate_monthly_payroll, calculate_staff_payroll


def sample(name: str, labels: dict | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


@pytest.fixture
def analysis_request() -> dict:
    return {
        "staffId": "550e8400-e29b-41d4-a716-446655440000",
        "workStartTime": "21:00",
        "workEndTime": "02:00",
        "date": "2025-02-12",
    }


def test_analyze_work_time_echoes_request(analysis_request: dict, policy_record: dict):
    response = analyze_work_time(analysis_request, policy_record)

    assert response == {
        "staffId": "550e8400-e29b-41d4-a716-446655440000",
        "date": "2025-02-12",
        "workStartTime": "21:00",
        "workEndTime": "02:00",
        "earlyOvertime": False,
        "overtime": False,  # 5h shift under the rolling rule
        "earlyLeave": True,
        "lateNightOvertimeHours": 4.0,
    }


def test_analyze_work_time_fixed_rule(analysis_request: dict, policy_record: dict):
    policy_record["overtimeRule"] = "fixed_boundary"
    response = analyze_work_time(analysis_request, policy_record)

    assert response["overtime"] is True
    assert response["earlyLeave"] is False
    assert response["lateNightOvertimeHours"] == 4.0


def test_analyze_work_time_records_metrics(analysis_request: dict, policy_record: dict):
    labels = {"overtime": "false", "early_leave": "true"}
    before = sample("labor_interval_analysis_total", labels)

    analyze_work_time(analysis_request, policy_record)

    assert sample("labor_interval_analysis_total", labels) == before + 1


def test_analyze_work_time_rejects_bad_date(analysis_request: dict, policy_record: dict):
    analysis_request["date"] = "2025-02-30"
    before = sample("labor_malformed_input_total", {"field": "date"})

    with pytest.raises(MalformedInputError) as exc_info:
        analyze_work_time(analysis_request, policy_record)

    assert exc_info.value.field == "date"
    assert sample("labor_malformed_input_total", {"field": "date"}) == before + 1


def test_analyze_work_time_rejects_bad_time(analysis_request: dict, policy_record: dict):
    analysis_request["workEndTime"] = "2pm"
    with pytest.raises(MalformedInputError, match="workEndTime"):
        analyze_work_time(analysis_request, policy_record)


def test_analyze_work_time_requires_policy(analysis_request: dict):
    with pytest.raises(PolicyGapError):
        analyze_work_time(analysis_request, None)


def test_calculate_staff_payroll_hourly(policy_record: dict):
    staff = {"id": "staff_hourly", "hourlyRate": 1500}
    attendance = [{"workHours": 10}, {"workHours": 9}, {"workHours": 8}]

    data = calculate_staff_payroll(staff, attendance, policy_record)

    assert data["hourlyRate"] == 1500
    assert data["workDays"] == 3
    assert data["totalWorkHours"] == 27
    assert data["regularHours"] == 24
    assert data["overtimeHours"] == 3
    assert data["basePay"] == 36000
    assert data["overtimePay"] == 5625
    assert data["total"] == 41625


def test_calculate_staff_payroll_salaried(policy_record: dict):
    staff = {
        "id": "staff_salaried",
        "monthlySalary": 300000,
        "allowances": [{"name": "commute", "amount": 15000}, {"name": "housing", "amount": 30000}],
        "deductions": [{"name": "insurance", "amount": 35000}, {"name": "pension", "amount": 32000}],
    }
    before = sample("labor_payroll_total", {"basis": "monthly"})

    data = calculate_staff_payroll(staff, [{"workHours": 8}], policy_record)

    assert data["baseSalary"] == 300000
    assert data["allowancesTotal"] == 45000
    assert data["deductionsTotal"] == 67000
    assert data["total"] == 278000
    assert sample("labor_payroll_total", {"basis": "monthly"}) == before + 1


def test_calculate_staff_payroll_requires_policy():
    with pytest.raises(PolicyGapError):
        calculate_staff_payroll({"id": "s1"}, [], None)


def test_calculate_staff_payroll_rejects_staff_without_id(policy_record: dict):
    with pytest.raises(MalformedInputError):
        calculate_staff_payroll({"hourlyRate": 1500}, [], policy_record)


def test_calculate_monthly_payroll_bad_month(staff_records: list, attendance_records: list, policy_record: dict):
    with pytest.raises(MalformedInputError, match="month"):
        calculate_monthly_payroll("2025-2", staff_records, attendance_records, policy_record)


def test_calculate_monthly_payroll_empty_month(staff_records: list, attendance_records: list, policy_record: dict):
    assert calculate_monthly_payroll("2024-07", staff_records, attendance_records, policy_record) == []


def test_calculate_staff_payroll_accepts_stored_column_types(policy_record: dict):
    """Date objects and numeric clock columns do not block the figure"""
    attendance = [
        {"date": date(2025, 2, 3), "staffId": "s1", "startTime": 900, "endTime": 1800, "workHours": 8},
        {"date": date(2025, 2, 4), "staffId": "s1", "workHours": 8},
    ]

    data = calculate_staff_payroll({"id": "s1", "hourlyRate": 1500}, attendance, policy_record)

    assert data["workDays"] == 2
    assert data["total"] == 24000


def test_calculate_monthly_payroll_with_date_objects(staff_records: list, policy_record: dict):
    attendance = [
        {"date": date(2025, 2, 3), "staffId": "staff_hourly", "startTime": 900, "workHours": 10},
        {"date": date(2025, 3, 3), "staffId": "staff_hourly", "workHours": 8},
    ]

    rows = calculate_monthly_payroll("2025-02", staff_records, attendance, policy_record)

    assert [row["staffId"] for row in rows] == ["staff_hourly"]
    assert rows[0]["data"]["workDays"] == 1
    assert rows[0]["data"]["overtimeHours"] == 2


def test_calculate_monthly_payroll_ignores_unknown_staff_outside_month(
    staff_records: list, attendance_records: list, policy_record: dict
):
    before = sample("labor_payroll_skipped_staff_total")
    attendance_records.append({"date": "2025-03-10", "staffId": "staff_gone", "workHours": 8})

    rows = calculate_monthly_payroll("2025-02", staff_records, attendance_records, policy_record)

    assert len(rows) == 3
    assert sample("labor_payroll_skipped_staff_total") == before


def test_calculate_monthly_payroll_logs_run_duration_once(
    staff_records: list, attendance_records: list, policy_record: dict, caplog
):
    caplog.set_level(logging.INFO)

    calculate_monthly_payroll("2025-02", staff_records, attendance_records, policy_record)

    rows = [r for r in caplog.records if getattr(r, "step", None) == "payroll_complete"]
    runs = [r for r in caplog.records if getattr(r, "step", None) == "payroll_run_complete"]
    assert len(rows) == 3
    assert all(r.duration_ms is None for r in rows)
    assert len(runs) == 1
    assert runs[0].staff_count == 3
    assert runs[0].skipped_count == 0
    assert runs[0].duration_ms >= 0
