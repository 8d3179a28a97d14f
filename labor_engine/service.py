"""Request-level entry points used by the surrounding record service

Each function takes records as they are stored (camelCase mappings), builds
domain objects, runs the pure computation and returns a plain mapping for the
caller to persist or serialize. MalformedInputError should surface as a 400
response; anything else as a 500.
"""

import logging
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional

from labor_engine.config import settings
from labor_engine.domain.exceptions import MalformedInputError, error_message
from labor_engine.domain.interval_analysis import analyze_interval
from labor_engine.domain.payroll import calculate_payroll, group_by_staff, records_in_month, run_monthly_payroll
from labor_engine.infrastructure.observability.logging import log_analysis, log_payroll, log_payroll_run, setup_logging
from labor_engine.infrastructure.observability.metrics import (
    record_analysis,
    record_malformed_input,
    record_payroll,
    skipped_staff_counter,
)
from labor_engine.infrastructure.records import (
    parse_analysis_policy,
    parse_attendance,
    parse_payroll_policy,
    parse_staff,
    parse_work_analysis_request,
)

# Setup structured logging
setup_logging(settings.log_level)


def analyze_work_time(request: Any, policy_record: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Classify one shift.

    Flow:
    1. Validate staffId, workStartTime, workEndTime and date
    2. Build policy (fails with PolicyGapError when thresholds are missing)
    3. Analyze and echo the request alongside the result
    """
    start_time = time.time()

    try:
        parsed = parse_work_analysis_request(request)
        interval = parsed.to_interval()
    except MalformedInputError as e:
        record_malformed_input(e.field)
        logging.warning(f"Malformed work analysis request: {error_message(e)}")
        raise

    policy = parse_analysis_policy(policy_record)
    result = analyze_interval(interval, policy)

    duration_ms = (time.time() - start_time) * 1000
    record_analysis(result.overtime, result.early_leave, result.late_night_overtime_hours)
    log_analysis(
        parsed.staff_id,
        parsed.date,
        result.overtime,
        result.early_leave,
        result.late_night_overtime_hours,
        duration_ms,
    )

    return {
        "staffId": parsed.staff_id,
        "date": parsed.date,
        "workStartTime": parsed.work_start_time,
        "workEndTime": parsed.work_end_time,
        **result.to_dict(),
    }


def calculate_staff_payroll(
    staff_record: Mapping[str, Any],
    attendance_records: Iterable[Mapping[str, Any]],
    policy_record: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    """Payroll for one staff member over already-filtered attendance"""
    start_time = time.time()

    try:
        staff = parse_staff(staff_record)
        worked_hours = parse_attendance(attendance_records)
    except MalformedInputError as e:
        record_malformed_input(e.field)
        logging.warning(f"Malformed payroll input: {error_message(e)}")
        raise

    policy = parse_payroll_policy(policy_record)
    result = calculate_payroll(staff.basis, worked_hours, staff.allowances, staff.deductions, policy)

    duration_ms = (time.time() - start_time) * 1000
    record_payroll(result.basis, result.total)
    log_payroll(staff.staff_id, result.basis, result.work_days, result.total, duration_ms)

    return result.to_dict()


def calculate_monthly_payroll(
    month: str,
    staff_records: Iterable[Mapping[str, Any]],
    attendance_records: Iterable[Mapping[str, Any]],
    policy_record: Optional[Mapping[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Payroll run for every staff member with attendance in `month` (YYYY-MM).

    Attendance belonging to unknown staff is skipped and counted.
    """
    start_time = time.time()

    try:
        staff = {s.staff_id: s for s in (parse_staff(r) for r in staff_records)}
        worked_hours = parse_attendance(attendance_records)
        in_month = records_in_month(month, worked_hours)
    except MalformedInputError as e:
        record_malformed_input(e.field)
        logging.warning(f"Malformed payroll run input: {error_message(e)}")
        raise

    policy = parse_payroll_policy(policy_record)

    skipped = [staff_id for staff_id in group_by_staff(in_month) if staff_id not in staff]
    for staff_id in skipped:
        skipped_staff_counter.inc()
        logging.warning("Skipping attendance for unknown staff", extra={"staff_id": staff_id, "month": month})

    rows = run_monthly_payroll(month, staff, worked_hours, policy)

    for row in rows:
        record_payroll(row.result.basis, row.result.total)
        log_payroll(row.staff_id, row.result.basis, row.result.work_days, row.result.total, month=month)

    duration_ms = (time.time() - start_time) * 1000
    log_payroll_run(month, len(rows), len(skipped), duration_ms)

    return [row.to_dict() for row in rows]
