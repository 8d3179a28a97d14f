"""Payroll aggregator - core compensation logic for a pay period"""

import math
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from labor_engine.domain.exceptions import PolicyGapError
from labor_engine.domain.models import (
    Adjustment,
    CompensationBasis,
    PayrollResult,
    PolicySettings,
    StaffCompensation,
    StaffPayroll,
    WorkedHours,
)
from labor_engine.utils.date_utils import in_range, month_bounds
from labor_engine.utils.validators import require_month


def as_number(value: Any) -> float:
    """Lenient numeric coercion: missing, non-numeric and NaN become 0"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def sum_adjustments(adjustments: Optional[Iterable[Adjustment]]) -> float:
    return sum((as_number(item.amount) for item in adjustments or ()), 0.0)


def calculate_payroll(
    basis: CompensationBasis,
    worked_hours: Sequence[WorkedHours],
    allowances: Optional[Sequence[Adjustment]],
    deductions: Optional[Sequence[Adjustment]],
    policy: Optional[PolicySettings],
) -> PayrollResult:
    """
    Aggregate a period's worked hours into pay.

    Basis precedence: monthly salary, then explicit hourly rate, then the
    policy's default hourly rate.

    - Salaried: regular hours = regular_hours_per_day * work_days, overtime
      hours are reported but not paid here (settled downstream).
    - Hourly: regular hours capped at the daily allowance, overtime paid at
      rate * (1 + overtime_rate / 100).

    Allowances are added and deductions subtracted from the total.
    """
    if policy is None:
        raise PolicyGapError("Policy settings are required for payroll calculation")

    total_work_hours = sum((as_number(entry.work_hours) for entry in worked_hours), 0.0)
    work_days = len(worked_hours)
    allowed_hours = policy.regular_hours_per_day * work_days

    if basis.monthly_salary:
        regular_hours = allowed_hours
        overtime_hours = max(0.0, total_work_hours - regular_hours)
        basis_name = "monthly"
        hourly_rate = None
        base_pay = basis.monthly_salary
        overtime_pay = 0.0
    else:
        if basis.hourly_rate:
            basis_name, hourly_rate = "hourly", basis.hourly_rate
        else:
            basis_name, hourly_rate = "default_hourly", policy.default_hourly_rate
        regular_hours = min(total_work_hours, allowed_hours)
        overtime_hours = max(0.0, total_work_hours - regular_hours)
        base_pay = regular_hours * hourly_rate
        overtime_pay = overtime_hours * hourly_rate * (1 + policy.overtime_rate / 100)

    allowances_total = sum_adjustments(allowances)
    deductions_total = sum_adjustments(deductions)

    return PayrollResult(
        basis=basis_name,
        work_days=work_days,
        total_work_hours=total_work_hours,
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        base_pay=base_pay,
        overtime_pay=overtime_pay,
        allowances_total=allowances_total,
        deductions_total=deductions_total,
        total=base_pay + overtime_pay + allowances_total - deductions_total,
        hourly_rate=hourly_rate,
        allowances=list(allowances or []),
        deductions=list(deductions or []),
    )


def group_by_staff(records: Iterable[WorkedHours]) -> Dict[str, List[WorkedHours]]:
    """Group attendance by staff id, keeping first-seen order"""
    groups: Dict[str, List[WorkedHours]] = OrderedDict()
    for record in records:
        if not record.staff_id:
            continue
        groups.setdefault(record.staff_id, []).append(record)
    return groups


def records_in_month(month: str, records: Iterable[WorkedHours]) -> List[WorkedHours]:
    """Attendance dated within the month; undated records are dropped"""
    year, month_number = require_month(month, "month")
    first_day, last_day = month_bounds(year, month_number)
    return [r for r in records if r.date is not None and in_range(r.date, first_day, last_day)]


def run_monthly_payroll(
    month: str,
    staff: Mapping[str, StaffCompensation],
    records: Iterable[WorkedHours],
    policy: Optional[PolicySettings],
) -> List[StaffPayroll]:
    """
    Compute payroll for every staff member with attendance in the month.

    Staff ids with attendance but no compensation record are skipped.
    """
    if policy is None:
        raise PolicyGapError("Policy settings are required for payroll calculation")

    results = []
    for staff_id, attendances in group_by_staff(records_in_month(month, records)).items():
        terms = staff.get(staff_id)
        if terms is None:
            continue

        result = calculate_payroll(terms.basis, attendances, terms.allowances, terms.deductions, policy)
        results.append(StaffPayroll(month=month, staff_id=staff_id, result=result))

    return results
