"""Domain models - pure Python dataclasses representing payroll entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional


class OvertimeRule(str, Enum):
    """How a shift is classified as overtime / early leave"""

    # Overtime once the shift ends past overtime_standard_hour;
    # early leave when it ends before early_leave_standard_hour.
    FIXED_BOUNDARY = "fixed_boundary"
    # Overtime once the shift outlasts regular_hours_per_day from its own start;
    # early leave when it ends after early_leave_standard_hour.
    ROLLING_DURATION = "rolling_duration"


@dataclass(frozen=True)
class PolicySettings:
    """Organization-wide thresholds and rates (hours on a 0-24 clock)"""

    regular_hours_per_day: float = 8
    early_overtime_standard_hour: float = 7
    early_leave_standard_hour: float = 17
    overtime_standard_hour: float = 17
    late_night_start_hour: float = 22
    late_night_end_hour: float = 5
    overtime_rate: float = 25  # percent premium
    default_hourly_rate: float = 1200
    overtime_rule: OvertimeRule = OvertimeRule.ROLLING_DURATION

    # Carried through for the surrounding service, unused by the engine
    default_break_minutes: float = 60
    break_minutes_for_6_hours: float = 45
    break_minutes_for_8_hours: float = 60
    overtime_threshold: float = 45
    excess_overtime_rate: float = 50
    late_night_rate: float = 25
    holiday_rate: float = 35


@dataclass(frozen=True)
class WorkInterval:
    """One shift; end_time earlier than start_time means it ends the next day"""

    date: date
    start_time: str  # "HH:MM" or "HH:MM:SS"
    end_time: str


@dataclass(frozen=True)
class WorkedHours:
    """Attendance record reduced to its worked-hours figure"""

    work_hours: float = 0.0
    staff_id: Optional[str] = None
    date: Optional[date] = None


@dataclass(frozen=True)
class CompensationBasis:
    """Fixed monthly salary or hourly rate; salary wins when both are set"""

    monthly_salary: Optional[float] = None
    hourly_rate: Optional[float] = None


@dataclass(frozen=True)
class Adjustment:
    """Allowance or deduction line"""

    name: str
    amount: float = 0.0


@dataclass(frozen=True)
class StaffCompensation:
    """Compensation terms read from a staff record"""

    staff_id: str
    basis: CompensationBasis = field(default_factory=CompensationBasis)
    allowances: List[Adjustment] = field(default_factory=list)
    deductions: List[Adjustment] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    """Classification of a single shift"""

    early_overtime: bool
    overtime: bool
    early_leave: bool
    late_night_overtime_hours: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "earlyOvertime": self.early_overtime,
            "overtime": self.overtime,
            "earlyLeave": self.early_leave,
            "lateNightOvertimeHours": self.late_night_overtime_hours,
        }


@dataclass(frozen=True)
class PayrollResult:
    """Output of payroll aggregation for one staff member and period"""

    basis: str  # "monthly" | "hourly" | "default_hourly"
    work_days: int
    total_work_hours: float
    regular_hours: float
    overtime_hours: float
    base_pay: float
    overtime_pay: float
    allowances_total: float
    deductions_total: float
    total: float
    hourly_rate: Optional[float] = None
    allowances: List[Adjustment] = field(default_factory=list)
    deductions: List[Adjustment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Record shape stored by the payroll table"""
        data: Dict[str, Any] = {
            "workDays": self.work_days,
            "totalWorkHours": self.total_work_hours,
            "regularHours": self.regular_hours,
            "overtimeHours": self.overtime_hours,
            "overtimePay": self.overtime_pay,
            "allowances": [{"name": a.name, "amount": a.amount} for a in self.allowances],
            "deductions": [{"name": d.name, "amount": d.amount} for d in self.deductions],
            "allowancesTotal": self.allowances_total,
            "deductionsTotal": self.deductions_total,
            "total": self.total,
        }
        if self.basis == "monthly":
            data["baseSalary"] = self.base_pay
        else:
            data["hourlyRate"] = self.hourly_rate
            data["basePay"] = self.base_pay
        return data


@dataclass(frozen=True)
class StaffPayroll:
    """One row of a monthly payroll run"""

    month: str
    staff_id: str
    result: PayrollResult

    def to_dict(self) -> Dict[str, Any]:
        return {"month": self.month, "staffId": self.staff_id, "data": self.result.to_dict()}
