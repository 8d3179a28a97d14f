"""Record parsing - turns stored camelCase records into domain objects

Every lenient default (missing hours, missing adjustment amounts, missing
compensation basis) is applied here, once, so the domain functions only ever
see complete values.
"""

import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from labor_engine.config import settings
from labor_engine.domain.exceptions import MalformedInputError, PolicyGapError
from labor_engine.domain.models import (
    Adjustment,
    CompensationBasis,
    OvertimeRule,
    PolicySettings,
    StaffCompensation,
    WorkedHours,
    WorkInterval,
)
from labor_engine.domain.payroll import as_number
from labor_engine.utils.validators import is_date, require_date, require_time

ANALYSIS_POLICY_FIELDS = (
    "early_overtime_standard_hour",
    "early_leave_standard_hour",
    "late_night_start_hour",
    "late_night_end_hour",
)
# Field that sets the overtime boundary under each rule
OVERTIME_RULE_FIELDS = {
    OvertimeRule.FIXED_BOUNDARY: "overtime_standard_hour",
    OvertimeRule.ROLLING_DURATION: "regular_hours_per_day",
}
PAYROLL_POLICY_FIELDS = ("regular_hours_per_day", "overtime_rate", "default_hourly_rate")
STAFF_DATE_FIELDS = ("hireDate", "birthDate", "retireDate")


class RecordModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PolicyRecord(RecordModel):
    """system_settings row; every field optional until a computation needs it"""

    regular_hours_per_day: Optional[float] = Field(None, alias="regularHoursPerDay")
    early_overtime_standard_hour: Optional[float] = Field(None, alias="earlyOvertimeStandardHour")
    early_leave_standard_hour: Optional[float] = Field(None, alias="earlyLeaveStandardHour")
    overtime_standard_hour: Optional[float] = Field(None, alias="overtimeStandardHour")
    late_night_start_hour: Optional[float] = Field(None, alias="lateNightStartHour")
    late_night_end_hour: Optional[float] = Field(None, alias="lateNightEndHour")
    overtime_rate: Optional[float] = Field(None, alias="overtimeRate")
    default_hourly_rate: Optional[float] = Field(None, alias="defaultHourlyRate")
    overtime_rule: Optional[OvertimeRule] = Field(None, alias="overtimeRule")
    default_break_minutes: Optional[float] = Field(None, alias="defaultBreakMinutes")
    break_minutes_for_6_hours: Optional[float] = Field(None, alias="breakMinutesFor6Hours")
    break_minutes_for_8_hours: Optional[float] = Field(None, alias="breakMinutesFor8Hours")
    overtime_threshold: Optional[float] = Field(None, alias="overtimeThreshold")
    excess_overtime_rate: Optional[float] = Field(None, alias="excessOvertimeRate")
    late_night_rate: Optional[float] = Field(None, alias="lateNightRate")
    holiday_rate: Optional[float] = Field(None, alias="holidayRate")


class AdjustmentRecord(RecordModel):
    name: str = ""
    amount: float = 0.0

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> float:
        return as_number(value)


class StaffRecord(RecordModel):
    """Compensation columns of a staff row"""

    id: str
    monthly_salary: Optional[float] = Field(None, alias="monthlySalary")
    hourly_rate: Optional[float] = Field(None, alias="hourlyRate")
    allowances: List[AdjustmentRecord] = Field(default_factory=list)
    deductions: List[AdjustmentRecord] = Field(default_factory=list)

    @field_validator("allowances", "deductions", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("monthly_salary", "hourly_rate", mode="before")
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        return None if value == "" else value

    def to_domain(self) -> StaffCompensation:
        return StaffCompensation(
            staff_id=self.id,
            basis=CompensationBasis(monthly_salary=self.monthly_salary, hourly_rate=self.hourly_rate),
            allowances=[Adjustment(name=a.name, amount=a.amount) for a in self.allowances],
            deductions=[Adjustment(name=d.name, amount=d.amount) for d in self.deductions],
        )


class AttendanceRecord(RecordModel):
    """attendance row; only workHours matters to payroll, the rest is tolerated as stored"""

    date: Optional[datetime.date] = None
    staff_id: Optional[str] = Field(None, alias="staffId")
    start_time: str = Field("00:00:00", alias="startTime")
    end_time: str = Field("00:00:00", alias="endTime")
    work_hours: float = Field(0.0, alias="workHours")

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> Optional[datetime.date]:
        # Date columns arrive as date/datetime from drivers, as strings from JSON
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        if isinstance(value, str) and is_date(value):
            return datetime.date.fromisoformat(value)
        return None

    @field_validator("staff_id", mode="before")
    @classmethod
    def _staff_id(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @field_validator("work_hours", mode="before")
    @classmethod
    def _work_hours(cls, value: Any) -> float:
        return as_number(value)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _time_default(cls, value: Any) -> str:
        if not value:
            return "00:00:00"
        return value if isinstance(value, str) else str(value)

    def to_worked_hours(self) -> WorkedHours:
        return WorkedHours(work_hours=self.work_hours, staff_id=self.staff_id, date=self.date)

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class WorkAnalysisRequest(RecordModel):
    staff_id: str = Field(alias="staffId")
    work_start_time: str = Field(alias="workStartTime")
    work_end_time: str = Field(alias="workEndTime")
    date: str

    def to_interval(self) -> WorkInterval:
        return WorkInterval(
            date=require_date(self.date, "date"),
            start_time=require_time(self.work_start_time, "workStartTime"),
            end_time=require_time(self.work_end_time, "workEndTime"),
        )


def _malformed(error: ValidationError) -> MalformedInputError:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "record"
    return MalformedInputError(f"{field}: {first['msg']}", field=field)


def _validate_policy(record: Optional[Mapping[str, Any]]) -> PolicyRecord:
    if record is None:
        raise PolicyGapError("Policy settings record is missing")

    try:
        return PolicyRecord.model_validate(record)
    except ValidationError as e:
        raise PolicyGapError(f"Invalid policy settings: {_malformed(e)}") from e


def _build_policy(parsed: PolicyRecord, required: Sequence[str]) -> PolicySettings:
    missing = [name for name in required if getattr(parsed, name) is None]
    if missing:
        raise PolicyGapError(f"Policy settings missing required fields: {', '.join(missing)}")

    values = {name: value for name, value in parsed.model_dump().items() if value is not None}
    values.setdefault("overtime_rule", settings.overtime_rule)
    return PolicySettings(**values)


def parse_policy(record: Optional[Mapping[str, Any]], required: Sequence[str] = ()) -> PolicySettings:
    """
    Build PolicySettings from a stored settings record.

    Fields listed in `required` must be present; the rest fall back to the
    engine defaults. The overtime rule falls back to the configured one.

    Raises:
        PolicyGapError: record missing, or a required field absent/non-numeric
    """
    return _build_policy(_validate_policy(record), required)


def parse_analysis_policy(record: Optional[Mapping[str, Any]]) -> PolicySettings:
    """Policy for interval analysis; the boundary field depends on the overtime rule"""
    parsed = _validate_policy(record)
    rule = parsed.overtime_rule or settings.overtime_rule
    return _build_policy(parsed, ANALYSIS_POLICY_FIELDS + (OVERTIME_RULE_FIELDS[rule],))


def parse_payroll_policy(record: Optional[Mapping[str, Any]]) -> PolicySettings:
    return parse_policy(record, PAYROLL_POLICY_FIELDS)


def parse_staff(record: Mapping[str, Any]) -> StaffCompensation:
    try:
        return StaffRecord.model_validate(record).to_domain()
    except ValidationError as e:
        raise _malformed(e) from e


def parse_attendance(records: Iterable[Mapping[str, Any]]) -> List[WorkedHours]:
    try:
        return [AttendanceRecord.model_validate(r).to_worked_hours() for r in records]
    except ValidationError as e:
        raise _malformed(e) from e


def parse_work_analysis_request(request: Any) -> WorkAnalysisRequest:
    if not isinstance(request, Mapping):
        raise MalformedInputError("request body is required", field="body")

    for name in ("staffId", "workStartTime", "workEndTime", "date"):
        if not request.get(name) or not isinstance(request.get(name), str):
            raise MalformedInputError(f"{name} is required", field=name)

    return WorkAnalysisRequest.model_validate(request)


def validate_attendance(record: Mapping[str, Any]) -> None:
    """Single attendance record: all clock fields and a numeric workHours"""
    for name in ("date", "startTime", "endTime", "staffId"):
        value = record.get(name)
        if not value or not isinstance(value, str):
            raise MalformedInputError(f"{name} is required", field=name)

    work_hours = record.get("workHours")
    if isinstance(work_hours, bool) or not isinstance(work_hours, (int, float)):
        raise MalformedInputError("workHours is required and must be a number", field="workHours")


def convert_bulk_attendance(work_date: Any, items: Any) -> List[Dict[str, Any]]:
    """
    Expand a bulk check-in for one day into attendance records.

    Each item needs a staffId; missing times default to "00:00:00" and
    missing workHours to 0. An empty list is valid.
    """
    if not work_date or not isinstance(work_date, str):
        raise MalformedInputError("date is required and must be a string", field="date")

    if not isinstance(items, list):
        raise MalformedInputError("attendanceList must be an array", field="attendanceList")

    for i, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise MalformedInputError(f"attendanceList[{i}] must be an object", field=f"attendanceList[{i}]")
        staff_id = item.get("staffId")
        if not staff_id or not isinstance(staff_id, str):
            raise MalformedInputError(f"attendanceList[{i}].staffId is required", field=f"attendanceList[{i}].staffId")

    return [{**AttendanceRecord.model_validate(item).to_record(), "date": work_date} for item in items]


def normalize_staff_dates(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop blank hire/birth/retire dates, reject malformed ones"""
    normalized = dict(record)
    for name in STAFF_DATE_FIELDS:
        value = normalized.get(name)
        if value is None or value == "":
            normalized.pop(name, None)
        elif isinstance(value, str):
            require_date(value, name)
    return normalized
