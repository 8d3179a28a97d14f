"""Interval analyzer - classifies a single shift against policy thresholds"""

from labor_engine.domain.models import AnalysisResult, OvertimeRule, PolicySettings, WorkInterval
from labor_engine.utils.validators import time_to_minutes

MINUTES_PER_DAY = 24 * 60


def effective_end_minutes(start_minutes: float, end_minutes: float) -> float:
    """End of shift in minutes; an end before the start rolls into the next day"""
    if end_minutes < start_minutes:
        return end_minutes + MINUTES_PER_DAY
    return end_minutes


def late_night_window(policy: PolicySettings) -> tuple[float, float]:
    """
    Late-night window as (start, end) minutes since midnight.

    An end hour at or before the start hour means the window closes the next
    morning, e.g. 22 -> 5 becomes (1320, 1740).
    """
    start = policy.late_night_start_hour * 60
    end = policy.late_night_end_hour * 60
    if policy.late_night_end_hour <= policy.late_night_start_hour:
        end += MINUTES_PER_DAY
    return start, end


def late_night_overlap_hours(start_minutes: float, end_minutes: float, policy: PolicySettings) -> float:
    """Hours of [start, end) falling inside the late-night window, 2 decimals"""
    window_start, window_end = late_night_window(policy)
    overlap_start = max(start_minutes, window_start)
    overlap_end = min(end_minutes, window_end)
    overlap_minutes = max(0.0, overlap_end - overlap_start)
    return round(overlap_minutes / 60, 2)


def is_overtime(start_minutes: float, end_minutes: float, policy: PolicySettings) -> bool:
    if end_minutes == start_minutes:
        return False

    if policy.overtime_rule == OvertimeRule.FIXED_BOUNDARY:
        return end_minutes / 60 > policy.overtime_standard_hour

    regular_end_minutes = start_minutes + policy.regular_hours_per_day * 60
    return end_minutes > regular_end_minutes


def is_early_leave(end_minutes: float, policy: PolicySettings) -> bool:
    end_hour = end_minutes / 60
    if policy.overtime_rule == OvertimeRule.FIXED_BOUNDARY:
        # Leaving before the standard hour
        return end_hour < policy.early_leave_standard_hour
    return end_hour > policy.early_leave_standard_hour


def analyze_interval(interval: WorkInterval, policy: PolicySettings) -> AnalysisResult:
    """
    Classify one work interval into overtime categories.

    - early_overtime: shift starts before early_overtime_standard_hour
    - overtime / early_leave: per policy.overtime_rule
    - late_night_overtime_hours: overlap with the late-night window

    Time strings are assumed well-formed; validation happens at the boundary.
    """
    start_minutes = time_to_minutes(interval.start_time)
    end_minutes = effective_end_minutes(start_minutes, time_to_minutes(interval.end_time))

    return AnalysisResult(
        early_overtime=start_minutes / 60 < policy.early_overtime_standard_hour,
        overtime=is_overtime(start_minutes, end_minutes, policy),
        early_leave=is_early_leave(end_minutes, policy),
        late_night_overtime_hours=late_night_overlap_hours(start_minutes, end_minutes, policy),
    )
