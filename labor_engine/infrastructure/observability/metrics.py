"""Prometheus metrics for work analysis and payroll runs"""

from prometheus_client import Counter, Histogram

# Work analysis metrics
analysis_counter = Counter(
    "labor_interval_analysis_total",
    "Work intervals analyzed",
    ["overtime", "early_leave"],
)

late_night_hours_histogram = Histogram(
    "labor_late_night_hours",
    "Late-night hours per analyzed interval",
    buckets=[0.0, 0.5, 1.0, 2.0, 4.0, 7.0, 12.0],
)

# Payroll metrics
payroll_counter = Counter(
    "labor_payroll_total",
    "Payroll calculations by compensation basis",
    ["basis"],  # monthly | hourly | default_hourly
)

payroll_amount_histogram = Histogram(
    "labor_payroll_amount",
    "Net payroll total per staff member",
    buckets=[0, 50_000, 100_000, 200_000, 300_000, 500_000, 1_000_000],
)

skipped_staff_counter = Counter(
    "labor_payroll_skipped_staff_total",
    "Attendance groups skipped because no staff record was found",
)

# Input errors
malformed_input_counter = Counter(
    "labor_malformed_input_total",
    "Rejected inputs by offending field",
    ["field"],
)


def record_analysis(overtime: bool, early_leave: bool, late_night_hours: float) -> None:
    """Record classification outcome of one interval"""
    analysis_counter.labels(overtime=str(overtime).lower(), early_leave=str(early_leave).lower()).inc()
    late_night_hours_histogram.observe(late_night_hours)


def record_payroll(basis: str, total: float) -> None:
    """Record one staff member's payroll result"""
    payroll_counter.labels(basis=basis).inc()
    payroll_amount_histogram.observe(total)


def record_malformed_input(field: str | None) -> None:
    malformed_input_counter.labels(field=field or "unknown").inc()
