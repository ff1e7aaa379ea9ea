"""
Validation and type coercion for raw data.gov.in MGNREGA records.

A raw record is whatever the upstream API hands back: a dict of string keys
to loosely typed values. `normalize_record` is the only place those values
are turned into typed fields; everything downstream works with
`NormalizedRecord`.
"""
import math
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping

from apps.performance.exceptions import RecordValidationError
from apps.performance.models import PerformanceRecord

RawRecord = Mapping[str, Any]

MONTHS = (
    (1, ('Jan', 'January')),
    (2, ('Feb', 'February')),
    (3, ('Mar', 'March')),
    (4, ('Apr', 'April')),
    (5, ('May',)),
    (6, ('Jun', 'June')),
    (7, ('Jul', 'July')),
    (8, ('Aug', 'August')),
    (9, ('Sep', 'September')),
    (10, ('Oct', 'October')),
    (11, ('Nov', 'November')),
    (12, ('Dec', 'December')),
)

# (model field, upstream field)
INTEGER_FIELDS = (
    ('job_cards_issued', 'Total_No_of_JobCards_issued'),
    ('total_active_workers', 'Total_No_of_Active_Workers'),
    ('total_active_cards', 'Total_No_of_Active_Job_Cards'),
    ('total_workers', 'Total_No_of_Workers'),
    ('sc_active_workers', 'SC_workers_against_active_workers'),
    ('st_active_workers', 'ST_workers_against_active_workers'),
    ('hh_completed_100_days', 'Total_No_of_HHs_completed_100_Days_of_Wage_Employment'),
    ('total_households_worked', 'Total_Households_Worked'),
    ('total_individuals_worked', 'Total_Individuals_Worked'),
    ('differently_abled_worked', 'Differently_abled_persons_worked'),
    ('gps_with_nil_exp', 'Number_of_GPs_with_NIL_exp'),
    ('total_works_takenup', 'Total_No_of_Works_Takenup'),
    ('ongoing_works', 'Number_of_Ongoing_Works'),
    ('completed_works', 'Number_of_Completed_Works'),
)

FLOAT_FIELDS = (
    ('approved_labour_budget', 'Approved_Labour_Budget'),
    ('persondays_liability', 'Persondays_of_Central_Liability_so_far'),
    ('sc_persondays', 'SC_persondays'),
    ('st_persondays', 'ST_persondays'),
    ('women_persondays', 'Women_Persondays'),
    ('avg_days_employment_per_hh', 'Average_days_of_employment_provided_per_Household'),
    ('avg_wage_rate', 'Average_Wage_rate_per_day_per_person'),
    ('pct_nrm_expenditure', 'percent_of_NRM_Expenditure'),
    ('pct_category_b_works', 'percent_of_Category_B_Works'),
    ('pct_agri_expenditure', 'percent_of_Expenditure_on_Agriculture_Allied_Works'),
    ('total_exp_lakhs', 'Total_Exp'),
    ('wages_lakhs', 'Wages'),
    ('material_skilled_wages_lakhs', 'Material_and_skilled_Wages'),
    ('admin_exp_lakhs', 'Total_Adm_Expenditure'),
)

MISSING_MARKERS = ('', 'NA', 'N/A', '-')

FIN_YEAR_PATTERN = re.compile(r'^(\d{4})(?:-\d{2}|-\d{4})?$')

# ASCII digits only; rejects underscores, Unicode digits, inf and nan
NUMBER_PATTERN = re.compile(r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?$", re.ASCII)

# BigIntegerField range
MIN_BIGINT = -2 ** 63
MAX_BIGINT = 2 ** 63 - 1


def build_lookup(entries):
    """Map every name in `entries` to its value, refusing repeated names"""
    lookup = {}
    for value, names in entries:
        for name in names:
            if name in lookup:
                raise ValueError(f"Duplicate key {name!r} in lookup table")
            lookup[name] = value
    return lookup


def build_field_map(*groups):
    """Check that the upstream-to-model field mapping is one-to-one"""
    field_map = {}
    seen_model_fields = set()
    for group in groups:
        for model_field, upstream_field in group:
            if upstream_field in field_map:
                raise ValueError(f"Upstream field {upstream_field!r} mapped twice")
            if model_field in seen_model_fields:
                raise ValueError(f"Model field {model_field!r} mapped twice")
            field_map[upstream_field] = model_field
            seen_model_fields.add(model_field)
    return field_map


MONTH_LOOKUP = build_lookup(MONTHS)
FIELD_MAP = build_field_map(INTEGER_FIELDS, FLOAT_FIELDS)


def parse_month(month_str):
    """Month number for an exact, case-sensitive month name or abbreviation"""
    if not isinstance(month_str, str):
        return None
    return MONTH_LOOKUP.get(month_str)


def parse_year(year_str):
    """Calendar year from a financial year string such as '2024-25'"""
    if not isinstance(year_str, str):
        return None
    match = FIN_YEAR_PATTERN.match(year_str.strip())
    if not match:
        return None
    year = int(match.group(1))
    return year if year >= 1 else None


def _clean_number(value):
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return None
    value = value.strip()
    if value in MISSING_MARKERS:
        return None
    value = value.replace(',', '').replace(' ', '')
    return value if NUMBER_PATTERN.match(value) else None


def safe_int(value):
    """Integer value, or None when the field is missing or not numeric"""
    value = _clean_number(value)
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = int(value)
    if not MIN_BIGINT <= value <= MAX_BIGINT:
        return None
    return value


def safe_float(value):
    """Float value, or None when the field is missing or not numeric"""
    value = _clean_number(value)
    if value is None:
        return None
    try:
        value = float(value)
    except (ValueError, OverflowError):
        return None
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class NormalizedRecord:
    state_name: str | None
    district_name: str
    data_for_date: date
    metrics: dict = field(default_factory=dict)

    @property
    def identity_key(self):
        return (self.district_name, self.data_for_date)

    def to_model(self):
        return PerformanceRecord(
            state_name=self.state_name,
            district_name=self.district_name,
            data_for_date=self.data_for_date,
            **self.metrics,
        )


def district_label(raw):
    """District name for log messages, even on records that fail validation"""
    name = raw.get('district_name') if isinstance(raw, Mapping) else None
    if isinstance(name, str) and name.strip():
        return name.strip()
    return 'UNKNOWN'


def normalize_record(raw):
    """
    Turn one raw upstream record into a NormalizedRecord.

    Raises RecordValidationError when the reporting month cannot be resolved
    or the district name is missing. Numeric fields never raise: anything
    that does not parse is stored as None.
    """
    if not isinstance(raw, Mapping):
        raise RecordValidationError(f"Expected a JSON object, got {type(raw).__name__}")

    fin_year = raw.get('fin_year')
    month_str = raw.get('month')
    year = parse_year(fin_year)
    month = parse_month(month_str)
    if year is None or month is None:
        raise RecordValidationError(
            f"Missing or invalid fin_year ('{fin_year}') or month ('{month_str}')",
            district_name=district_label(raw),
        )

    district_name = raw.get('district_name')
    if not isinstance(district_name, str) or not district_name.strip():
        raise RecordValidationError('"district_name" field is missing or blank')

    state_name = raw.get('state_name')
    if state_name is not None and not isinstance(state_name, str):
        state_name = str(state_name)

    metrics = {}
    for model_field, upstream_field in INTEGER_FIELDS:
        metrics[model_field] = safe_int(raw.get(upstream_field))
    for model_field, upstream_field in FLOAT_FIELDS:
        metrics[model_field] = safe_float(raw.get(upstream_field))

    return NormalizedRecord(
        state_name=state_name,
        district_name=district_name.strip(),
        data_for_date=date(year, month, 1),
        metrics=metrics,
    )


def deduplicate_records(records):
    """
    Keep the first record seen for each (district_name, data_for_date).

    Returns the surviving records in their original order and the number of
    duplicates dropped.
    """
    seen = set()
    unique = []
    for record in records:
        key = record.identity_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique, len(records) - len(unique)
