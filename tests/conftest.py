from datetime import date

import pytest

from apps.performance.models import PerformanceRecord


def make_raw_record(**overrides):
    record = {
        'fin_year': '2024-25',
        'month': 'Apr',
        'state_name': 'MAHARASHTRA',
        'district_name': 'Pune',
        'Total_No_of_JobCards_issued': '512345',
        'Total_No_of_Active_Workers': '201234',
        'Total_No_of_Workers': '654321',
        'Total_Households_Worked': '45678',
        'Total_No_of_Works_Takenup': '12000',
        'Number_of_Completed_Works': '0',
        'Average_days_of_employment_provided_per_Household': '42.5',
        'Average_Wage_rate_per_day_per_person': '297.11',
        'Total_Exp': '12345.67',
        'Wages': '8900.12',
    }
    record.update(overrides)
    return record


@pytest.fixture
def raw_record():
    return make_raw_record


@pytest.fixture
def stored_records(db):
    """Pune (Apr 2024) and Nagpur (Mar 2024), both in Maharashtra"""
    pune = PerformanceRecord.objects.create(
        state_name='Maharashtra',
        district_name='Pune',
        data_for_date=date(2024, 4, 1),
        total_households_worked=45678,
        total_exp_lakhs=12345.67,
    )
    nagpur = PerformanceRecord.objects.create(
        state_name='Maharashtra',
        district_name='Nagpur',
        data_for_date=date(2024, 3, 1),
        total_households_worked=30111,
    )
    return pune, nagpur


class StubFetcher:
    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.calls = 0

    def fetch(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)
