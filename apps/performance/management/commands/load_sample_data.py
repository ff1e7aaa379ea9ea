from datetime import date
import random

from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS

from apps.performance.exceptions import DatasetReplaceError
from apps.performance.normalization import FLOAT_FIELDS, INTEGER_FIELDS, NormalizedRecord
from apps.performance.services import DatasetReplacer

SAMPLE_STATE = 'MAHARASHTRA'

SAMPLE_DISTRICTS = [
    'Mumbai', 'Pune', 'Nagpur', 'Thane', 'Nashik',
    'Aurangabad', 'Solapur', 'Amravati', 'Kolhapur', 'Ahmednagar',
]

INTEGER_RANGES = {
    'job_cards_issued': (50000, 500000),
    'total_active_workers': (20000, 300000),
    'total_active_cards': (15000, 200000),
    'total_workers': (60000, 700000),
    'sc_active_workers': (1000, 40000),
    'st_active_workers': (1000, 60000),
    'hh_completed_100_days': (0, 5000),
    'total_households_worked': (5000, 120000),
    'total_individuals_worked': (8000, 200000),
    'differently_abled_worked': (0, 800),
    'gps_with_nil_exp': (0, 40),
    'total_works_takenup': (2000, 60000),
    'ongoing_works': (1000, 40000),
    'completed_works': (500, 20000),
}

FLOAT_RANGES = {
    'approved_labour_budget': (500000, 5000000),
    'persondays_liability': (100000, 4000000),
    'sc_persondays': (5000, 400000),
    'st_persondays': (5000, 800000),
    'women_persondays': (40000, 2000000),
    'avg_days_employment_per_hh': (20, 80),
    'avg_wage_rate': (250, 320),
    'pct_nrm_expenditure': (40, 85),
    'pct_category_b_works': (10, 70),
    'pct_agri_expenditure': (50, 90),
    'total_exp_lakhs': (1000, 40000),
    'wages_lakhs': (700, 28000),
    'material_skilled_wages_lakhs': (300, 12000),
    'admin_exp_lakhs': (50, 2000),
}


def recent_months(count, today=None):
    """First-of-month dates for the `count` months up to and including this one"""
    today = today or date.today()
    year, month = today.year, today.month
    months = []
    for _ in range(count):
        months.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return months


def sample_records(months, seed=None):
    rng = random.Random(seed)
    records = []
    for district in SAMPLE_DISTRICTS:
        for month_start in months:
            metrics = {}
            for name, _ in INTEGER_FIELDS:
                low, high = INTEGER_RANGES[name]
                metrics[name] = rng.randint(low, high)
            for name, _ in FLOAT_FIELDS:
                low, high = FLOAT_RANGES[name]
                metrics[name] = round(rng.uniform(low, high), 2)
            records.append(NormalizedRecord(
                state_name=SAMPLE_STATE,
                district_name=district,
                data_for_date=month_start,
                metrics=metrics,
            ))
    return records


class Command(BaseCommand):
    help = 'Replace the dataset with sample MGNREGA data for Maharashtra districts'

    def add_arguments(self, parser):
        parser.add_argument('--months', type=int, default=12, help='Months of history per district')
        parser.add_argument('--seed', type=int, default=None, help='Random seed for repeatable data')
        parser.add_argument('--database', default=DEFAULT_DB_ALIAS, help='Database alias to load into')

    def handle(self, *args, **options):
        if options['months'] < 1:
            raise CommandError('--months must be at least 1')

        records = sample_records(recent_months(options['months']), seed=options['seed'])
        try:
            deleted, inserted = DatasetReplacer(using=options['database']).replace(records)
        except DatasetReplaceError as e:
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(
            f'Successfully loaded sample data: {inserted} records for '
            f'{len(SAMPLE_DISTRICTS)} districts ({deleted} old records removed)'
        ))
