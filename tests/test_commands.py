from datetime import date
from io import StringIO
from unittest import mock

import pytest
import requests
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.performance.management.commands.load_sample_data import SAMPLE_DISTRICTS, recent_months
from apps.performance.models import PerformanceRecord, PerformanceRecordQuerySet
from tests.conftest import make_raw_record

pytestmark = pytest.mark.django_db

SESSION_PATH = 'apps.performance.management.commands.sync_mgnrega_data.requests.Session'


@pytest.fixture
def api_settings(settings):
    settings.MGNREGA_API_KEY = 'test-key'
    settings.MGNREGA_RESOURCE_IDS = {'district_performance': 'resource-1'}
    return settings


@pytest.fixture
def upstream():
    """Patch requests.Session in the sync command and return the session mock"""
    with mock.patch(SESSION_PATH) as session_cls:
        session = mock.MagicMock()
        session_cls.return_value.__enter__.return_value = session
        yield session


def respond_with(session, payload):
    response = mock.Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    session.get.return_value = response


class TestSyncCommand:

    def test_replaces_dataset(self, api_settings, upstream, stored_records):
        respond_with(upstream, {'status': 'ok', 'records': [
            make_raw_record(district_name='Satara', month='Jun'),
            make_raw_record(district_name='Satara', month='June'),
            make_raw_record(district_name='Wardha', month='Jun', fin_year='bad'),
        ]})
        out = StringIO()

        call_command('sync_mgnrega_data', '--limit', '50', stdout=out)

        assert list(PerformanceRecord.objects.values_list('district_name', 'data_for_date')) == [
            ('Satara', date(2024, 6, 1)),
        ]
        output = out.getvalue()
        assert 'SYNC COMPLETE' in output
        assert 'Duplicates removed: 1' in output
        assert 'Skipped (invalid): 1' in output
        assert upstream.get.call_args.kwargs['params']['limit'] == 50

    def test_dry_run(self, api_settings, upstream, stored_records):
        respond_with(upstream, {'status': 'ok', 'records': [make_raw_record(district_name='Satara')]})
        out = StringIO()

        call_command('sync_mgnrega_data', '--dry-run', stdout=out)

        assert PerformanceRecord.objects.count() == 2
        assert 'Dry run complete' in out.getvalue()

    def test_empty_response(self, api_settings, upstream, stored_records):
        respond_with(upstream, {'status': 'ok', 'records': []})
        out = StringIO()

        call_command('sync_mgnrega_data', stdout=out)

        assert PerformanceRecord.objects.count() == 2
        assert 'No records found' in out.getvalue()

    def test_api_error_keeps_dataset(self, api_settings, upstream, stored_records):
        respond_with(upstream, {'status': 'error', 'message': 'Key not authorised'})

        with pytest.raises(CommandError, match='Key not authorised'):
            call_command('sync_mgnrega_data', stdout=StringIO())
        assert PerformanceRecord.objects.count() == 2

    def test_network_error_keeps_dataset(self, api_settings, upstream, stored_records):
        upstream.get.side_effect = requests.Timeout('read timed out')

        with pytest.raises(CommandError, match='existing data left in place'):
            call_command('sync_mgnrega_data', stdout=StringIO())
        assert PerformanceRecord.objects.count() == 2

    def test_replace_failure_keeps_dataset(self, api_settings, upstream, stored_records):
        respond_with(upstream, {'status': 'ok', 'records': [make_raw_record(district_name='Satara')]})

        with mock.patch.object(PerformanceRecordQuerySet, 'bulk_create', side_effect=OverflowError('int too large')):
            with pytest.raises(CommandError, match='existing data left in place'):
                call_command('sync_mgnrega_data', stdout=StringIO())
        assert PerformanceRecord.objects.count() == 2

    def test_missing_api_key(self, settings, upstream, stored_records):
        settings.MGNREGA_API_KEY = ''

        with pytest.raises(CommandError, match='DATA_GOV_API_KEY'):
            call_command('sync_mgnrega_data', stdout=StringIO())
        upstream.get.assert_not_called()


class TestLoadSampleData:

    def test_loads_every_district_and_month(self):
        out = StringIO()

        call_command('load_sample_data', '--months', '3', '--seed', '7', stdout=out)

        assert PerformanceRecord.objects.count() == len(SAMPLE_DISTRICTS) * 3
        assert PerformanceRecord.objects.filter(total_workers__isnull=True).count() == 0
        assert 'Successfully loaded sample data' in out.getvalue()

    def test_seed_is_repeatable(self):
        call_command('load_sample_data', '--months', '1', '--seed', '7', stdout=StringIO())
        first = list(PerformanceRecord.objects.order_by('district_name').values_list('total_workers', flat=True))

        call_command('load_sample_data', '--months', '1', '--seed', '7', stdout=StringIO())
        second = list(PerformanceRecord.objects.order_by('district_name').values_list('total_workers', flat=True))

        assert first == second

    def test_rejects_zero_months(self):
        with pytest.raises(CommandError):
            call_command('load_sample_data', '--months', '0', stdout=StringIO())

    def test_recent_months_crosses_year_boundary(self):
        assert recent_months(3, today=date(2025, 2, 14)) == [
            date(2025, 2, 1), date(2025, 1, 1), date(2024, 12, 1),
        ]


class TestCheckDataHealth:

    def test_reports_coverage(self, stored_records):
        out = StringIO()

        call_command('check_data_health', stdout=out)

        output = out.getvalue()
        assert 'Total MGNREGA Records: 2' in output
        assert 'Districts: 2' in output
        assert 'Latest reporting month: April 2024' in output
        assert '1 districts have no data for April 2024' in output
        assert 'total_works_takenup' in output

    def test_empty_database(self):
        out = StringIO()

        call_command('check_data_health', stdout=out)

        assert 'No data loaded' in out.getvalue()
