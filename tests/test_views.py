from datetime import date
from unittest import mock

import pytest
from django.db import DatabaseError

from apps.performance.models import PerformanceRecord, PerformanceRecordQuerySet

pytestmark = pytest.mark.django_db

BASE = '/api/v1/performance'


def test_home(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b'MGNREGA API' in response.content


class TestStates:

    def test_distinct_sorted(self, client, stored_records):
        PerformanceRecord.objects.create(state_name='Bihar', district_name='Patna', data_for_date=date(2024, 4, 1))
        PerformanceRecord.objects.create(state_name='', district_name='Nowhere', data_for_date=date(2024, 4, 1))

        response = client.get(f'{BASE}/states')

        assert response.status_code == 200
        assert response.json() == {'states': ['Bihar', 'Maharashtra']}

    def test_empty_table(self, client):
        assert client.get(f'{BASE}/states/').json() == {'states': []}


class TestDistricts:

    def test_filtered_by_state(self, client, stored_records):
        PerformanceRecord.objects.create(state_name='Bihar', district_name='Patna', data_for_date=date(2024, 4, 1))

        response = client.get(f'{BASE}/districts', {'state': 'Maharashtra'})

        assert response.status_code == 200
        assert response.json() == {'districts': ['Nagpur', 'Pune']}

    def test_state_filter_is_case_insensitive(self, client, stored_records):
        response = client.get(f'{BASE}/districts', {'state': 'maharashtra'})
        assert response.json() == {'districts': ['Nagpur', 'Pune']}

    def test_all_districts_distinct(self, client, stored_records):
        PerformanceRecord.objects.create(state_name='Maharashtra', district_name='Pune', data_for_date=date(2024, 3, 1))
        PerformanceRecord.objects.create(state_name='Bihar', district_name='Araria', data_for_date=date(2024, 4, 1))

        response = client.get(f'{BASE}/districts/')

        assert response.json() == {'districts': ['Araria', 'Nagpur', 'Pune']}

    def test_unknown_state(self, client, stored_records):
        assert client.get(f'{BASE}/districts', {'state': 'Atlantis'}).json() == {'districts': []}


class TestLatest:

    def test_returns_most_recent_month(self, client, stored_records):
        PerformanceRecord.objects.create(state_name='Maharashtra', district_name='Pune', data_for_date=date(2024, 3, 1))

        response = client.get(f'{BASE}/PUNE')

        assert response.status_code == 200
        data = response.json()['data']
        assert data['district_name'] == 'Pune'
        assert data['data_for_date'] == '2024-04-01'
        assert data['total_households_worked'] == 45678
        assert data['total_works_takenup'] is None

    def test_not_found(self, client, stored_records):
        response = client.get(f'{BASE}/Satara')

        assert response.status_code == 404
        assert response.json() == {'msg': 'No data found for district: Satara'}

    def test_unexpected_error_is_generic(self, client, stored_records):
        with mock.patch.object(PerformanceRecordQuerySet, 'latest_for', side_effect=DatabaseError('password leaked')):
            response = client.get(f'{BASE}/Pune')

        assert response.status_code == 500
        assert response.json() == {'msg': 'An internal server error occurred'}
        assert b'password' not in response.content

    def test_only_get_allowed(self, client, stored_records):
        assert client.post(f'{BASE}/Pune').status_code == 405


class TestHistory:

    def test_case_insensitive_lookup(self, client, stored_records):
        response = client.get(f'{BASE}/history/pune')

        assert response.status_code == 200
        data = response.json()['data']
        assert len(data) == 1
        assert data[0]['district_name'] == 'Pune'

    def test_newest_first(self, client, stored_records):
        for month in (1, 2, 3):
            PerformanceRecord.objects.create(state_name='Maharashtra', district_name='Pune', data_for_date=date(2024, month, 1))

        response = client.get(f'{BASE}/history/Pune/')

        dates = [row['data_for_date'] for row in response.json()['data']]
        assert dates == ['2024-04-01', '2024-03-01', '2024-02-01', '2024-01-01']

    def test_not_found(self, client, stored_records):
        response = client.get(f'{BASE}/history/Satara')

        assert response.status_code == 404
        assert response.json() == {'msg': 'No history data found for district: Satara'}
