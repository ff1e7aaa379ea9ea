import logging
from dataclasses import dataclass

import requests
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import DEFAULT_DB_ALIAS, transaction

from apps.performance.exceptions import (
    DatasetReplaceError,
    RecordValidationError,
    UpstreamAPIError,
    UpstreamFetchError,
)
from apps.performance.models import PerformanceRecord
from apps.performance.normalization import deduplicate_records, district_label, normalize_record

logger = logging.getLogger(__name__)


class MGNREGAFetcher:
    """Fetches one page of district performance records from data.gov.in"""

    def __init__(self, session, base_url, resource_id, api_key, limit=1000, offset=0, timeout=60):
        self.session = session
        self.base_url = base_url.rstrip('/')
        self.resource_id = resource_id
        self.api_key = api_key
        self.limit = limit
        self.offset = offset
        self.timeout = timeout

    @classmethod
    def from_settings(cls, session, **overrides):
        options = {
            'base_url': settings.MGNREGA_API_BASE_URL,
            'resource_id': settings.MGNREGA_RESOURCE_IDS.get('district_performance'),
            'api_key': settings.MGNREGA_API_KEY,
            'limit': settings.MGNREGA_PAGE_SIZE,
            'timeout': settings.MGNREGA_API_TIMEOUT,
        }
        options.update({key: value for key, value in overrides.items() if value is not None})
        return cls(session, **options)

    @property
    def url(self):
        return f"{self.base_url}/{self.resource_id}"

    def fetch(self):
        """Return the raw records of one page, or an empty list"""
        if not self.api_key or self.api_key == 'your-api-key-here':
            raise ImproperlyConfigured('DATA_GOV_API_KEY is not set')
        if not self.resource_id:
            raise ImproperlyConfigured('RESOURCE_ID is not set')

        params = {
            'api-key': self.api_key,
            'format': 'json',
            'limit': self.limit,
            'offset': self.offset,
        }

        logger.info(f"Fetching MGNREGA data from {self.url} (limit={self.limit}, offset={self.offset})")
        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise UpstreamFetchError(f"Request to {self.url} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFetchError(f"Response from {self.url} is not valid JSON") from e

        if not isinstance(data, dict):
            raise UpstreamFetchError(f"Unexpected response shape from {self.url}: {type(data).__name__}")

        if data.get('status') == 'error':
            message = data.get('message') or 'Unknown API error'
            raise UpstreamAPIError(f"API Error: {message}", payload=data)

        records = data.get('records') or []
        if not isinstance(records, list):
            raise UpstreamFetchError(f"'records' in response from {self.url} is not a list")

        logger.info(f"Fetched {len(records)} records")
        return records


class DatasetReplacer:
    """Swaps the whole mgnrega_performance table in a single transaction"""

    def __init__(self, using=DEFAULT_DB_ALIAS, batch_size=500):
        self.using = using
        self.batch_size = batch_size

    def replace(self, records):
        """
        Delete every stored row and insert `records` as one atomic unit.

        Readers see either the old dataset or the new one. If anything fails
        the transaction is rolled back and DatasetReplaceError is raised.
        """
        instances = [record.to_model() for record in records]
        manager = PerformanceRecord.objects.db_manager(self.using)

        logger.info(f"Starting database transaction to refresh data ({len(instances)} records)")
        try:
            with transaction.atomic(using=self.using):
                deleted, _ = manager.all().delete()
                created = manager.bulk_create(instances, batch_size=self.batch_size)
        except Exception as e:
            logger.error(f"Dataset replace rolled back: {e!r}")
            raise DatasetReplaceError(f"Dataset replace failed: {e}") from e

        logger.info(f"Deleted {deleted} old records, inserted {len(created)} new records")
        return deleted, len(created)


@dataclass
class IngestionResult:
    fetched: int = 0
    valid: int = 0
    rejected: int = 0
    duplicates: int = 0
    deleted: int = 0
    inserted: int = 0
    replaced: bool = False


class IngestionPipeline:
    """fetch -> normalize -> de-duplicate -> replace"""

    def __init__(self, fetcher, replacer):
        self.fetcher = fetcher
        self.replacer = replacer

    def normalize(self, raw_records, result):
        valid = []
        for raw in raw_records:
            try:
                valid.append(normalize_record(raw))
            except RecordValidationError as e:
                result.rejected += 1
                logger.warning(f"Skipping record for district \"{e.district_name or district_label(raw)}\": {e.reason}")
        result.valid = len(valid)
        return valid

    def run(self, dry_run=False):
        result = IngestionResult()

        raw_records = self.fetcher.fetch()
        result.fetched = len(raw_records)
        if not raw_records:
            logger.info('No records found in the API response, dataset left unchanged')
            return result

        records = self.normalize(raw_records, result)
        logger.info(f"Validation complete: {result.valid} valid, {result.rejected} skipped")

        records, result.duplicates = deduplicate_records(records)
        logger.info(f"Removed {result.duplicates} duplicate records, {len(records)} unique records ready")

        if not records:
            logger.warning('No valid records to import, dataset left unchanged')
            return result

        if dry_run:
            logger.info('Dry run, skipping database refresh')
            return result

        result.deleted, result.inserted = self.replacer.replace(records)
        result.replaced = True
        return result
