from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS, connections
import requests
import logging

from apps.performance.exceptions import IngestionError, UpstreamAPIError
from apps.performance.services import DatasetReplacer, IngestionPipeline, MGNREGAFetcher

logger = logging.getLogger(__name__)

class Command(BaseCommand):
    help = 'Replace the stored MGNREGA dataset with a fresh page from the Government API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--limit',
            type=int,
            default=None,
            help='Records to request (default: MGNREGA_PAGE_SIZE)'
        )
        parser.add_argument(
            '--offset',
            type=int,
            default=0,
            help='Offset of the page to request (default: 0)'
        )
        parser.add_argument(
            '--timeout',
            type=int,
            default=None,
            help='HTTP timeout in seconds (default: MGNREGA_API_TIMEOUT)'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Fetch and validate, but do not touch the database'
        )
        parser.add_argument(
            '--database',
            default=DEFAULT_DB_ALIAS,
            help='Database alias to refresh'
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('Starting data fetch from data.gov.in...'))

        try:
            with requests.Session() as session:
                fetcher = MGNREGAFetcher.from_settings(
                    session,
                    limit=options['limit'],
                    offset=options['offset'],
                    timeout=options['timeout'],
                )
                replacer = DatasetReplacer(using=options['database'])
                pipeline = IngestionPipeline(fetcher, replacer)
                result = pipeline.run(dry_run=options['dry_run'])
        except ImproperlyConfigured as e:
            raise CommandError(f'Configuration error: {e}')
        except UpstreamAPIError as e:
            logger.error(f"Upstream API error: {e} payload={e.payload}")
            raise CommandError(str(e))
        except IngestionError as e:
            logger.error(f"Ingestion failed: {e}")
            raise CommandError(f'Sync failed, existing data left in place: {e}')
        finally:
            connections.close_all()
            logger.debug('Database connections closed')

        if not result.fetched:
            self.stdout.write(self.style.WARNING('No records found in the API response. Nothing to do.'))
            return

        summary = (
            f'\n{"="*60}\n'
            f'  API records fetched: {result.fetched}\n'
            f'  Valid records: {result.valid}\n'
            f'  Skipped (invalid): {result.rejected}\n'
            f'  Duplicates removed: {result.duplicates}\n'
            f'  Old records deleted: {result.deleted}\n'
            f'  New records inserted: {result.inserted}\n'
            f'{"="*60}'
        )

        if result.replaced:
            self.stdout.write(self.style.SUCCESS(f'✓ SYNC COMPLETE!{summary}'))
        elif options['dry_run']:
            self.stdout.write(self.style.SUCCESS(f'✓ Dry run complete, database untouched{summary}'))
        else:
            self.stdout.write(self.style.WARNING(f'No valid records, database untouched{summary}'))
