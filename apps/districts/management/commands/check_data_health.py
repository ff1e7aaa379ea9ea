from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections
from django.db.models import Count, Max

from apps.performance.models import PerformanceRecord
from apps.performance.normalization import FLOAT_FIELDS, INTEGER_FIELDS

class Command(BaseCommand):
    help = 'Check database connectivity and MGNREGA data coverage'

    def add_arguments(self, parser):
        parser.add_argument('--database', default=DEFAULT_DB_ALIAS, help='Database alias to inspect')

    def handle(self, *args, **options):
        alias = options['database']
        self.stdout.write(self.style.SUCCESS('\n=== MGNREGA Data Health Check ===\n'))

        try:
            connections[alias].ensure_connection()
        except DatabaseError as e:
            raise CommandError(f'Connection failed: {e}')
        self.stdout.write(self.style.SUCCESS(f'✓ Connected to database "{alias}"'))

        records = PerformanceRecord.objects.using(alias)
        total_records = records.count()
        self.stdout.write(f"Total MGNREGA Records: {total_records}")

        if total_records == 0:
            self.stdout.write(self.style.WARNING('No data loaded. Run: python manage.py sync_mgnrega_data'))
            return

        states = records.state_names()
        districts = records.district_names()
        latest_month = records.aggregate(latest=Max('data_for_date'))['latest']

        self.stdout.write(f"States: {len(states)}")
        self.stdout.write(f"Districts: {len(districts)}")
        self.stdout.write(f"Latest reporting month: {latest_month:%B %Y}")

        # Coverage by state
        self.stdout.write(self.style.WARNING('\n=== Coverage by State ==='))
        coverage = (
            records.values('state_name')
            .annotate(
                rows=Count('id'),
                districts=Count('district_name', distinct=True),
                latest=Max('data_for_date'),
            )
            .order_by('state_name')
        )
        for row in coverage:
            stale = '' if row['latest'] == latest_month else self.style.WARNING(' (behind)')
            self.stdout.write(
                f"  {row['state_name'] or 'UNKNOWN'}: {row['districts']} districts, "
                f"{row['rows']} records, latest {row['latest']:%b %Y}{stale}"
            )

        behind = len(districts) - (
            records.filter(data_for_date=latest_month).order_by().values('district_name').distinct().count()
        )
        if behind:
            self.stdout.write(self.style.WARNING(f'\n{behind} districts have no data for {latest_month:%B %Y}'))

        # Missing metrics
        self.stdout.write(self.style.WARNING('\n=== Missing Metrics ==='))
        missing_any = False
        for name, upstream in INTEGER_FIELDS + FLOAT_FIELDS:
            missing = records.filter(**{f'{name}__isnull': True}).count()
            if missing:
                missing_any = True
                self.stdout.write(f"  {name} ({upstream}): {missing}/{total_records} missing")
        if not missing_any:
            self.stdout.write('  None')

        self.stdout.write(self.style.SUCCESS('\n✓ Health check complete!'))
