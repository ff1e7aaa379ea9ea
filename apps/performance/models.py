from django.db import models


class PerformanceRecordQuerySet(models.QuerySet):

    def state_names(self):
        """Distinct, sorted, non-empty state names"""
        return list(
            self.exclude(state_name__isnull=True)
            .exclude(state_name='')
            .order_by('state_name')
            .values_list('state_name', flat=True)
            .distinct()
        )

    def district_names(self, state=None):
        """Distinct, sorted district names, optionally for one state (case-insensitive)"""
        queryset = self.exclude(district_name='')
        if state:
            queryset = queryset.filter(state_name__iexact=state)
        return list(
            queryset.order_by('district_name')
            .values_list('district_name', flat=True)
            .distinct()
        )

    def for_district(self, district_name):
        """All records for a district, newest month first"""
        return self.filter(district_name__iexact=district_name).order_by('-data_for_date', 'id')

    def latest_for(self, district_name):
        return self.for_district(district_name).first()


class PerformanceRecord(models.Model):
    state_name = models.CharField(max_length=100, null=True, blank=True)
    district_name = models.CharField(max_length=100)
    data_for_date = models.DateField()

    # Workers and job cards
    job_cards_issued = models.BigIntegerField(null=True, blank=True)
    total_active_workers = models.BigIntegerField(null=True, blank=True)
    total_active_cards = models.BigIntegerField(null=True, blank=True)
    total_workers = models.BigIntegerField(null=True, blank=True)
    sc_active_workers = models.BigIntegerField(null=True, blank=True)
    st_active_workers = models.BigIntegerField(null=True, blank=True)
    hh_completed_100_days = models.BigIntegerField(null=True, blank=True)
    total_households_worked = models.BigIntegerField(null=True, blank=True)
    total_individuals_worked = models.BigIntegerField(null=True, blank=True)
    differently_abled_worked = models.BigIntegerField(null=True, blank=True)

    # Works
    gps_with_nil_exp = models.BigIntegerField(null=True, blank=True)
    total_works_takenup = models.BigIntegerField(null=True, blank=True)
    ongoing_works = models.BigIntegerField(null=True, blank=True)
    completed_works = models.BigIntegerField(null=True, blank=True)

    # Persondays and wages
    approved_labour_budget = models.FloatField(null=True, blank=True)
    persondays_liability = models.FloatField(null=True, blank=True)
    sc_persondays = models.FloatField(null=True, blank=True)
    st_persondays = models.FloatField(null=True, blank=True)
    women_persondays = models.FloatField(null=True, blank=True)
    avg_days_employment_per_hh = models.FloatField(null=True, blank=True)
    avg_wage_rate = models.FloatField(null=True, blank=True)

    # Expenditure (percentages and Rs. lakhs)
    pct_nrm_expenditure = models.FloatField(null=True, blank=True)
    pct_category_b_works = models.FloatField(null=True, blank=True)
    pct_agri_expenditure = models.FloatField(null=True, blank=True)
    total_exp_lakhs = models.FloatField(null=True, blank=True)
    wages_lakhs = models.FloatField(null=True, blank=True)
    material_skilled_wages_lakhs = models.FloatField(null=True, blank=True)
    admin_exp_lakhs = models.FloatField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    objects = PerformanceRecordQuerySet.as_manager()

    class Meta:
        db_table = 'mgnrega_performance'
        ordering = ['-data_for_date', 'district_name']
        constraints = [
            models.UniqueConstraint(
                fields=['district_name', 'data_for_date'],
                name='unique_district_month',
            ),
        ]
        indexes = [
            models.Index(fields=['state_name'], name='mgnrega_perf_state_idx'),
        ]

    def __str__(self):
        return f"{self.district_name} - {self.data_for_date:%Y/%m}"

    def as_dict(self):
        """JSON-ready representation used by the API"""
        data = {
            'id': self.pk,
            'state_name': self.state_name,
            'district_name': self.district_name,
            'data_for_date': self.data_for_date.isoformat(),
        }
        for field in self._meta.concrete_fields:
            if field.name in data or field.name == 'created_at':
                continue
            data[field.name] = getattr(self, field.attname)
        data['created_at'] = self.created_at.isoformat() if self.created_at else None
        return data
