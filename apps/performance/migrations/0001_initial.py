from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='PerformanceRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('state_name', models.CharField(blank=True, max_length=100, null=True)),
                ('district_name', models.CharField(max_length=100)),
                ('data_for_date', models.DateField()),
                ('job_cards_issued', models.BigIntegerField(blank=True, null=True)),
                ('total_active_workers', models.BigIntegerField(blank=True, null=True)),
                ('total_active_cards', models.BigIntegerField(blank=True, null=True)),
                ('total_workers', models.BigIntegerField(blank=True, null=True)),
                ('sc_active_workers', models.BigIntegerField(blank=True, null=True)),
                ('st_active_workers', models.BigIntegerField(blank=True, null=True)),
                ('hh_completed_100_days', models.BigIntegerField(blank=True, null=True)),
                ('total_households_worked', models.BigIntegerField(blank=True, null=True)),
                ('total_individuals_worked', models.BigIntegerField(blank=True, null=True)),
                ('differently_abled_worked', models.BigIntegerField(blank=True, null=True)),
                ('gps_with_nil_exp', models.BigIntegerField(blank=True, null=True)),
                ('total_works_takenup', models.BigIntegerField(blank=True, null=True)),
                ('ongoing_works', models.BigIntegerField(blank=True, null=True)),
                ('completed_works', models.BigIntegerField(blank=True, null=True)),
                ('approved_labour_budget', models.FloatField(blank=True, null=True)),
                ('persondays_liability', models.FloatField(blank=True, null=True)),
                ('sc_persondays', models.FloatField(blank=True, null=True)),
                ('st_persondays', models.FloatField(blank=True, null=True)),
                ('women_persondays', models.FloatField(blank=True, null=True)),
                ('avg_days_employment_per_hh', models.FloatField(blank=True, null=True)),
                ('avg_wage_rate', models.FloatField(blank=True, null=True)),
                ('pct_nrm_expenditure', models.FloatField(blank=True, null=True)),
                ('pct_category_b_works', models.FloatField(blank=True, null=True)),
                ('pct_agri_expenditure', models.FloatField(blank=True, null=True)),
                ('total_exp_lakhs', models.FloatField(blank=True, null=True)),
                ('wages_lakhs', models.FloatField(blank=True, null=True)),
                ('material_skilled_wages_lakhs', models.FloatField(blank=True, null=True)),
                ('admin_exp_lakhs', models.FloatField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'mgnrega_performance',
                'ordering': ['-data_for_date', 'district_name'],
            },
        ),
        migrations.AddIndex(
            model_name='performancerecord',
            index=models.Index(fields=['state_name'], name='mgnrega_perf_state_idx'),
        ),
        migrations.AddConstraint(
            model_name='performancerecord',
            constraint=models.UniqueConstraint(fields=('district_name', 'data_for_date'), name='unique_district_month'),
        ),
    ]
