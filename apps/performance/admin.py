from django.contrib import admin
from .models import PerformanceRecord

@admin.register(PerformanceRecord)
class PerformanceRecordAdmin(admin.ModelAdmin):
    list_display = ('district_name', 'state_name', 'data_for_date', 'total_households_worked',
                    'persondays_liability', 'total_exp_lakhs')
    list_filter = ('state_name', 'data_for_date')
    search_fields = ('district_name', 'state_name')
    ordering = ('-data_for_date', 'district_name')
    date_hierarchy = 'data_for_date'
    readonly_fields = ('created_at',)
