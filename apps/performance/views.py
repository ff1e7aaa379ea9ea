from django.http import HttpResponse, JsonResponse

from apps.performance.http import error_response, json_api
from apps.performance.models import PerformanceRecord


def api_home(request):
    return HttpResponse('<h1>MGNREGA API</h1><p>API is running...</p>')


@json_api
def latest_by_district(request, district):
    """Most recent month of data for one district"""
    record = PerformanceRecord.objects.latest_for(district)
    if record is None:
        return error_response(f"No data found for district: {district}", status=404)
    return JsonResponse({'data': record.as_dict()})


@json_api
def history_by_district(request, district):
    """Every stored month for one district, newest first"""
    records = [record.as_dict() for record in PerformanceRecord.objects.for_district(district)]
    if not records:
        return error_response(f"No history data found for district: {district}", status=404)
    return JsonResponse({'data': records})
