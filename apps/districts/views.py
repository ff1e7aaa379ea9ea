from django.http import JsonResponse

from apps.performance.http import json_api
from apps.performance.models import PerformanceRecord


@json_api
def state_list(request):
    """All states present in the dataset"""
    return JsonResponse({'states': PerformanceRecord.objects.state_names()})


@json_api
def district_list(request):
    """Districts in the dataset, optionally filtered with ?state="""
    state = request.GET.get('state', '').strip() or None
    return JsonResponse({'districts': PerformanceRecord.objects.district_names(state)})
