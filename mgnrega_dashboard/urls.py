from django.contrib import admin
from django.urls import path, include

from apps.performance import views as performance_views

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', performance_views.api_home, name='api_home'),
    # states/ and districts/ must resolve before the catch-all <district>/ route
    path('api/v1/performance/', include('apps.districts.urls')),
    path('api/v1/performance/', include('apps.performance.urls')),
]
