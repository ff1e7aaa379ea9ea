from django.urls import path
from . import views

urlpatterns = [
    path('history/<str:district>/', views.history_by_district, name='performance_history'),
    path('history/<str:district>', views.history_by_district),
    path('<str:district>/', views.latest_by_district, name='performance_latest'),
    path('<str:district>', views.latest_by_district),
]
