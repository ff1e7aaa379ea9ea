from django.urls import path
from . import views

urlpatterns = [
    path('states/', views.state_list, name='state_list'),
    path('states', views.state_list),
    path('districts/', views.district_list, name='district_list'),
    path('districts', views.district_list),
]
