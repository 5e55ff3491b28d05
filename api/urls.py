# api/urls.py
from django.urls import include, path

urlpatterns = [
    path('', include('regex_tm.urls')),
]
