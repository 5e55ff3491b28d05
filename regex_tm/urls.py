# regex_tm/urls.py
from django.urls import path

from regex_tm.views import regex_to_dfa_endpoint, regex_to_tm_endpoint, regex_to_tm_jff, regex_file_to_csv


urlpatterns = [
    path('api/regex-to-dfa/', regex_to_dfa_endpoint, name='regex_to_dfa'),
    path('api/regex-to-tm/', regex_to_tm_endpoint, name='regex_to_tm'),
    path('api/regex-to-tm/jff/', regex_to_tm_jff, name='regex_to_tm_jff'),
    path('api/regex-file-to-csv/', regex_file_to_csv, name='regex_file_to_csv'),
]
