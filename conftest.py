import os

import django


def pytest_configure(config):
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "api.settings")
    django.setup()
    # agrega 'testserver' a ALLOWED_HOSTS para django.test.Client
    from django.test.utils import setup_test_environment
    setup_test_environment()
