"""
Shared pytest fixtures for the Blink settings tests.
"""

from unittest.mock import Mock

import pytest
from django.core.cache import cache

from config.utils import OptionStore
from gateway.notices import CollectingNotices
from gateway.page import GlobalSettingsPage


class FakeVerifier:
    """Records every call and answers with a fixed result (or raises)."""

    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, env, api_key):
        self.calls.append((env, api_key))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store(db):
    return OptionStore()


@pytest.fixture
def notices():
    return CollectingNotices()


@pytest.fixture
def debug_logger():
    return Mock()


@pytest.fixture
def verifier():
    return FakeVerifier(result=True)


@pytest.fixture
def make_page(store, notices, debug_logger):
    def _make(verifier):
        return GlobalSettingsPage(
            store=store,
            verifier=verifier,
            notices=notices,
            logger=debug_logger,
            webhook_url='https://shop.example/wc-api/galoy_blink_default/',
            log_url='/blink/logs/',
        )
    return _make


@pytest.fixture
def staff_client(client, django_user_model):
    user = django_user_model.objects.create_user(
        username='shopadmin', password='not-so-secret-1234', is_staff=True,
    )
    client.force_login(user)
    return client
