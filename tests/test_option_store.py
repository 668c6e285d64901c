"""
Tests for the cached key-value option store.
"""

import pytest
from django.core.cache import cache

from config.models import PlatformSetting
from config.utils import get_app_setting, to_option_value, update_app_settings


@pytest.mark.django_db
class TestOptionStore:

    def test_missing_key_returns_default(self, store):
        assert store.get('galoy_blink_env') is None
        assert store.get('galoy_blink_env', default='blink') == 'blink'

    def test_save_fields_serializes_values(self, store):
        store.save_fields({'a': True, 'b': False, 'c': {'Paid': 'wc-completed'}, 'd': None, 'e': 'text'})

        values = dict(PlatformSetting.objects.values_list('key', 'value'))
        assert values == {'a': 'yes', 'b': 'no', 'c': '{"Paid": "wc-completed"}', 'd': '', 'e': 'text'}

    def test_cast_types(self, store):
        store.save_fields({'flag': 'yes', 'count': '3', 'mapping': {'x': 1}})

        assert store.get('flag', cast_type=bool) is True
        assert store.get('count', cast_type=int) == 3
        assert store.get('mapping', cast_type=dict) == {'x': 1}

    def test_bad_cast_falls_back_to_raw_string(self, store):
        store.save_fields({'count': 'many'})

        assert store.get('count', cast_type=int) == 'many'

    def test_write_invalidates_cache(self, store):
        store.save_fields({'galoy_blink_api_key': 'old'})
        assert get_app_setting('galoy_blink_api_key') == 'old'
        assert cache.get('app_setting:galoy_blink_api_key') == 'old'

        update_app_settings({'galoy_blink_api_key': 'new'})

        assert get_app_setting('galoy_blink_api_key') == 'new'

    def test_last_writer_wins(self, store):
        store.save_fields({'galoy_blink_env': 'blink'})
        store.save_fields({'galoy_blink_env': 'staging'})

        assert PlatformSetting.objects.filter(key='galoy_blink_env').count() == 1
        assert store.get('galoy_blink_env') == 'staging'

    def test_add_missing_keeps_existing_values(self, store):
        store.save_fields({'galoy_blink_env': 'staging'})

        created = store.add_missing({'galoy_blink_env': 'blink', 'galoy_blink_debug': 'yes'})

        assert created == ['galoy_blink_debug']
        assert store.get('galoy_blink_env') == 'staging'
        assert store.get('galoy_blink_debug') == 'yes'


def test_to_option_value_passes_strings_through():
    assert to_option_value('staging') == 'staging'
    assert to_option_value(7) == '7'


@pytest.mark.django_db
def test_admin_edit_invalidates_cache(store):
    from django.contrib import admin
    from config.admin import PlatformSettingAdmin

    store.save_fields({'galoy_blink_env': 'blink'})
    assert get_app_setting('galoy_blink_env') == 'blink'

    obj = PlatformSetting.objects.get(key='galoy_blink_env')
    obj.value = 'staging'
    PlatformSettingAdmin(PlatformSetting, admin.site).save_model(None, obj, None, True)

    assert get_app_setting('galoy_blink_env') == 'staging'
