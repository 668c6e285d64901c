from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command

from config.models import PlatformSetting
from config.utils import get_app_setting
from gateway import schema


def _run(*args):
    out = StringIO()
    call_command('blink_install_defaults', *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestInstallDefaults:

    def test_installs_every_default(self):
        output = _run()

        assert 'Installed 7 default setting(s).' in output
        assert get_app_setting(schema.ENV) == 'blink'
        assert get_app_setting(schema.WALLET_TYPE) == 'bitcoin'
        assert get_app_setting(schema.DEBUG) == 'yes'
        assert get_app_setting(schema.ORDER_STATES, cast_type=dict)['Paid'] == 'wc-processing'

    def test_is_idempotent_and_keeps_existing_values(self):
        PlatformSetting.objects.create(key=schema.ENV, value='staging')

        _run()
        output = _run()

        assert 'nothing to do' in output
        assert get_app_setting(schema.ENV) == 'staging'
        assert PlatformSetting.objects.count() == 7

    @patch('gateway.galoy_api.GaloyApiHelper.verify_api_key', return_value=False)
    def test_check_reports_not_connected(self, verify):
        output = _run('--check')

        assert 'Not connected.' in output
        # default api key is empty, nothing to verify
        verify.assert_not_called()

    @patch('gateway.galoy_api.GaloyApiHelper.verify_api_key', return_value=True)
    def test_check_reports_connected(self, verify):
        PlatformSetting.objects.create(key=schema.API_KEY, value='valid123')

        output = _run('--check')

        assert 'Connected.' in output
        verify.assert_called_once_with('blink', 'valid123')
