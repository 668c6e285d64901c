from unittest.mock import Mock

import pytest

from gateway.logger import DEBUG_OPTION, Logger


@pytest.mark.django_db
class TestDebugLogger:

    def test_disabled_when_option_missing(self, store):
        log = Mock()

        Logger(store=store, log=log).debug('hello')

        log.debug.assert_not_called()
        log.error.assert_not_called()

    def test_disabled_when_option_is_no(self, store):
        store.save_fields({DEBUG_OPTION: 'no'})
        log = Mock()

        Logger(store=store, log=log).debug('hello', True)

        log.error.assert_not_called()

    def test_debug_level(self, store):
        store.save_fields({DEBUG_OPTION: 'yes'})
        log = Mock()

        Logger(store=store, log=log).debug('Saving GlobalSettings.')

        log.debug.assert_called_once_with('Saving GlobalSettings.')

    def test_error_level(self, store):
        store.save_fields({DEBUG_OPTION: 'yes'})
        log = Mock()

        Logger(store=store, log=log).debug('boom', is_error=True)

        log.error.assert_called_once_with('boom')
        log.debug.assert_not_called()


def test_log_file_url():
    assert Logger.get_log_file_url() == '/blink/logs/'
