import logging

from django.urls import reverse

from config.utils import OptionStore

DEBUG_OPTION = 'galoy_blink_debug'

blink_log = logging.getLogger('blink')


class Logger:
    """
    Debug‑Log des Plugins. Schreibt nur, wenn die Option ``galoy_blink_debug``
    aktiv ist; der Handler (Datei) kommt aus ``LOGGING`` in den Settings.
    """

    def __init__(self, store=None, log=None):
        self.store = store or OptionStore()
        self.log = log or blink_log

    def is_enabled(self):
        return self.store.get(DEBUG_OPTION, default=False, cast_type=bool) is True

    def debug(self, message, is_error=False):
        if not self.is_enabled():
            return
        if is_error:
            self.log.error(message)
        else:
            self.log.debug(message)

    @staticmethod
    def get_log_file_url():
        return reverse('gateway_view_logs')
