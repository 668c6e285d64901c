"""
Admin‑Hinweise, die genau einmal auf der nächsten Seite angezeigt werden.
"""
from django.contrib import messages

SEVERITY_LEVELS = {
    'error': messages.ERROR,
    'warning': messages.WARNING,
    'success': messages.SUCCESS,
    'info': messages.INFO,
}


class MessageNotices:
    """Notice‑Kanal über ``django.contrib.messages`` (request‑gebunden)."""

    def __init__(self, request):
        self.request = request

    def add_notice(self, severity, message):
        level = SEVERITY_LEVELS.get(severity, messages.INFO)
        messages.add_message(self.request, level, message, extra_tags=f'blink-notice {severity}')


class CollectingNotices:
    """Sammelt Hinweise in einer Liste (Management‑Commands, Tests)."""

    def __init__(self):
        self.notices = []

    def add_notice(self, severity, message):
        self.notices.append((severity, message))

    def severities(self):
        return [severity for severity, _message in self.notices]
