import logging
from collections import deque
from pathlib import Path

from django.conf import settings
from django.contrib.auth.decorators import login_required, user_passes_test
from django.shortcuts import render, redirect
from django_smart_ratelimit import rate_limit

from core.settings import PLATFORM_NAME, USER_RATELIMIT_PER_HOUR
from .forms import GlobalSettingsForm
from .logger import Logger
from .notices import MessageNotices
from .page import GlobalSettingsPage

logger = logging.getLogger(__name__)

LOG_TAIL_LINES = 500


def _is_staff(user):
    return user.is_active and user.is_staff


def _build_page(request):
    webhook_path = getattr(settings, 'BLINK_WEBHOOK_PATH', 'wc-api/galoy_blink_default/')
    return GlobalSettingsPage(
        notices=MessageNotices(request),
        webhook_url=request.build_absolute_uri('/' + webhook_path.lstrip('/')),
        log_url=Logger.get_log_file_url(),
    )


@login_required
@user_passes_test(_is_staff)
@rate_limit(key='user', rate=f'{USER_RATELIMIT_PER_HOUR}/h')
def global_settings(request):
    """
    GET  → Einstellungen anzeigen (inkl. Verbindungsstatus).
    POST → Formular validieren, API‑Key prüfen, speichern, Redirect (PRG),
           damit die Hinweise genau einmal auf der folgenden Seite erscheinen.
    """
    page = _build_page(request)

    if request.method == 'POST':
        form = GlobalSettingsForm(request.POST, descriptors=page.get_field_schema())
        if form.is_valid():
            page.save(form.cleaned_data)
            return redirect('gateway_global_settings')
        logger.info("Blink settings form rejected: %s", form.errors.as_json())
        # Formular mit Fehlern, aber mit aktuellem Verbindungsstatus neu aufbauen
        form = GlobalSettingsForm(request.POST, descriptors=page.get_global_settings())
    else:
        form = GlobalSettingsForm(
            descriptors=page.get_global_settings(),
            stored=page.stored_values(),
        )

    return render(request, 'gateway/global_settings.html', {
        'form': form,
        'page_title': 'Blink Payment settings',
        "PLATFORM_NAME": PLATFORM_NAME,
    })


def _tail(path, lines=LOG_TAIL_LINES):
    """Letzte ``lines`` Zeilen der Log‑Datei (leer, wenn es sie noch nicht gibt)."""
    try:
        with open(path, encoding='utf-8', errors='replace') as fh:
            return list(deque(fh, maxlen=lines))
    except (FileNotFoundError, IsADirectoryError):
        return []


@login_required
@user_passes_test(_is_staff)
@rate_limit(key='user', rate=f'{USER_RATELIMIT_PER_HOUR}/h')
def view_logs(request):
    log_file = Path(getattr(settings, 'BLINK_LOG_FILE', ''))
    return render(request, 'gateway/logs.html', {
        'log_file': log_file.name,
        'lines': _tail(log_file),
        "PLATFORM_NAME": PLATFORM_NAME,
    })
