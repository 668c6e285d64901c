"""
Settings‑Seiten: Feldbeschreibungen liefern, Eingaben bereinigen, speichern.

``SettingsPage`` ist die generische Basis (bereinigt jedes deklarierte Feld
nach Typ und schreibt alles in den Option Store). ``GlobalSettingsPage``
ergänzt beim Speichern die Prüfung des API‑Keys gegen die Blink API.

Alle Abhängigkeiten (Store, Verifier, Notice‑Kanal, Logger, Übersetzung)
werden injiziert.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping

from django.conf import settings
from django.utils.translation import gettext

from config.utils import OptionStore
from . import order_states, schema
from .galoy_api import GaloyApiHelper
from .logger import Logger
from .schema import FieldDescriptor

log = logging.getLogger(__name__)

MISSING_CREDENTIALS_MESSAGE = (
    'Did not try to connect to Blink API because one of the required information '
    'was missing: Environment or api key'
)
INVALID_API_KEY_MESSAGE = (
    'Error fetching data for this API key from server. Please check if the API key is valid.'
)


def _as_text(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _as_checkbox(value) -> str:
    if isinstance(value, bool):
        return 'yes' if value else 'no'
    return 'yes' if _as_text(value).lower() in ('yes', '1', 'true', 'on') else 'no'


class SettingsPage(ABC):
    """Generische Settings‑Seite (Beschreibung → Bereinigung → Speicherung)."""

    id = ''
    label = ''

    def __init__(self, store=None, translate: Callable[[str], str] = gettext):
        self.store = store or OptionStore()
        self.translate = translate

    @abstractmethod
    def get_settings(self) -> List[FieldDescriptor]:
        raise NotImplementedError

    def get_field_schema(self) -> List[FieldDescriptor]:
        """Feldbeschreibungen ohne Seiteneffekte (für Bereinigung/Formular)."""
        return self.get_settings()

    def sanitize(self, descriptor: FieldDescriptor, value) -> Any:
        if descriptor.type == 'select':
            value = _as_text(value)
            # leer bleibt leer, unbekannte Werte fallen auf den Default zurück
            if not value or value in descriptor.options:
                return value
            return descriptor.default or ''
        if descriptor.type == 'checkbox':
            return _as_checkbox(value)
        if descriptor.type == 'order_states':
            return order_states.sanitize_mapping(value or {})
        return _as_text(value)

    def default_values(self) -> Dict[str, Any]:
        values = {}
        for descriptor in schema.stored_fields(self.get_field_schema()):
            if descriptor.type == 'order_states':
                values[descriptor.id] = dict(order_states.DEFAULT_MAPPING)
            else:
                values[descriptor.id] = descriptor.default or ''
        return values

    def stored_values(self) -> Dict[str, Any]:
        return {
            descriptor.id: self.store.get(descriptor.id)
            for descriptor in schema.stored_fields(self.get_field_schema())
        }

    def sanitize_all(self, submitted: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Bereinigt alle gespeicherten Felder der Seite. Nicht übermittelte
        Checkboxen gelten als ``no``, andere fehlende Felder als leer.
        """
        return {
            descriptor.id: self.sanitize(descriptor, submitted.get(descriptor.id))
            for descriptor in schema.stored_fields(self.get_field_schema())
        }

    def save_fields(self, submitted: Mapping[str, Any]) -> Dict[str, Any]:
        values = self.sanitize_all(submitted)
        self.store.save_fields(values)
        log.debug("Saved %d settings for page %s", len(values), self.id)
        return values

    def save(self, submitted: Mapping[str, Any]) -> None:
        self.save_fields(submitted)


class GlobalSettingsPage(SettingsPage):
    """
    Globale Blink‑Einstellungen.

    Parameters
    ----------
    verifier : callable
        ``verifier(env, api_key) -> bool``; Default ist ``GaloyApiHelper().verify_api_key``.
    notices
        Objekt mit ``add_notice(severity, message)``.
    webhook_url / log_url : str
        Werden nur in die Anzeige‑Felder übernommen.
    """

    id = 'blink_settings'
    label = 'Blink Settings'

    def __init__(self, store=None, verifier=None, notices=None, logger=None,
                 translate: Callable[[str], str] = gettext, webhook_url='', log_url=''):
        super().__init__(store=store, translate=translate)
        self.verifier = verifier or GaloyApiHelper().verify_api_key
        self.notices = notices
        self.logger = logger or Logger(store=self.store)
        self.webhook_url = webhook_url
        self.log_url = log_url
        self.version = getattr(settings, 'BLINK_VERSION', '')

    def _build(self, status_html: str) -> List[FieldDescriptor]:
        return schema.build_global_settings(
            status_html,
            self.webhook_url,
            self.log_url,
            translate=self.translate,
            version=self.version,
        )

    def get_field_schema(self) -> List[FieldDescriptor]:
        # Status‑Markup ist für das Speichern irrelevant, daher kein API‑Call
        return self._build(schema.status_markup(False, self.translate))

    def is_connected(self) -> bool:
        return schema.connection_status(self.store, self.verifier)

    def get_global_settings(self) -> List[FieldDescriptor]:
        self.logger.debug('Entering Global Settings form.')
        return self._build(schema.status_markup(self.is_connected(), self.translate))

    def get_settings(self) -> List[FieldDescriptor]:
        return self.get_global_settings()

    def _add_notice(self, severity: str, message: str) -> None:
        if self.notices is not None:
            self.notices.add_notice(severity, message)

    def _verify(self, env: str, api_key: str) -> bool:
        try:
            return bool(self.verifier(env, api_key))
        except Exception:
            log.exception("Blink API key verification raised")
            return False

    def save(self, submitted: Mapping[str, Any]) -> None:
        """
        Prüft Umgebung + API‑Key und speichert danach in jedem Fall alle Felder.
        Das Ergebnis der Prüfung wird nur als Hinweis + Log‑Eintrag gemeldet.
        """
        self.logger.debug('Saving GlobalSettings.')
        # geprüft wird mit den Werten, die auch gespeichert werden
        values = self.sanitize_all(submitted)
        env = values[schema.ENV]
        api_key = values[schema.API_KEY]

        if env and api_key:
            if not self._verify(env, api_key):
                message = self.translate(INVALID_API_KEY_MESSAGE)
                self._add_notice('error', message)
                self.logger.debug(message, True)
        else:
            message = self.translate(MISSING_CREDENTIALS_MESSAGE)
            self._add_notice('warning', message)
            self.logger.debug(message)

        self.save_fields(values)
