"""
Zuordnung der Blink‑Invoice‑Status auf Shop‑Bestellstatus.

Die Zuordnung wird als JSON unter ``galoy_blink_order_states`` gespeichert.
"""
import json
import logging

from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)

PENDING = 'Pending'
PAID = 'Paid'
EXPIRED = 'Expired'
INVALID = 'Invalid'

IGNORE = 'BLINK_IGNORE'

BLINK_STATES = [
    (PENDING, _('Pending')),
    (PAID, _('Paid')),
    (EXPIRED, _('Expired')),
    (INVALID, _('Invalid')),
]

ORDER_STATUSES = [
    (IGNORE, _('- no mapping / defaults -')),
    ('wc-pending', _('Pending payment')),
    ('wc-processing', _('Processing')),
    ('wc-on-hold', _('On hold')),
    ('wc-completed', _('Completed')),
    ('wc-cancelled', _('Cancelled')),
    ('wc-refunded', _('Refunded')),
    ('wc-failed', _('Failed')),
]

DEFAULT_MAPPING = {
    PENDING: 'wc-pending',
    PAID: 'wc-processing',
    EXPIRED: 'wc-cancelled',
    INVALID: 'wc-failed',
}


def state_ids():
    return [state for state, _label in BLINK_STATES]


def status_ids():
    return [status for status, _label in ORDER_STATUSES]


def sanitize_mapping(value):
    """
    Filtert eine übergebene Zuordnung auf bekannte Blink‑Status und
    bekannte Bestellstatus. Akzeptiert dict oder JSON‑String.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value) if value else {}
        except ValueError:
            logger.warning("Ignoring malformed order state mapping: %r", value)
            value = {}
    if not isinstance(value, dict):
        return {}

    allowed = set(status_ids())
    return {
        state: value[state]
        for state in state_ids()
        if value.get(state) in allowed
    }


def resolve_mapping(stored):
    """Gespeicherte Zuordnung, fehlende Status werden mit Defaults ergänzt."""
    mapping = dict(DEFAULT_MAPPING)
    mapping.update(sanitize_mapping(stored))
    return mapping
