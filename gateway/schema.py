"""
Feldbeschreibungen der globalen Blink‑Einstellungen.

``build_global_settings`` ist eine reine Funktion: alle Werte, die sonst aus
Store, API oder URL‑Routing kommen würden (Status‑Markup, Webhook‑URL,
Log‑URL), werden als Parameter übergeben. Der Verbindungsstatus wird
getrennt davon in ``connection_status`` berechnet.
"""

import logging
import platform
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from django.utils.html import escape
from django.utils.translation import gettext

log = logging.getLogger(__name__)

# ------------------------------------------------------------------
# Setting‑IDs (Namen der Formularfelder und Keys im Option Store)
# ------------------------------------------------------------------
ENV = 'galoy_blink_env'
API_KEY = 'galoy_blink_api_key'
WALLET_TYPE = 'galoy_blink_wallet_type'
WEBHOOK_URL = 'galoy_blink_webhook_url'
STATUS = 'galoy_blink_status'
DEFAULT_DESCRIPTION = 'galoy_blink_default_description'
ORDER_STATES = 'galoy_blink_order_states'
PROTECT_ORDER_STATUS = 'galoy_blink_protect_order_status'
DEBUG = 'galoy_blink_debug'

CONNECTION_SECTION = 'galoy_blink_connection'
GENERAL_SECTION = 'blink_gf'

FIELD_TYPES = (
    'title', 'select', 'text', 'textarea', 'checkbox',
    'custom_markup', 'order_states', 'sectionend',
)
# Typen ohne gespeicherten Wert
DISPLAY_ONLY_TYPES = ('title', 'custom_markup', 'sectionend')

NOT_CONNECTED = 'Not connected. Please configure your api key.'
CONNECTED = 'Connected.'


@dataclass
class FieldDescriptor:
    id: str
    type: str
    title: str = ''
    desc: str = ''
    default: Optional[str] = None
    options: Dict[str, str] = field(default_factory=dict)
    markup: str = ''
    desc_tip: bool = False

    def __post_init__(self):
        if self.type not in FIELD_TYPES:
            raise ValueError(f"Unknown field type: {self.type}")

    @property
    def stores_value(self) -> bool:
        return self.type not in DISPLAY_ONLY_TYPES


def status_markup(connected: bool, translate: Callable[[str], str] = gettext) -> str:
    if connected:
        return f'<p class="blink-connection-success">{escape(translate(CONNECTED))}</p>'
    return f'<p class="blink-connection-error">{escape(translate(NOT_CONNECTED))}</p>'


def connection_status(store, verifier) -> bool:
    """
    ``True`` nur wenn Umgebung und API‑Key gespeichert sind und der
    Verifier sie akzeptiert. Fehler des Verifiers zählen als "nicht verbunden".
    """
    env = store.get(ENV) or ''
    api_key = store.get(API_KEY) or ''
    if not (env and api_key):
        return False
    try:
        return bool(verifier(env, api_key))
    except Exception:
        log.exception("Verifying the stored Blink API key failed")
        return False


def build_global_settings(
    status_html: str,
    webhook_url: str,
    log_url: str,
    *,
    translate: Callable[[str], str] = gettext,
    version: str = '',
) -> List[FieldDescriptor]:
    _ = translate
    return [
        # Section connection.
        FieldDescriptor(
            id=CONNECTION_SECTION,
            type='title',
            title=_('Connection settings'),
            desc=_(
                'This plugin version is %(version)s and your Python version is %(python)s. '
                'Check out our <a href="https://dev.blink.sv/examples/woocommerce-plugin/" target="_blank">'
                'installation instructions</a>. If you need assistance, please come on our '
                '<a href="https://chat.galoy.io" target="_blank">chat</a>. Thank you for using Blink!'
            ) % {'version': version, 'python': platform.python_version()},
        ),
        FieldDescriptor(
            id=ENV,
            type='select',
            title=_('Blink Environment'),
            options={'blink': _('Blink'), 'staging': _('Galoy Staging')},
            default='blink',
            desc=_('Galoy instance.'),
            desc_tip=True,
        ),
        FieldDescriptor(
            id=WALLET_TYPE,
            type='select',
            title=_('Blink Wallet'),
            options={'bitcoin': _('Bitcoin'), 'stablesats': _('Stablesats')},
            default='bitcoin',
            desc=_('Galoy/Blink Wallet'),
            desc_tip=True,
        ),
        FieldDescriptor(
            id=API_KEY,
            type='text',
            title=_('Blink API Key'),
            desc=_(
                'Your Blink API Key. If you do not have any yet use '
                '<a target="_blank" href="https://dashboard.blink.sv/api-keys">Blink dashboard</a> '
                'to get a new one.'
            ),
            default='',
        ),
        FieldDescriptor(
            id=WEBHOOK_URL,
            type='custom_markup',
            title=_('Webhook Url'),
            markup=escape(webhook_url) + '<p class="description">' + _(
                'Please use <a target="_blank" href="https://dashboard.blink.sv/callback">'
                'Blink dashboard</a> to set it up.'
            ) + '</p>',
        ),
        FieldDescriptor(
            id=STATUS,
            type='custom_markup',
            title=_('Setup status'),
            markup=status_html,
        ),
        FieldDescriptor(id=CONNECTION_SECTION, type='sectionend'),
        # Section general.
        FieldDescriptor(
            id=GENERAL_SECTION,
            type='title',
            title=_('General settings'),
        ),
        FieldDescriptor(
            id=DEFAULT_DESCRIPTION,
            type='textarea',
            title=_('Default Customer Message'),
            desc=_(
                'Message to explain how the customer will be paying for the purchase. '
                'Can be overwritten on a per gateway basis.'
            ),
            default=_('You will be redirected to Blink to complete your purchase.'),
            desc_tip=True,
        ),
        FieldDescriptor(id=ORDER_STATES, type='order_states', title=_('Order States')),
        FieldDescriptor(
            id=PROTECT_ORDER_STATUS,
            type='checkbox',
            title=_('Protect order status'),
            default='yes',
            desc=_(
                'Protects order status from changing if it is already "processing" or "completed". '
                'This will protect against orders getting cancelled via webhook if they were paid '
                'in the meantime with another payment gateway. Default is ON.'
            ),
        ),
        FieldDescriptor(
            id=DEBUG,
            type='checkbox',
            title=_('Debug Log'),
            default='yes',
            desc=_('Enable logging <a href="%(url)s" class="button">View Logs</a>') % {
                'url': escape(log_url),
            },
        ),
        FieldDescriptor(id=GENERAL_SECTION, type='sectionend'),
    ]


def stored_fields(descriptors: List[FieldDescriptor]) -> List[FieldDescriptor]:
    return [d for d in descriptors if d.stores_value]
