"""
Schmaler Client für die Blink/Galoy GraphQL API.

Für die Settings‑Seite wird nur ``verify_api_key`` benötigt: die Methode
liefert ausschließlich ``True``/``False``. Ungültiger Key, HTTP‑Fehler und
Transportfehler sind für den Aufrufer nicht unterscheidbar.
"""

import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings

log = logging.getLogger(__name__)

GRAPHQL_ENDPOINTS = {
    'blink': 'https://api.blink.sv/graphql',
    'staging': 'https://api.staging.galoy.io/graphql',
}

WALLET_CURRENCIES = {
    'bitcoin': 'BTC',
    'stablesats': 'USD',
}

ME_QUERY = """
query me {
  me {
    defaultAccount {
      id
      wallets {
        id
        walletCurrency
      }
    }
  }
}
"""

_session: Optional[requests.Session] = None


def shared_session() -> requests.Session:
    """Eine Session pro Prozess, damit Verbindungen wiederverwendet werden."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class GaloyApiHelper:
    """
    Führt GraphQL‑Requests gegen die gewählte Umgebung aus.

    Parameters
    ----------
    session : requests.Session, optional
        Wiederverwendbare Session (in Tests durch einen Mock ersetzbar).
    timeout : float, optional
        Transport‑Timeout in Sekunden; Default aus ``BLINK_API_TIMEOUT``.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.session = session or shared_session()
        self.timeout = timeout if timeout is not None else getattr(settings, 'BLINK_API_TIMEOUT', 30)

    @staticmethod
    def endpoint_for(env: str) -> Optional[str]:
        return GRAPHQL_ENDPOINTS.get((env or '').strip().lower())

    def _query(self, env: str, api_key: str, query: str) -> Optional[Dict[str, Any]]:
        """
        Sendet ``query`` und gibt ``data`` zurück, oder ``None`` bei jedem Fehler.
        """
        endpoint = self.endpoint_for(env)
        if endpoint is None:
            log.warning("Unknown Blink environment %r", env)
            return None

        try:
            response = self.session.post(
                endpoint,
                json={'query': query, 'variables': {}},
                headers={'X-API-KEY': api_key, 'Content-Type': 'application/json'},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            log.info("Blink API request to %s failed: %s", endpoint, exc)
            return None
        except ValueError as exc:
            log.info("Blink API returned malformed JSON: %s", exc)
            return None

        if not isinstance(payload, dict) or payload.get('errors'):
            log.info("Blink API answered with errors: %s", payload.get('errors') if isinstance(payload, dict) else payload)
            return None
        return payload.get('data') or None

    def _default_account(self, env: str, api_key: str) -> Optional[Dict[str, Any]]:
        data = self._query(env, api_key, ME_QUERY)
        if not data:
            return None
        me = data.get('me') or {}
        return me.get('defaultAccount') or None

    def verify_api_key(self, env: str, api_key: str) -> bool:
        if not env or not api_key:
            return False
        return self._default_account(env, api_key) is not None

    def get_wallet_id(self, env: str, api_key: str, wallet_type: str) -> Optional[str]:
        """Wallet‑ID für ``bitcoin`` (BTC) bzw. ``stablesats`` (USD)."""
        currency = WALLET_CURRENCIES.get(wallet_type)
        account = self._default_account(env, api_key)
        if currency is None or account is None:
            return None
        for wallet in account.get('wallets') or []:
            if wallet.get('walletCurrency') == currency:
                return wallet.get('id')
        return None
