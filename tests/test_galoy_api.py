"""
Tests for the Blink GraphQL helper (HTTP layer mocked).
"""

from unittest.mock import Mock

import pytest
import requests

from gateway.galoy_api import GRAPHQL_ENDPOINTS, GaloyApiHelper, shared_session


def _response(payload=None, status_code=200, json_error=None):
    response = Mock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


ACCOUNT = {
    'data': {
        'me': {
            'defaultAccount': {
                'id': 'acc-1',
                'wallets': [
                    {'id': 'btc-wallet', 'walletCurrency': 'BTC'},
                    {'id': 'usd-wallet', 'walletCurrency': 'USD'},
                ],
            }
        }
    }
}


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


class TestVerifyApiKey:

    def test_valid_key(self, session):
        session.post.return_value = _response(ACCOUNT)
        helper = GaloyApiHelper(session=session, timeout=5)

        assert helper.verify_api_key('blink', 'blink_key') is True

        args, kwargs = session.post.call_args
        assert args[0] == GRAPHQL_ENDPOINTS['blink']
        assert kwargs['headers']['X-API-KEY'] == 'blink_key'
        assert kwargs['timeout'] == 5
        assert 'defaultAccount' in kwargs['json']['query']

    def test_staging_endpoint(self, session):
        session.post.return_value = _response(ACCOUNT)
        helper = GaloyApiHelper(session=session)

        helper.verify_api_key('staging', 'k')

        assert session.post.call_args[0][0] == 'https://api.staging.galoy.io/graphql'

    def test_graphql_errors(self, session):
        session.post.return_value = _response({'errors': [{'message': 'Not authorized'}], 'data': {'me': None}})

        assert GaloyApiHelper(session=session).verify_api_key('blink', 'bad') is False

    def test_me_is_null(self, session):
        session.post.return_value = _response({'data': {'me': None}})

        assert GaloyApiHelper(session=session).verify_api_key('blink', 'bad') is False

    def test_http_error(self, session):
        session.post.return_value = _response(status_code=401)

        assert GaloyApiHelper(session=session).verify_api_key('blink', 'bad') is False

    def test_transport_error(self, session):
        session.post.side_effect = requests.ConnectionError('unreachable')

        assert GaloyApiHelper(session=session).verify_api_key('blink', 'k') is False

    def test_timeout(self, session):
        session.post.side_effect = requests.Timeout('too slow')

        assert GaloyApiHelper(session=session).verify_api_key('blink', 'k') is False

    def test_malformed_json(self, session):
        session.post.return_value = _response(json_error=ValueError('no json'))

        assert GaloyApiHelper(session=session).verify_api_key('blink', 'k') is False

    def test_unknown_environment_makes_no_request(self, session):
        assert GaloyApiHelper(session=session).verify_api_key('mainnet', 'k') is False
        session.post.assert_not_called()

    @pytest.mark.parametrize('env,key', [('', 'k'), ('blink', ''), (None, None)])
    def test_empty_credentials(self, session, env, key):
        assert GaloyApiHelper(session=session).verify_api_key(env, key) is False
        session.post.assert_not_called()


class TestWalletId:

    def test_bitcoin_wallet(self, session):
        session.post.return_value = _response(ACCOUNT)

        assert GaloyApiHelper(session=session).get_wallet_id('blink', 'k', 'bitcoin') == 'btc-wallet'

    def test_stablesats_wallet(self, session):
        session.post.return_value = _response(ACCOUNT)

        assert GaloyApiHelper(session=session).get_wallet_id('blink', 'k', 'stablesats') == 'usd-wallet'

    def test_unknown_wallet_type(self, session):
        session.post.return_value = _response(ACCOUNT)

        assert GaloyApiHelper(session=session).get_wallet_id('blink', 'k', 'lightning') is None


def test_default_timeout_comes_from_settings(settings, session):
    settings.BLINK_API_TIMEOUT = 12.5

    assert GaloyApiHelper(session=session).timeout == 12.5


def test_helpers_share_one_session():
    first = GaloyApiHelper()
    second = GaloyApiHelper()

    assert first.session is second.session
    assert first.session is shared_session()
    assert isinstance(first.session, requests.Session)
