from email.message import Message
from types import SimpleNamespace

import pytest
import requests
from requests.cookies import extract_cookies_to_jar

from domport.services.api_client import ApiClient, ApiError

from conftest import FakeHttp


def make_client(fake_http, token=None):
    return ApiClient(
        base_url='http://localhost:3000/api',
        auth_url='http://localhost:3000/auth',
        token_provider=lambda: token,
        http=fake_http,
    )


def test_bearer_token_attached_when_present(fake_http):
    fake_http.add('GET', '/api/products', json_data=[])
    make_client(fake_http, token='abc123').get_products()

    call = fake_http.last('GET', '/api/products')
    assert call['headers']['Authorization'] == 'Bearer abc123'
    assert call['headers']['Content-Type'] == 'application/json'


def test_no_authorization_header_without_token(fake_http):
    fake_http.add('GET', '/api/products', json_data=[])
    make_client(fake_http, token=None).get_products()

    assert 'Authorization' not in fake_http.last()['headers']


def test_token_read_from_local_then_session_storage(container, fake_http, request_ctx):
    fake_http.add('GET', '/api/categories', json_data=[])

    container.session_storage.set_item('access_token', 'from-session')
    container.api_client.get_categories()
    assert fake_http.last()['headers']['Authorization'] == 'Bearer from-session'

    container.local_storage.set_item('access_token', 'from-local')
    container.api_client.get_categories()
    assert fake_http.last()['headers']['Authorization'] == 'Bearer from-local'

    container.local_storage.remove_item('access_token')
    container.session_storage.remove_item('access_token')
    container.api_client.get_categories()
    assert 'Authorization' not in fake_http.last()['headers']


def test_204_returns_empty_dict(fake_http):
    fake_http.add('DELETE', '/api/products/5', status=204, reason='No Content')
    assert make_client(fake_http).delete_product('5') == {}


def test_empty_2xx_body_returns_empty_dict(fake_http):
    fake_http.add('PATCH', '/api/users/9/restore', status=200)
    assert make_client(fake_http).restore_user('9') == {}


def test_error_uses_backend_message(fake_http):
    fake_http.add('POST', '/api/orders', status=400,
                  json_data={'message': 'Out of stock'}, reason='Bad Request')

    with pytest.raises(ApiError) as exc:
        make_client(fake_http).create_order({'items': []})

    assert exc.value.message == 'Out of stock'
    assert exc.value.status == 400
    assert exc.value.payload == {'message': 'Out of stock'}


def test_error_joins_message_list(fake_http):
    fake_http.add('POST', '/auth/register', status=422,
                  json_data={'message': ['email must be valid', 'password too short']})

    with pytest.raises(ApiError) as exc:
        make_client(fake_http).register('u', 'bad', 'x')

    assert str(exc.value) == 'email must be valid, password too short'


def test_error_falls_back_to_status_line(fake_http):
    fake_http.add('GET', '/api/orders', status=500, reason='Internal Server Error')

    with pytest.raises(ApiError) as exc:
        make_client(fake_http).get_orders()

    assert exc.value.message == 'API Error: 500 Internal Server Error'


def test_401_raises_without_clearing_token(container, fake_http, request_ctx):
    container.local_storage.set_item('access_token', 'expired')
    fake_http.add('GET', '/api/users', status=401, json_data={'message': 'Unauthorized'})

    with pytest.raises(ApiError) as exc:
        container.api_client.get_users()

    assert exc.value.is_unauthorized
    assert container.local_storage.get_item('access_token') == 'expired'


def test_transport_failure_becomes_api_error(fake_http):
    fake_http.fail('GET', '/api/fandoms', requests.ConnectionError('connection refused'))

    with pytest.raises(ApiError) as exc:
        make_client(fake_http).get_fandoms()

    assert exc.value.status is None
    assert 'connection refused' in exc.value.message


def test_single_attempt_per_call(fake_http):
    fake_http.add('GET', '/api/tickets', status=503, reason='Service Unavailable')

    with pytest.raises(ApiError):
        make_client(fake_http).get_tickets()

    assert len(fake_http.calls) == 1


def test_list_endpoints_unwrap_data_envelope(fake_http):
    fake_http.add('GET', '/api/products', json_data={'data': [
        {'product_id': 1, 'name': 'Rem 1/7', 'price': '฿4,590', 'stock': 3},
    ]})

    products = make_client(fake_http).get_products()

    assert len(products) == 1
    assert products[0].product_id == '1'
    assert products[0].price == 4590.0


def test_login_uses_auth_root(fake_http):
    fake_http.add('POST', '/auth/login', json_data={'access_token': 't'})
    data = make_client(fake_http).login('alice', 'pw')

    assert data == {'access_token': 't'}
    call = fake_http.last()
    assert call['url'] == 'http://localhost:3000/auth/login'
    assert call['json'] == {'username': 'alice', 'password': 'pw'}


def test_resource_paths(fake_http):
    client = make_client(fake_http)
    fake_http.add('PATCH', '/api/orders/3', json_data={'order_id': 3, 'status': 'shipped'})
    fake_http.add('POST', '/api/payments/process', json_data={'payment_id': 1, 'order_id': 3,
                                                              'payment_method': 'promptpay', 'amount': 99})
    fake_http.add('GET', '/api/timeline/order/3', json_data=[])
    fake_http.add('PATCH', '/api/users/4/restore', status=204)

    assert client.update_order_status('3', 'shipped').status == 'shipped'
    assert fake_http.last()['json'] == {'status': 'shipped'}

    payment = client.process_payment('3', 'promptpay', 99)
    assert payment.amount == 99.0

    assert client.get_timeline_events_by_order('3') == []
    assert client.restore_user('4') == {}
    assert fake_http.last()['method'] == 'PATCH'


def test_timeout_passed_through():
    fake = FakeHttp()
    fake.add('GET', '/api/categories', json_data=[])
    client = ApiClient(base_url='http://localhost:3000/api', http=fake, timeout=2.5)
    client.get_categories()
    assert fake.last()['timeout'] == 2.5


def test_default_session_drops_backend_cookies():
    headers = Message()
    headers['Set-Cookie'] = 'sid=abc123; Path=/'
    raw = SimpleNamespace(_original_response=SimpleNamespace(msg=headers))
    req = requests.Request('GET', 'http://localhost:3000/api/products').prepare()

    plain = requests.Session()
    extract_cookies_to_jar(plain.cookies, req, raw)
    assert len(plain.cookies) == 1

    shared = ApiClient().http
    extract_cookies_to_jar(shared.cookies, req, raw)
    assert len(shared.cookies) == 0
