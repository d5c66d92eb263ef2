import json
import os
import tempfile

import pytest

# Logs de las pruebas fuera del paquete
os.environ.setdefault('DOMPORT_LOGS_DIR', tempfile.mkdtemp(prefix='domport-logs-'))

from domport import config
from domport.app_container import AppContainer, get_container


class FakeResponse:
    """Respuesta mínima con la interfaz de requests.Response que usa ApiClient."""

    def __init__(self, status_code=200, json_data=None, reason='OK'):
        self.status_code = status_code
        self.reason = reason
        self._json = json_data
        self.content = b'' if json_data is None else json.dumps(json_data).encode('utf-8')
        self.headers = {'Content-Type': 'application/json'}

    def json(self):
        if self._json is None:
            raise ValueError('No JSON body')
        return self._json


class FakeHttp:
    """
    Sesión HTTP de prueba: responde según (método, ruta) y guarda cada llamada.
    Una ruta sin registrar responde 404.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, status=200, json_data=None, reason='OK'):
        self.routes[(method.upper(), path)] = FakeResponse(status, json_data, reason)

    def fail(self, method, path, exc):
        self.routes[(method.upper(), path)] = exc

    def request(self, method, url, headers=None, json=None, params=None, timeout=None):
        path = url[len(config.API_ROOT_URL):]
        self.calls.append({
            'method': method,
            'url': url,
            'path': path,
            'headers': headers or {},
            'json': json,
            'params': params,
            'timeout': timeout,
        })
        response = self.routes.get((method.upper(), path))
        if response is None:
            return FakeResponse(404, {'message': 'Not Found'}, 'Not Found')
        if isinstance(response, Exception):
            raise response
        return response

    def last(self, method=None, path=None):
        for call in reversed(self.calls):
            if (method is None or call['method'] == method) and (path is None or call['path'] == path):
                return call
        return None


@pytest.fixture
def fake_http():
    return FakeHttp()


@pytest.fixture
def container(tmp_path, fake_http):
    AppContainer.reset_instance()
    c = get_container(str(tmp_path), http=fake_http)
    yield c
    AppContainer.reset_instance()


@pytest.fixture
def app(container):
    from domport.main import app as flask_app
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def request_ctx(app):
    """Contexto de petición para servicios que usan la sesión de Flask."""
    with app.test_request_context('/'):
        yield


def get_csrf(client):
    r = client.get('/api/csrf')
    assert r.status_code == 200
    return r.get_json()['csrf_token']


def login(client, fake_http, role='user', user_id='7', remember_me=False):
    fake_http.add('POST', '/auth/login', json_data={
        'access_token': f'token-{role}',
        'role': role,
        'user': {
            'id': user_id,
            'username': f'{role}name',
            'email': f'{role}@example.com',
            'name': f'{role.title()} Person',
            'phone': '0812345678',
            'house_number': '12/3',
            'district': 'Bang Rak',
            'province': 'Bangkok',
            'postal_code': '10500',
            'points': 5,
        },
    })
    token = get_csrf(client)
    r = client.post('/auth/login', json={
        'username': f'{role}name',
        'password': 'secret',
        'remember_me': remember_me,
        'csrf_token': token,
    })
    assert r.status_code == 200, r.get_json()
    return token
