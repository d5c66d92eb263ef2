import json

from domport.repositories import (
    CustomRequestRepository,
    LocalStorage,
    SettingsRepository,
    StaffRepository,
)


def test_local_storage_is_per_device(tmp_path):
    storage = LocalStorage(str(tmp_path))
    storage.set_item('theme', 'light', device_id='laptop')
    storage.set_item('theme', 'dark', device_id='phone')

    assert storage.get_item('theme', device_id='laptop') == 'light'
    assert storage.get_item('theme', device_id='phone') == 'dark'
    assert storage.get_item('theme', device_id='tablet') is None


def test_local_storage_survives_new_instance(tmp_path):
    LocalStorage(str(tmp_path)).set_item('access_token', 'abc', device_id='d1')
    assert LocalStorage(str(tmp_path)).get_item('access_token', device_id='d1') == 'abc'


def test_local_storage_remove_and_clear(tmp_path):
    storage = LocalStorage(str(tmp_path))
    storage.set_item('a', '1', device_id='d')
    storage.set_item('b', '2', device_id='d')

    storage.remove_item('a', device_id='d')
    assert storage.keys(device_id='d') == ['b']

    storage.clear(device_id='d')
    assert storage.keys(device_id='d') == []


def test_session_storage_lives_in_flask_session(container, request_ctx):
    from flask import session

    container.session_storage.set_item('access_token', 'tok')
    assert session['session_storage'] == {'access_token': 'tok'}

    container.session_storage.clear()
    assert container.session_storage.get_item('access_token') is None


def test_theme_defaults_and_fallback(tmp_path):
    settings = SettingsRepository(LocalStorage(str(tmp_path)))

    assert settings.get_theme('d') == 'dark'
    assert settings.set_theme('LIGHT', 'd') == 'light'
    assert settings.get_theme('d') == 'light'
    assert settings.set_theme('purple', 'd') == 'dark'
    assert settings.toggle_theme('d') == 'light'


def test_theme_ignores_corrupted_value(tmp_path):
    storage = LocalStorage(str(tmp_path))
    storage.set_item('theme', 'neon', device_id='d')
    assert SettingsRepository(storage).get_theme('d') == 'dark'


def test_custom_requests_round_trip(tmp_path):
    repo = CustomRequestRepository(str(tmp_path))
    requests = [
        {'id': 'REQ000001', 'productName': 'Miku', 'region': 'JP', 'price': 12000,
         'quantity': 1, 'estimatedTotal': 2980.0, 'status': 'pending'},
        {'id': 'REQ000002', 'productName': 'Saber', 'region': 'US', 'price': 80,
         'quantity': 2, 'estimatedTotal': 5700.0, 'status': 'shipping',
         'trackingNumber': 'TH123'},
    ]

    repo.save(requests)
    assert CustomRequestRepository(str(tmp_path)).load() == requests


def test_custom_requests_repeated_save_is_idempotent(tmp_path):
    repo = CustomRequestRepository(str(tmp_path))
    requests = [{'id': 'REQ1', 'status': 'pending'}]

    repo.save(requests)
    first = (tmp_path / 'custom_requests.json').read_text(encoding='utf-8')
    repo.save(requests)
    second = (tmp_path / 'custom_requests.json').read_text(encoding='utf-8')

    assert first == second
    assert json.loads(second) == requests


def test_custom_requests_update_by_id(tmp_path):
    repo = CustomRequestRepository(str(tmp_path))
    repo.add_request({'id': 'REQ1', 'status': 'pending'})
    repo.add_request({'id': 'REQ2', 'status': 'pending'})

    assert repo.update_request({'id': 'REQ2', 'status': 'rejected'})
    assert not repo.update_request({'id': 'REQ9', 'status': 'rejected'})
    assert [r['status'] for r in repo.load()] == ['pending', 'rejected']


def test_staff_seeded_with_support_agent(tmp_path):
    staff = StaffRepository(str(tmp_path)).list_staff()
    assert len(staff) == 1
    assert staff[0]['status'] == 'online'


def test_repositories_satisfy_service_contracts(tmp_path):
    from domport.repositories import (
        ChatRepository,
        IChatRepository,
        ICustomRequestRepository,
        IKeyValueStorage,
        SessionStorage,
    )

    assert isinstance(CustomRequestRepository(str(tmp_path)), ICustomRequestRepository)
    assert isinstance(ChatRepository(str(tmp_path)), IChatRepository)
    assert isinstance(SessionStorage(), IKeyValueStorage)
    assert isinstance(LocalStorage(str(tmp_path)), IKeyValueStorage)


def test_custom_requests_by_user(tmp_path):
    repo = CustomRequestRepository(str(tmp_path))
    repo.add_request({'id': 'REQ1', 'userId': '7'})
    repo.add_request({'id': 'REQ2', 'userId': '8'})
    assert [r['id'] for r in repo.get_by_user('7')] == ['REQ1']


def test_removing_last_key_forgets_device(tmp_path):
    storage = LocalStorage(str(tmp_path))
    storage.set_item('theme', 'light', device_id='kiosk')
    storage.set_item('theme', 'dark', device_id='phone')

    storage.remove_item('theme', device_id='kiosk')
    assert 'kiosk' not in storage.get_all()
    assert storage.get_item('theme', device_id='phone') == 'dark'

    storage.remove_item('theme', device_id='ghost')
    assert 'ghost' not in storage.get_all()
