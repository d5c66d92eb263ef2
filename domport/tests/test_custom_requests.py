from datetime import date, timedelta

import pytest

from domport.models import User
from domport.repositories import CustomRequestRepository
from domport.services.custom_request_service import CustomRequestService


@pytest.fixture
def service(tmp_path):
    return CustomRequestService(CustomRequestRepository(str(tmp_path)))


@pytest.fixture
def customer():
    return User(id='7', username='nana', email='nana@example.com', name='Nana',
                phone='0812345678', house_number='99', district='Pathum Wan',
                province='Bangkok', postal_code='10330')


def submit(service, customer, **overrides):
    data = {'productName': 'Nendoroid Frieren', 'link': 'https://example.jp/item/1',
            'region': 'JP', 'price': 5000, 'quantity': 2}
    data.update(overrides)
    result = service.submit(data, customer)
    assert result['ok'], result
    return result['request']


@pytest.mark.parametrize('price,region,qty,expected', [
    (5000, 'JP', 2, 2500.0),
    (10, 'US', 1, 450.0),
    (100, 'CN', 3, 1600.0),
    (20000, 'KR', 1, 640.0),
])
def test_estimate_formula(service, price, region, qty, expected):
    assert service.estimate_total(price, region, qty) == expected


def test_estimate_rejects_unknown_region(service):
    assert service.estimate_total(100, 'FR', 1) is None


def test_submit_creates_pending_request(service, customer):
    req = submit(service, customer)

    assert req['id'].startswith('REQ') and len(req['id']) == 9
    assert req['status'] == 'pending'
    assert req['estimatedTotal'] == 2500.0
    assert req['userId'] == '7'
    assert req['userName'] == 'Nana'
    assert 'shippingCost' not in req


def test_submit_without_user_uses_placeholders(service):
    req = submit(service, None)
    assert req['userName'] == 'Unknown User'
    assert req['userEmail'] == '-'
    assert req['userId'] == 'unknown'


def test_submit_validation(service, customer):
    assert not service.submit({'productName': '', 'link': 'x', 'region': 'JP', 'price': 1}, customer)['ok']
    assert not service.submit({'productName': 'a', 'link': 'x', 'region': 'XX', 'price': 1}, customer)['ok']
    assert not service.submit({'productName': 'a', 'link': 'x', 'region': 'JP', 'price': 0}, customer)['ok']
    assert not service.submit({'productName': 'a', 'link': 'x', 'region': 'JP', 'price': 1,
                               'quantity': 0}, customer)['ok']


def test_ids_are_unique(service, customer):
    ids = {submit(service, customer)['id'] for _ in range(5)}
    assert len(ids) == 5


def test_full_pipeline(service, customer):
    req_id = submit(service, customer)['id']

    approved = service.approve(req_id, 300)
    assert approved['ok']
    assert approved['request']['status'] == 'payment_pending'
    assert approved['request']['finalTotal'] == 2800.0

    paid = service.submit_payment(req_id, 'data:image/png;base64,AAA', '2026-01-10', '10:30', customer)
    assert paid['ok']
    assert paid['request']['status'] == 'payment_verification'
    assert 'Bangkok' in paid['request']['shippingAddress']

    assert service.confirm_order(req_id)['request']['status'] == 'ordered'
    assert service.mark_arrived(req_id)['request']['status'] == 'arrived_th'

    shipped = service.ship(req_id, 'TH0001')
    assert shipped['request']['trackingNumber'] == 'TH0001'

    done = service.confirm_received(req_id, customer)
    assert done['request']['status'] == 'completed'
    assert service.get_request(req_id).status == 'completed'


def test_rejected_is_terminal(service, customer):
    req_id = submit(service, customer)['id']
    assert service.reject(req_id, 'Not available')['ok']

    result = service.approve(req_id, 100)
    assert not result['ok']
    assert 'rejected' in result['error']


def test_cannot_skip_payment(service, customer):
    req_id = submit(service, customer)['id']
    assert not service.confirm_order(req_id)['ok']
    assert not service.ship(req_id, 'TH1')['ok']


def test_slip_rejection_returns_to_payment_pending(service, customer):
    req_id = submit(service, customer)['id']
    service.approve(req_id, 0)
    service.submit_payment(req_id, 'slip', '2026-01-10', '10:30', customer)

    result = service.reject_slip(req_id)
    assert result['request']['status'] == 'payment_pending'
    assert result['request']['adminNotes'] == 'Slip rejected, please re-upload'


def test_payment_requires_slip_date_and_time(service, customer):
    req_id = submit(service, customer)['id']
    service.approve(req_id, 0)
    assert not service.submit_payment(req_id, '', '2026-01-10', '10:30', customer)['ok']
    assert not service.submit_payment(req_id, 'slip', '', '10:30', customer)['ok']
    assert not service.submit_payment(req_id, 'slip', '2026-01-10', '', customer)['ok']


def test_ship_requires_tracking_number(service, customer):
    req_id = submit(service, customer)['id']
    service.approve(req_id, 0)
    service.submit_payment(req_id, 'slip', '2026-01-10', '10:30', customer)
    service.confirm_order(req_id)
    assert not service.ship(req_id, '  ')['ok']


def test_legacy_approved_read_as_payment_pending(service, tmp_path):
    service.repo.save([{'id': 'REQ001', 'productName': 'Old', 'link': 'x', 'region': 'JP',
                        'price': 1000, 'quantity': 1, 'estimatedTotal': 340, 'status': 'approved'}])

    assert service.get_request('REQ001').status == 'payment_pending'
    assert [r.id for r in service.list_requests(status='payment_pending')] == ['REQ001']


def test_filters(service, customer):
    submit(service, customer, region='JP')
    us = submit(service, customer, region='US', price=10)
    service.reject(us['id'])

    assert len(service.list_requests(region='US')) == 1
    assert len(service.list_requests(status='rejected')) == 1
    assert len(service.list_requests(status='all', region='all')) == 2
    assert len(service.list_requests(user_id='someone-else')) == 0


def test_update_status_dispatch(service, customer):
    req_id = submit(service, customer)['id']

    result = service.update_status(req_id, 'payment_pending', shipping_cost='150')
    assert result['request']['shippingCost'] == 150.0

    assert not service.update_status(req_id, 'flying')['ok']


def test_admin_notes_do_not_change_status(service, customer):
    req_id = submit(service, customer)['id']
    result = service.add_admin_notes(req_id, 'Checking with seller')
    assert result['request']['adminNotes'] == 'Checking with seller'
    assert result['request']['status'] == 'pending'


# ==============================================================================
# DUEÑO DE LA SOLICITUD
# ==============================================================================

def test_user_without_backend_id_owns_by_username(service):
    nana = User(id='', username='nana')
    req = submit(service, nana)

    assert req['userId'] == 'nana'
    assert [r.id for r in service.list_requests(user_id=nana.owner_key)] == [req['id']]


def test_unknown_requests_belong_to_nobody(service, customer):
    req_id = submit(service, None)['id']
    service.approve(req_id, 0)

    result = service.submit_payment(req_id, 'slip', '2026-01-10', '10:30', customer)
    assert result == {'ok': False, 'error': 'Request belongs to another user'}
    assert not service.is_owner(service.get_request(req_id), customer)
    assert service.list_requests(user_id=customer.owner_key) == []


def test_other_customer_cannot_confirm_receipt(service, customer):
    req_id = submit(service, customer)['id']
    stranger = User(id='8', username='mint')
    assert not service.confirm_received(req_id, stranger)['ok']


# ==============================================================================
# PRE-ORDEN DESDE SOLICITUD
# ==============================================================================

def paid_request(service, customer):
    req_id = submit(service, customer)['id']
    service.approve(req_id, 300)
    service.submit_payment(req_id, 'slip', '2026-01-10', '10:30', customer)
    return req_id


def test_create_preorder_publishes_product_and_orders(container, fake_http, customer):
    service = container.custom_request_service
    req_id = paid_request(service, customer)
    fake_http.add('POST', '/api/products', json_data={
        'product_id': 31, 'name': 'Nendoroid Frieren', 'price': 2500,
        'is_preorder': True, 'deposit_amount': 500,
    })

    result = service.create_preorder(req_id)

    assert result['ok'], result
    assert result['request']['status'] == 'ordered'
    assert result['request']['preorderId'] == '31'
    assert result['request']['adminNotes'] == 'Pre-order created: ID 31'
    assert result['product']['is_preorder'] is True

    sent = fake_http.last('POST', '/api/products')['json']
    assert sent['name'] == 'Nendoroid Frieren'
    assert sent['price'] == 2500.0
    assert sent['is_preorder'] is True
    assert sent['deposit_amount'] == 500
    assert sent['release_date'] == (date.today() + timedelta(days=90)).isoformat()
    assert sent['fandom'] == 'Custom Request'
    assert sent['category'] == 'Other'
    assert 'https://example.jp/item/1' in sent['description']


def test_create_preorder_only_once(container, fake_http, customer):
    service = container.custom_request_service
    req_id = paid_request(service, customer)
    fake_http.add('POST', '/api/products', json_data={'product_id': 31, 'name': 'x', 'price': 2500})

    assert service.create_preorder(req_id)['ok']
    assert not service.create_preorder(req_id)['ok']
    assert len([c for c in fake_http.calls if c['method'] == 'POST']) == 1


def test_create_preorder_needs_payment_first(container, fake_http, customer):
    service = container.custom_request_service
    req_id = submit(service, customer)['id']

    result = service.create_preorder(req_id)
    assert not result['ok']
    assert 'pending' in result['error']
    assert fake_http.calls == []
    assert service.get_request(req_id).status == 'pending'


def test_create_preorder_keeps_status_when_backend_fails(container, fake_http, customer):
    service = container.custom_request_service
    req_id = paid_request(service, customer)
    fake_http.add('POST', '/api/products', status=500, json_data={'message': 'Database down'})

    result = service.create_preorder(req_id)
    assert result['error'] == 'Database down'
    assert service.get_request(req_id).status == 'payment_verification'
    assert service.get_request(req_id).preorder_id is None


def test_create_preorder_without_catalog(service, customer):
    req_id = paid_request(service, customer)
    assert service.create_preorder(req_id) == {'ok': False, 'error': 'Catalog is not available'}
