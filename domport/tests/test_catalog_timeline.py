PRODUCTS = [
    {'product_id': 1, 'name': 'Rem 1/7 Scale', 'price': '฿4,590', 'stock': 2,
     'fandom': 'Re:Zero', 'category': 'Scale Figure'},
    {'product_id': 2, 'name': 'Nendoroid Rem', 'price': 1490, 'stock': 0,
     'fandom': 'Re:Zero', 'category': 'Nendoroid', 'is_preorder': True, 'deposit_amount': 500},
    {'product_id': 3, 'name': 'Frieren Pop Up Parade', 'price': 1290, 'stock': 5,
     'fandom': 'Frieren', 'category': 'Prize Figure'},
]


def test_search_filters(container, fake_http):
    fake_http.add('GET', '/api/products', json_data=PRODUCTS)
    catalog = container.catalog_service

    assert [p.product_id for p in catalog.search_products(query='rem')] == ['1', '2']
    assert [p.product_id for p in catalog.search_products(fandom='frieren')] == ['3']
    assert [p.product_id for p in catalog.search_products(category='Nendoroid')] == ['2']
    assert [p.product_id for p in catalog.search_products(preorder=False, fandom='Re:Zero')] == ['1']


def test_preorder_list(container, fake_http):
    fake_http.add('GET', '/api/products', json_data=PRODUCTS)
    preorders = container.preorder_service.list_preorders()
    assert [p.product_id for p in preorders] == ['2']
    assert preorders[0].deposit_amount == 500.0


def test_categories_sorted(container, fake_http):
    fake_http.add('GET', '/api/categories', json_data=[
        {'category_id': 1, 'name': 'Scale Figure'},
        {'category_id': 2, 'name': 'Nendoroid'},
        {'category_id': 3, 'name': ''},
    ])
    assert container.catalog_service.get_categories() == ['Nendoroid', 'Scale Figure']


def test_fandom_detail_includes_products(container, fake_http):
    fake_http.add('GET', '/api/fandoms/4', json_data={'fandom_id': 4, 'name': 'Frieren'})
    fake_http.add('GET', '/api/products', json_data=PRODUCTS)

    detail = container.catalog_service.get_fandom_detail('4')
    assert detail['fandom']['name'] == 'Frieren'
    assert [p['product_id'] for p in detail['products']] == ['3']


def test_product_validation_before_backend(container, fake_http):
    catalog = container.catalog_service
    assert catalog.create_product({'name': '', 'price': 100})['error'] == 'Product name is required'
    assert not catalog.create_product({'name': 'Miku', 'price': '0'})['ok']
    assert not catalog.create_product({'name': 'Miku', 'price': 100, 'stock': -1})['ok']
    assert not catalog.update_product('1', {'stock': 'many'})['ok']
    assert not catalog.save_fandom({'name': ' '})['ok']
    assert fake_http.calls == []


def test_product_update_is_partial(container, fake_http):
    fake_http.add('PUT', '/api/products/1', json_data=dict(PRODUCTS[0], stock=9))
    result = container.catalog_service.update_product('1', {'stock': 9})
    assert result['ok']
    assert result['product']['stock'] == 9
    assert fake_http.last()['json'] == {'stock': 9}


def test_fandom_create_and_update(container, fake_http):
    fake_http.add('POST', '/api/fandoms', json_data={'fandom_id': 9, 'name': 'Bocchi'})
    fake_http.add('PUT', '/api/fandoms/9', json_data={'fandom_id': 9, 'name': 'Bocchi the Rock!'})

    assert container.catalog_service.save_fandom({'name': 'Bocchi'})['fandom']['fandom_id'] == '9'
    updated = container.catalog_service.save_fandom({'name': 'Bocchi the Rock!'}, '9')
    assert updated['fandom']['name'] == 'Bocchi the Rock!'


def test_delete_reports_backend_error(container, fake_http):
    fake_http.add('DELETE', '/api/products/1', status=409, json_data={'message': 'Product has orders'})
    result = container.catalog_service.delete_product('1')
    assert result == {'ok': False, 'error': 'Product has orders', 'status': 409}


# ==============================================================================
# LÍNEA DE TIEMPO
# ==============================================================================

def test_timeline_sorted_by_event_date(container, fake_http):
    fake_http.add('GET', '/api/timeline/product/2', json_data=[
        {'event_id': 3, 'title': 'Shipping', 'event_date': '2026-11-20'},
        {'event_id': 1, 'title': 'Sculpting', 'event_date': '2026-03-01'},
        {'event_id': 2, 'title': 'Painting', 'event_date': '2026-07-15'},
    ])
    events = container.timeline_service.get_product_timeline('2')
    assert [e.title for e in events] == ['Sculpting', 'Painting', 'Shipping']


def test_create_event_validation(container, fake_http):
    timeline = container.timeline_service
    assert not timeline.create_event({'title': '', 'event_date': '2026-01-01', 'product_id': 2})['ok']
    assert not timeline.create_event({'title': 'QC', 'product_id': 2})['ok']
    assert not timeline.create_event({'title': 'QC', 'event_date': '2026-01-01'})['ok']
    assert not timeline.create_event({'title': 'QC', 'event_date': '2026-01-01', 'order_id': 5,
                                      'event_type': 'party'})['ok']
    assert fake_http.calls == []


def test_create_event_defaults(container, fake_http):
    fake_http.add('POST', '/api/timeline', json_data={
        'event_id': 8, 'title': 'QC passed', 'event_date': '2026-05-01', 'order_id': 5,
        'event_type': 'general', 'status': 'upcoming',
    })
    result = container.timeline_service.create_event(
        {'title': 'QC passed', 'event_date': '2026-05-01', 'order_id': 5})

    assert result['ok']
    sent = fake_http.last('POST', '/api/timeline')['json']
    assert sent['event_type'] == 'general'
    assert sent['status'] == 'upcoming'


# ==============================================================================
# PERFIL
# ==============================================================================

def test_save_profile_keeps_role_and_filters_fields(client, fake_http, container):
    from conftest import login

    token = login(client, fake_http, role='user', user_id='7')
    fake_http.add('PATCH', '/api/users/7', json_data={'id': 7, 'province': 'Chiang Mai'})

    r = client.post('/api/me/profile', json={
        'province': 'Chiang Mai', 'role': 'admin', 'csrf_token': token,
    })
    assert r.status_code == 200
    assert fake_http.last('PATCH', '/api/users/7')['json'] == {'province': 'Chiang Mai'}

    me = client.get('/api/me').get_json()
    assert me['user']['province'] == 'Chiang Mai'
    assert me['user']['role'] == 'user'
    assert me['role'] == 'user'


def test_save_profile_requires_name_and_phone(client, fake_http):
    from conftest import login

    token = login(client, fake_http)
    r = client.post('/api/me/profile', json={'phone': '', 'csrf_token': token})
    assert r.status_code == 400
    assert fake_http.last('PATCH') is None
