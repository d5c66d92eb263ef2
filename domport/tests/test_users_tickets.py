from domport.models import User


def test_partition_deleted_wins_over_blacklisted(container):
    users = [
        User(id='1'),
        User(id='2', is_blacklisted=True),
        User(id='3', is_blacklisted=True, deleted_at='2026-01-01T00:00:00Z'),
        User(id='4', deleted_at='2026-02-01T00:00:00Z'),
    ]
    groups = container.user_service.partition(users)

    assert [u.id for u in groups['active']] == ['1']
    assert [u.id for u in groups['blacklisted']] == ['2']
    assert [u.id for u in groups['deleted']] == ['3', '4']


def test_toggle_blacklist_flips_flag(container, fake_http):
    fake_http.add('GET', '/api/users/5', json_data={'id': 5, 'username': 'ken', 'isBlacklisted': False})
    fake_http.add('PATCH', '/api/users/5', json_data={'id': 5, 'isBlacklisted': True})

    result = container.user_service.toggle_blacklist('5')

    assert result == {'ok': True, 'user_id': '5', 'is_blacklisted': True}
    assert fake_http.last('PATCH', '/api/users/5')['json'] == {'isBlacklisted': True}


def test_admin_cannot_modify_self(container, fake_http):
    admin = User(id='1', role='admin')

    assert not container.user_service.toggle_blacklist('1', admin)['ok']
    assert not container.user_service.delete_user('1', admin)['ok']
    assert fake_http.calls == []


def test_user_detail_matches_orders_by_any_owner_field(container, fake_http):
    fake_http.add('GET', '/api/users/7', json_data={'id': 7, 'username': 'nana'})
    fake_http.add('GET', '/api/orders', json_data=[
        {'order_id': 1, 'user_id': 7, 'total_amount': 500},
        {'order_id': 2, 'userId': '7', 'totalAmount': '฿1,250'},
        {'order_id': 3, 'user': {'id': 7}, 'total': 100},
        {'order_id': 4, 'user_id': 8, 'total_amount': 999},
    ])

    detail = container.user_service.get_user_detail('7')

    assert detail['ok']
    assert [o['order_id'] for o in detail['orders']] == ['1', '2', '3']
    assert detail['total_spent'] == 1850.0


def test_user_detail_reports_backend_error(container, fake_http):
    detail = container.user_service.get_user_detail('404')
    assert not detail['ok']
    assert detail['status'] == 404


def test_restore_user(container, fake_http):
    fake_http.add('PATCH', '/api/users/3/restore', status=204)
    assert container.user_service.restore_user('3') == {'ok': True, 'user_id': '3'}


# ==============================================================================
# TICKETS
# ==============================================================================

def test_ticket_requires_subject_and_message(container, fake_http):
    tickets = container.ticket_service
    assert not tickets.create_ticket({'subject': '', 'message': 'hi'}, None)['ok']
    assert not tickets.create_ticket({'subject': 'Late', 'message': ' '}, None)['ok']
    assert not tickets.create_ticket({'subject': 'Late', 'message': 'hi', 'priority': 'asap'}, None)['ok']
    assert fake_http.calls == []


def test_ticket_created_with_author(container, fake_http):
    fake_http.add('POST', '/api/tickets', json_data={
        'id': 11, 'subject': 'Late order', 'message': 'Where is it?', 'status': 'open',
        'priority': 'high', 'userId': '7',
    })
    user = User(id='7', username='nana', email='nana@example.com')

    result = container.ticket_service.create_ticket(
        {'subject': 'Late order', 'message': 'Where is it?', 'priority': 'high'}, user)

    assert result['ok']
    sent = fake_http.last('POST', '/api/tickets')['json']
    assert sent['status'] == 'open'
    assert sent['category'] == 'general'
    assert sent['userName'] == 'nana'


def test_respond_moves_ticket_in_progress(container, fake_http):
    fake_http.add('PATCH', '/api/tickets/11', json_data={
        'id': 11, 'subject': 's', 'message': 'm', 'status': 'in_progress',
        'adminResponse': 'Shipped today',
    })

    result = container.ticket_service.respond('11', 'Shipped today')

    assert result['ticket']['status'] == 'in_progress'
    assert fake_http.last()['json'] == {'adminResponse': 'Shipped today', 'status': 'in_progress'}
    assert not container.ticket_service.respond('11', '')['ok']


def test_ticket_filters(container, fake_http):
    fake_http.add('GET', '/api/tickets', json_data=[
        {'id': 1, 'subject': 'a', 'message': 'a', 'status': 'open', 'priority': 'low'},
        {'id': 2, 'subject': 'b', 'message': 'b', 'status': 'open', 'priority': 'urgent'},
        {'id': 3, 'subject': 'c', 'message': 'c', 'status': 'closed', 'priority': 'urgent'},
    ])
    tickets = container.ticket_service

    assert [t.id for t in tickets.list_tickets(status='open')] == ['1', '2']
    assert [t.id for t in tickets.list_tickets(priority='urgent')] == ['2', '3']
    assert len(tickets.list_tickets(status='all', priority='all')) == 3
    assert not tickets.update_status('1', 'archived')['ok']
