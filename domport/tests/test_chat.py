import pytest
from werkzeug.security import check_password_hash

from domport.models import User
from domport.repositories import ChatRepository, StaffRepository
from domport.services.chat_service import ChatService


@pytest.fixture
def chat(tmp_path):
    return ChatService(ChatRepository(str(tmp_path)), StaffRepository(str(tmp_path)))


@pytest.fixture
def customer():
    return User(id='7', username='nana', name='Nana')


def test_online_staff_sends_welcome(chat, customer):
    result = chat.open_room(customer)
    room = result['room']

    assert room['status'] == 'active'
    assert room['staffId'] == '1'
    assert len(room['messages']) == 1
    assert room['messages'][0]['isStaff']
    assert room['messages'][0]['message'] == ChatService.WELCOME_MESSAGE


def test_room_waits_when_nobody_online(chat, customer):
    chat.set_staff_status('1', 'offline')
    room = chat.open_room(customer)['room']

    assert room['status'] == 'waiting'
    assert room['messages'] == []


def test_open_room_resumes_existing(chat, customer):
    first = chat.open_room(customer)['room']
    again = chat.open_room(customer)

    assert again['resumed']
    assert again['room']['id'] == first['id']


def test_messages_validated(chat, customer):
    room_id = chat.open_room(customer)['room']['id']

    assert not chat.send_message(room_id, customer, '   ')['ok']
    assert not chat.send_message(room_id, User(id='8'), 'hi')['ok']

    sent = chat.send_message(room_id, customer, 'Is Miku back in stock?')
    assert sent['ok']
    assert len(chat.get_room(room_id).messages) == 2


def test_closed_room_rejects_messages(chat, customer):
    room_id = chat.open_room(customer)['room']['id']
    chat.close_room(room_id)

    assert chat.send_message(room_id, customer, 'hello?')['error'] == 'Chat has ended'
    assert not chat.staff_reply(room_id, '1', 'hi')['ok']
    assert not chat.open_room(customer)['resumed']


def test_staff_reply_takes_waiting_room(chat, customer):
    chat.set_staff_status('1', 'offline')
    room_id = chat.open_room(customer)['room']['id']

    result = chat.staff_reply(room_id, '1', 'Hi Nana, checking now')
    assert result['room']['status'] == 'active'
    assert result['room']['staffName'] == 'DomPort Support'
    assert [r.id for r in chat.list_rooms('active')] == [room_id]


def test_add_staff(chat, tmp_path):
    assert not chat.add_staff('', 'pw', 'Kai')['ok']
    assert not chat.add_staff('kai', '', 'Kai')['ok']
    assert not chat.add_staff('kai', 'pw', '')['ok']

    result = chat.add_staff('kai', 'pw', 'Kai')
    assert result['ok']
    assert result['staff']['id'] == '2'
    assert 'password_hash' not in result['staff']

    assert not chat.add_staff('kai', 'other', 'Kai 2')['ok']

    stored = StaffRepository(str(tmp_path)).get_by_id('2')
    assert check_password_hash(stored['password_hash'], 'pw')
    assert all('password_hash' not in s for s in chat.list_staff())


def test_staff_status_validated(chat):
    assert chat.set_staff_status('1', 'busy')['ok']
    assert not chat.set_staff_status('1', 'sleeping')['ok']
    assert not chat.set_staff_status('99', 'online')['ok']
