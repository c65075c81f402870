#!/usr/bin/env python3
"""
Tests for the Flask dashboard and its JSON API.
"""
import pytest

from smarttank.web import create_app
from test_dashboard import make_controller


@pytest.fixture
def controller():
    return make_controller()


@pytest.fixture
def client(controller):
    app = create_app(controller)
    app.config['TESTING'] = True
    return app.test_client()


def test_index_shows_placeholder(client):
    response = client.get('/')
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert 'Fetching...' in body
    assert 'id="motorToggle"' in body


def test_state(client, controller):
    controller.refresh_level()
    data = client.get('/api/state').get_json()
    assert data['level_text'] == '50%'
    assert data['mode_text'] == 'AUTO'
    assert data['log'] == []


def test_mode_and_manual_toggle(client, controller):
    data = client.post('/api/motor/toggle').get_json()
    assert data['toggled'] is False

    client.post('/api/mode', json={'auto': False})
    data = client.post('/api/motor/toggle').get_json()
    assert data['toggled'] is True
    assert data['motor_badge'] == 'ON'
    assert controller.gateway.writes == [True]


def test_mode_requires_flag(client):
    response = client.post('/api/mode', json={})
    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_threshold(client):
    data = client.post('/api/threshold/min', json={'value': '-5'}).get_json()
    assert data['min_level'] == 0
    assert data['min_output'] == '0%'


def test_threshold_rejects_garbage(client):
    assert client.post('/api/threshold/min', json={'value': 'lots'}).status_code == 400
    assert client.post('/api/threshold/middle', json={'value': 10}).status_code == 400


def test_theme_toggle_and_set(client):
    assert client.post('/api/theme').get_json()['theme'] == 'light'
    assert client.post('/api/theme', json={'theme': 'dark'}).get_json()['theme'] == 'dark'
    assert client.post('/api/theme', json={'theme': 'blue'}).status_code == 400


def test_reset_and_clear_log(client):
    data = client.post('/api/reset').get_json()
    assert data['log'][0]['message'] == 'Settings reset'
    data = client.post('/api/log/clear').get_json()
    assert data['log'] == []


def test_visibility(client, controller):
    controller.tick_interval = 60
    data = client.post('/api/visibility', json={'visible': True}).get_json()
    assert data['ticking'] is True
    data = client.post('/api/visibility', json={'visible': 'false'}).get_json()
    assert data['ticking'] is False
