"""Tests for the HTTP endpoints, run against a tmp export directory."""

import pytest
from fastapi.testclient import TestClient

from api import get_loader
from cache import CacheManager
from datasets import DatasetLoader
from main import app


@pytest.fixture
def client(loader):
    app.dependency_overrides[get_loader] = lambda: loader
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def empty_client(tmp_path):
    missing = DatasetLoader(str(tmp_path / 'missing'), cache=CacheManager(ttl=0))
    app.dependency_overrides[get_loader] = lambda: missing
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.json()['status'] == 'healthy'


def test_status_reports_datasets(client):
    body = client.get('/api/status').json()
    assert body['datasets'] == {'daily_areas.json': True, 'events.json': True, 'metadata.json': True}
    assert body['config']['smoothing_window'] == 7


def test_layers(client):
    body = client.get('/api/layers').json()
    assert body['layers'] == [
        {'layer_type': 'kursk_russian_advances', 'records': 90, 'known': True},
        {'layer_type': 'ukraine_control_map', 'records': 90, 'known': True},
    ]


def test_territory(client):
    response = client.get('/api/territory/ukraine_control_map', params={'start': '2024-02-01', 'end': '2024-02-29'})
    assert response.status_code == 200

    body = response.json()
    assert len(body['rows']) == 29
    assert body['rows'][0]['date'] == '2024-02-01'


def test_territory_invalid_date(client):
    response = client.get('/api/territory/ukraine_control_map', params={'start': 'last tuesday'})
    assert response.status_code == 422


def test_unknown_layer_is_empty_not_an_error(client):
    response = client.get('/api/territory/crimea')
    assert response.status_code == 200
    assert response.json()['rows'] == []


def test_monthly(client):
    body = client.get('/api/territory/ukraine_control_map/monthly', params={'interpolate': 'false'}).json()
    assert [r['change'] for r in body['rows']] == [0.0, 300.0]


def test_rate(client):
    body = client.get('/api/territory/kursk_russian_advances/rate', params={'window_days': 10}).json()
    assert body['window_days'] == 10
    assert len(body['rate']) == 80


def test_rate_rejects_zero_width_window(client):
    response = client.get('/api/territory/kursk_russian_advances/rate', params={'window_days': 1})
    assert response.status_code == 422


def test_kursk(client):
    body = client.get('/api/kursk').json()
    assert len(body['rows']) == 90


def test_events_default_to_critical(client):
    body = client.get('/api/events').json()
    assert [e['name'] for e in body['events']] == ['Avdiivka falls']


def test_events_filters(client):
    body = client.get('/api/events', params={'min_importance': 0}).json()
    assert [e['name'] for e in body['events']] == ['Avdiivka falls', 'Local push']

    body = client.get('/api/events', params={'min_importance': 0, 'names': 'Local push'}).json()
    assert [e['name'] for e in body['events']] == ['Local push']


def test_missing_dataset_is_404(empty_client):
    assert empty_client.get('/api/territory/ukraine_control_map').status_code == 404
    assert empty_client.get('/api/events').status_code == 404
    assert empty_client.get('/api/metadata').status_code == 404


def test_metadata(client):
    body = client.get('/api/metadata').json()
    assert body['start_date'] == '2024-01-01'
    assert body['end_date'] == '2024-03-30'
    assert body['total_events'] == 3
    assert body['layer_types'] == ['ukraine_control_map', 'kursk_russian_advances']


def test_compare_defaults_to_control_map_and_kursk(client):
    body = client.get('/api/compare').json()
    assert body['layers'] == ['ukraine_control_map', 'kursk_russian_advances']
    assert body['lag'] == 7
    assert len(body['rows']) == 90
    assert body['correlation']['levels'] > 0.9


def test_compare_rejects_zero_lag(client):
    assert client.get('/api/compare', params={'lag': 0}).status_code == 422


def test_handlers_run_in_threadpool():
    # Blocking file reads and processing must stay off the event loop
    for route in app.routes:
        if getattr(route, 'path', '').startswith(('/api', '/health')):
            assert not inspect.iscoroutinefunction(route.endpoint), route.path


def test_lifespan_logs_startup(caplog):
    with caplog.at_level('INFO', logger='main'):
        with TestClient(app) as lifespan_client:
            assert lifespan_client.get('/health').status_code == 200

    assert 'WarStats starting up' in caplog.text
    assert 'WarStats shutting down' in caplog.text
