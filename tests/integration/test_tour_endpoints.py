def _start(client, place_id='place-a', autoplay=False):
    r = client.post('/tours', json={'place_id': place_id, 'autoplay': autoplay})
    assert r.status_code == 201
    return r.json()['data']


def test_manual_tour_visits_nearest_first(client):
    tour = _start(client)
    assert tour['state'] == 'flying'
    assert tour['current']['id'] == 'place-a'
    sid = tour['session_id']

    first = client.post(f'/tours/{sid}/advance').json()['data']
    assert first['current']['id'] == 'place-b'
    second = client.post(f'/tours/{sid}/advance').json()['data']
    assert second['current']['id'] == 'place-c'
    done = client.post(f'/tours/{sid}/advance').json()['data']
    assert done['state'] == 'complete'
    assert done['history'] == ['place-a', 'place-b', 'place-c']
    assert done['visited'] == ['place-a', 'place-b', 'place-c']


def test_pause_resume_and_reset(client):
    sid = _start(client, autoplay=True)['session_id']

    paused = client.post(f'/tours/{sid}/pause').json()['data']
    assert paused['state'] == 'paused'
    assert paused['autoplay'] is True
    assert client.post(f'/tours/{sid}/advance').json()['data']['current']['id'] == 'place-a'

    assert client.post(f'/tours/{sid}/resume').json()['data']['state'] == 'flying'

    reset = client.post(f'/tours/{sid}/reset').json()['data']
    assert reset['state'] == 'idle'
    assert reset['current'] is None
    assert reset['visited'] == []


def test_invalid_transition_is_409(client):
    sid = _start(client)['session_id']
    r = client.post(f'/tours/{sid}/resume')
    assert r.status_code == 409
    assert r.json()['error_code'] == 'INVALID_TOUR_TRANSITION'


def test_end_tour(client):
    sid = _start(client)['session_id']
    r = client.delete(f'/tours/{sid}')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok', 'data': None, 'error': None}
    assert client.get(f'/tours/{sid}').status_code == 404


def test_start_from_unknown_place(client):
    r = client.post('/tours', json={'place_id': 'missing'})
    assert r.status_code == 404
    assert r.json()['error_code'] == 'PLACE_NOT_FOUND'


def test_active_tours_in_health(client):
    _start(client)
    data = client.get('/api/v1/health').json()['data']
    assert data['health'] == 'healthy'
    assert data['active_tours'] == 1
    assert data['details']['cache']['status'] == 'disabled'


def test_restart_after_reset(client):
    sid = _start(client)['session_id']
    client.post(f'/tours/{sid}/advance')
    assert client.post(f'/tours/{sid}/reset').json()['data']['state'] == 'idle'

    r = client.post(f'/tours/{sid}/start', json={'place_id': 'place-c'})
    assert r.status_code == 200
    tour = r.json()['data']
    assert tour['session_id'] == sid
    assert tour['state'] == 'flying'
    assert tour['history'] == ['place-c']
    assert client.post(f'/tours/{sid}/advance').json()['data']['current']['id'] == 'place-b'


def test_start_existing_tour_that_is_flying(client):
    sid = _start(client)['session_id']
    r = client.post(f'/tours/{sid}/start', json={'place_id': 'place-b'})
    assert r.status_code == 409
    assert r.json()['error_code'] == 'INVALID_TOUR_TRANSITION'


def test_start_unknown_tour(client):
    r = client.post('/tours/missing/start', json={'place_id': 'place-a'})
    assert r.status_code == 404
    assert r.json()['error_code'] == 'TOUR_SESSION_NOT_FOUND'
