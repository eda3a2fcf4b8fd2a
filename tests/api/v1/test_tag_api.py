def test_tag_lifecycle(client):
    resp = client.post('/api/v1/tags', json={'name': 'Mine', 'user_id': 'u1'})
    assert resp.status_code == 201
    tag_id = resp.get_json()['id']

    resp = client.get('/api/v1/tags')
    assert [t['name'] for t in resp.get_json()] == ['Mine']

    resp = client.patch(f'/api/v1/tags/{tag_id}', json={'name': 'Renamed'})
    assert resp.status_code == 200
    assert resp.get_json()['name'] == 'Renamed'

    resp = client.delete(f'/api/v1/tags/{tag_id}')
    assert resp.status_code == 200
    assert resp.get_json() == {'success': True}


def test_create_tag_requires_name(client):
    assert client.post('/api/v1/tags', json={}).status_code == 400


def test_duplicate_tag(client):
    client.post('/api/v1/tags', json={'name': 'Dup'})
    assert client.post('/api/v1/tags', json={'name': 'Dup'}).status_code == 400


def test_public_tag_delete_forbidden(client):
    tag_id = client.post('/api/v1/tags', json={'name': 'Shared'}).get_json()['id']

    assert client.delete(f'/api/v1/tags/{tag_id}').status_code == 403


def test_missing_tag(client):
    assert client.patch('/api/v1/tags/nope', json={'name': 'x'}).status_code == 404
    assert client.delete('/api/v1/tags/nope').status_code == 404
