def _create(client, **overrides):
    payload = {'title': 'Greeter', 'content': 'Say hello to {{name}}', 'tags': 'Fun'}
    payload.update(overrides)
    resp = client.post('/api/v1/prompts', json=payload)
    assert resp.status_code == 201
    return resp.get_json()


def test_get_prompts_empty(client):
    resp = client.get('/api/v1/prompts')
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_create_get_update_delete_prompt(client):
    created = _create(client)
    pid = created['id']
    assert created['version'] == '1.0.0'
    assert created['is_public'] is True

    resp = client.get(f'/api/v1/prompts/{pid}')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['title'] == 'Greeter'
    assert body['versions'] == [{'id': pid, 'version': '1.0.0', 'created_at': created['created_at']}]

    resp = client.put(f'/api/v1/prompts/{pid}', json={'description': 'friendly'})
    assert resp.status_code == 200
    assert resp.get_json()['description'] == 'friendly'

    resp = client.delete(f'/api/v1/prompts/{pid}')
    assert resp.status_code == 200

    assert client.get(f'/api/v1/prompts/{pid}').status_code == 404


def test_create_prompt_validation(client):
    resp = client.post('/api/v1/prompts', json={'title': 'No content'})
    assert resp.status_code == 400
    assert 'content' in resp.get_json()['error']

    resp = client.post('/api/v1/prompts', data='not json', content_type='text/plain')
    assert resp.status_code == 400


def test_not_found_responses(client):
    assert client.get('/api/v1/prompts/missing').status_code == 404
    assert client.put('/api/v1/prompts/missing', json={'content': 'x'}).status_code == 404
    assert client.delete('/api/v1/prompts/missing').status_code == 404
    assert client.post('/api/v1/prompts/missing/share').status_code == 404


def test_list_filters_and_pagination(client):
    _create(client, title='A', tags='Writing')
    _create(client, title='B', tags='Coding')

    resp = client.get('/api/v1/prompts?tag=writ')
    assert [p['title'] for p in resp.get_json()] == ['A']

    resp = client.get('/api/v1/prompts?title=B')
    assert [p['title'] for p in resp.get_json()] == ['B']

    resp = client.get('/api/v1/prompts?page=1&pageSize=1')
    body = resp.get_json()
    assert body['meta']['total'] == 2
    assert len(body['data']) == 1


def test_version_flow(client):
    created = _create(client)
    pid = created['id']

    resp = client.post(f'/api/v1/prompts/{pid}/versions', json={'version': '1.1.0', 'content': 'Hi {{name}}'})
    assert resp.status_code == 201
    v2 = resp.get_json()
    assert v2['group_id'] == created['group_id']

    resp = client.post(f'/api/v1/prompts/{pid}/versions', json={'content': 'no label'})
    assert resp.status_code == 400

    detail = client.get(f'/api/v1/prompts/{pid}').get_json()
    assert {v['version'] for v in detail['versions']} == {'1.0.0', '1.1.0'}

    labels = client.get('/api/v1/prompts/versions?title=Greeter').get_json()
    assert labels['title'] == 'Greeter'
    assert set(labels['versions']) == {'1.0.0', '1.1.0'}


def test_version_labels_requires_title(client):
    assert client.get('/api/v1/prompts/versions').status_code == 400


def test_share_and_public_read(client):
    created = _create(client, is_public=False)
    pid = created['id']

    assert client.get(f'/api/v1/share/{pid}').status_code == 404

    resp = client.post(f'/api/v1/prompts/{pid}/share')
    assert resp.status_code == 200

    resp = client.get(f'/api/v1/share/{pid}')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['id'] == pid
    assert [v['id'] for v in body['versions']] == [pid]


def test_share_hides_private_versions(client):
    created = _create(client)
    pid = created['id']
    client.post(f'/api/v1/prompts/{pid}/versions', json={'version': '9.9.9', 'is_public': False})

    body = client.get(f'/api/v1/share/{pid}').get_json()
    assert [v['version'] for v in body['versions']] == ['1.0.0']


def test_copy_prompt(client):
    created = _create(client, version='2.0.0')

    resp = client.post('/api/v1/prompts/copy', json={'sourceId': created['id'], 'user_id': 'u9'})
    assert resp.status_code == 200
    copy = resp.get_json()['prompt']
    assert copy['version'] == '1.0.0'
    assert copy['is_public'] is False
    assert copy['user_id'] == 'u9'

    assert client.post('/api/v1/prompts/copy', json={}).status_code == 400
    assert client.post('/api/v1/prompts/copy', json={'sourceId': 'missing'}).status_code == 404


def test_render_prompt(client):
    created = _create(client, content='Dear {{name}}, welcome to {{place}}.')

    resp = client.post(f'/api/v1/prompts/{created["id"]}/render', json={'variables': {'name': 'Ada'}})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['content'] == 'Dear Ada, welcome to {{place}}.'
    assert body['missing'] == ['place']

    resp = client.post(f'/api/v1/prompts/{created["id"]}/render', json={'variables': ['bad']})
    assert resp.status_code == 400


def test_version_records_include_private_rows(client):
    created = _create(client)
    client.post(f'/api/v1/prompts/{created["id"]}/versions', json={'version': '9.9.9', 'is_public': False})

    body = client.get('/api/v1/prompts/versions/records?title=Greeter').get_json()
    assert sorted(v['version'] for v in body['versions']) == ['1.0.0', '9.9.9']

    labels = client.get('/api/v1/prompts/versions?title=Greeter').get_json()
    assert labels['versions'] == ['1.0.0']

    assert client.get('/api/v1/prompts/versions/records').status_code == 400
