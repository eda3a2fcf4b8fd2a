def _submit(client, **overrides):
    payload = {'title': 'Travel planner', 'role': 'Travel', 'content': 'Plan a trip to {{city}}.'}
    payload.update(overrides)
    return client.post('/api/v1/contributions', json=payload)


def test_submit_contribution(client):
    resp = _submit(client, contributorEmail='ada@example.com')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['status'] == 'pending'
    assert 'contributor_email' not in body


def test_submit_requires_role(client):
    resp = _submit(client, role='')
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Role/Category is required'


def test_list_and_review_with_publish(client):
    cid = _submit(client).get_json()['id']

    listing = client.get('/api/v1/contributions?status=pending&page=1&limit=10').get_json()
    assert listing['meta']['pageSize'] == 10
    assert [c['id'] for c in listing['data']] == [cid]

    resp = client.patch(
        f'/api/v1/contributions/{cid}',
        json={'status': 'approved', 'adminNotes': 'ok', 'publishToPrompts': True},
    )
    assert resp.status_code == 200
    prompt_id = resp.get_json()['publishedPromptId']
    assert prompt_id

    shared = client.get(f'/api/v1/share/{prompt_id}').get_json()
    assert shared['title'] == 'Travel planner'

    detail = client.get(f'/api/v1/contributions/{cid}').get_json()
    assert detail['status'] == 'approved'
    assert detail['admin_notes'] == 'ok'


def test_review_invalid_status(client):
    cid = _submit(client).get_json()['id']
    assert client.patch(f'/api/v1/contributions/{cid}', json={'status': 'maybe'}).status_code == 400


def test_contribution_not_found(client):
    assert client.get('/api/v1/contributions/nope').status_code == 404
    assert client.patch('/api/v1/contributions/nope', json={'status': 'approved'}).status_code == 404


def test_list_invalid_status(client):
    assert client.get('/api/v1/contributions?status=archived').status_code == 400


def test_stats(client):
    _submit(client)
    assert client.get('/api/v1/contributions/stats').get_json()['pending'] == 1


def test_delete_contribution(client):
    cid = _submit(client).get_json()['id']

    resp = client.delete(f'/api/v1/contributions/{cid}')
    assert resp.status_code == 200
    assert resp.get_json() == {'message': 'Contribution deleted successfully'}

    assert client.get(f'/api/v1/contributions/{cid}').status_code == 404
    assert client.delete(f'/api/v1/contributions/{cid}').status_code == 404
