def test_public_prompts_default_language(client, public_dir):
    resp = client.get('/api/v1/public-prompts')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['language'] == 'zh'
    assert body['total'] == 3
    assert body['prompts'][0] == {'category': 'Writing', 'role': 'Editor', 'prompt': 'Fix grammar.'}
    assert body['warnings'] == []


def test_public_prompts_english(client, public_dir):
    body = client.get('/api/v1/public-prompts?lang=en').get_json()
    assert body['language'] == 'en'
    assert body['prompts'] == [{'category': 'Travel', 'role': 'Planner', 'prompt': 'Plan a trip.'}]


def test_public_prompts_category_filter(client, public_dir):
    body = client.get('/api/v1/public-prompts?lang=zh&category=Coding').get_json()
    assert body['total'] == 1
    assert body['prompts'][0]['role'] == 'Reviewer'


def test_public_prompts_missing_file(client, public_dir):
    (public_dir / 'prompts-en.md').unlink()

    resp = client.get('/api/v1/public-prompts?lang=en')
    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'File not found'}


def test_public_prompts_malformed_document_reports_warning(client, public_dir):
    (public_dir / 'prompts-en.md').write_text('no headings at all', encoding='utf-8')

    body = client.get('/api/v1/public-prompts?lang=en').get_json()
    assert body['total'] == 0
    assert [w['code'] for w in body['warnings']] == ['no_sections']


def test_public_categories(client, public_dir):
    body = client.get('/api/v1/public-prompts/categories?lang=zh').get_json()
    assert body['categories'] == [{'name': 'Writing', 'count': 2}, {'name': 'Coding', 'count': 1}]
