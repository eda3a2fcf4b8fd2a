from datetime import datetime, timedelta

import pytest
from app import create_app, db
from app.models.prompt import Prompt
from app.settings import settings


SAMPLE_DOCUMENT = """# Prompts

Intro text that is not part of any section.

### Writing
- **角色/类别**: Editor
**提示词**: Fix grammar.
- **角色/类别**: Summarizer
**提示词**: Summarize in 3 bullets.

### Coding
- **角色/类别**: Reviewer
**提示词**: Review this code.
"""


@pytest.fixture(scope='function')
def app():
    """
    Fixture that creates a test app instance with a new database.
    """
    app = create_app('testing')

    with app.app_context():
        db.create_all()

        yield app

        db.session.remove()
        db.drop_all()

    # The settings object is process-wide; undo anything a test saved.
    settings.__init__()


@pytest.fixture(scope='function')
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def public_dir(app, tmp_path):
    """Point PUBLIC_PROMPTS_DIR at a temp dir holding both collections."""
    (tmp_path / 'prompts-cn.md').write_text(SAMPLE_DOCUMENT, encoding='utf-8')
    (tmp_path / 'prompts-en.md').write_text(
        "### Travel\n- **角色/类别**: Planner\n**提示词**: Plan a trip.\n", encoding='utf-8'
    )
    app.config['PUBLIC_PROMPTS_DIR'] = str(tmp_path)
    return tmp_path


@pytest.fixture
def make_prompt(app):
    """Insert a prompt row directly, with deterministic created_at ordering."""
    base = datetime(2024, 1, 1, 12, 0, 0)
    counter = {'n': 0}

    def _make(title='X', version='1.0.0', is_public=True, **fields):
        counter['n'] += 1
        fields.setdefault('content', f'content {counter["n"]}')
        fields.setdefault('created_at', base + timedelta(minutes=counter['n']))
        prompt = Prompt(title=title, version=version, is_public=is_public, **fields)
        db.session.add(prompt)
        db.session.commit()
        return prompt

    return _make
