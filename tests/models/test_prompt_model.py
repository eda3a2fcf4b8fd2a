import pytest
from sqlalchemy.exc import IntegrityError

from app import db
from app.models import Prompt, Tag, Setting


def test_prompt_defaults(app):
    prompt = Prompt(title='Greeter', content='Hello')
    db.session.add(prompt)
    db.session.commit()

    assert len(prompt.id) == 36
    assert prompt.is_public is False
    assert prompt.group_id is None
    assert prompt.created_at is not None


def test_prompt_serialization(app):
    prompt = Prompt(title='Greeter', content='Hello', tags='Fun, Daily,', version='1.0.0')
    db.session.add(prompt)
    db.session.commit()

    assert prompt.tag_list == ['Fun', 'Daily']
    data = prompt.to_dict()
    assert data['title'] == 'Greeter'
    assert data['is_public'] is False
    assert isinstance(data['created_at'], str)
    assert prompt.to_version_dict() == {
        'id': prompt.id,
        'version': '1.0.0',
        'created_at': data['created_at'],
    }


def test_tag_unique_per_owner(app):
    db.session.add(Tag(name='Fun', user_id='u1'))
    db.session.add(Tag(name='Fun', user_id='u2'))
    db.session.commit()

    db.session.add(Tag(name='Fun', user_id='u1'))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_tag_is_public():
    assert Tag(name='Shared').is_public is True
    assert Tag(name='Mine', user_id='u1').is_public is False


@pytest.mark.parametrize('raw, parsed', [
    ('zh', 'zh'),
    ('50', 50),
    ('["a", "b"]', ['a', 'b']),
    ('1.0.0', '1.0.0'),
])
def test_setting_parsed_value(raw, parsed):
    assert Setting(key='K', value=raw).parsed_value == parsed
