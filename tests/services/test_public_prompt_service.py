import pytest

from app.services import public_prompt_service


class TestPublicPromptService:

    def test_zh_selects_chinese_document(self, app, public_dir):
        assert public_prompt_service.resolve_document_path('zh') == public_dir / 'prompts-cn.md'

    def test_other_languages_select_english_document(self, app, public_dir):
        assert public_prompt_service.resolve_document_path('en') == public_dir / 'prompts-en.md'
        assert public_prompt_service.resolve_document_path('de') == public_dir / 'prompts-en.md'

    def test_load_public_prompts(self, app, public_dir):
        result = public_prompt_service.load_public_prompts('zh')

        assert result.total == 3
        assert [e.role for e in result.entries] == ['Editor', 'Summarizer', 'Reviewer']

    def test_missing_document_raises(self, app, public_dir):
        (public_dir / 'prompts-en.md').unlink()

        with pytest.raises(FileNotFoundError):
            public_prompt_service.load_public_prompts('en')

    def test_filter_by_category(self, app, public_dir):
        result = public_prompt_service.load_public_prompts('zh')

        filtered = public_prompt_service.filter_by_category(result, 'Coding')
        assert [e.role for e in filtered.entries] == ['Reviewer']
        assert public_prompt_service.filter_by_category(result, None) is result

    def test_list_categories(self, app, public_dir):
        assert public_prompt_service.list_categories('zh') == [
            {'name': 'Writing', 'count': 2},
            {'name': 'Coding', 'count': 1},
        ]

    def test_bundled_documents_parse(self, app):
        # Uses the real PUBLIC_PROMPTS_DIR shipped with the repository.
        for language in ('zh', 'en'):
            result = public_prompt_service.load_public_prompts(language)
            assert result.total == 5
            assert result.warnings == []
