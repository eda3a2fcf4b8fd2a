from pathlib import Path
from typing import Optional

import structlog

from app.extensions import db
from app.models.prompt import Prompt
from app.services import prompt_service
from app.services.markdown_parser import ParseWarning, markers_for, parse_prompts
from app.services.public_prompt_service import resolve_document_path
from app.settings import settings

log = structlog.get_logger()


def run(app, language: Optional[str] = None, prompts_file=None, create_tables_if_missing: bool = False) -> dict:
    """Import the public collection into the prompts table as public prompts.

    Each entry becomes a prompt with `title = role`, `content = prompt`
    and `tags = category`. Re-running is safe: entries already stored with
    the same content are skipped and changed content is updated in place.
    Public prompts owned by a user are never touched, and a role repeated
    within one category is reported as `duplicate_entry` and skipped.

    Returns a summary dict: {"created", "updated", "skipped", "warnings"}.
    """
    language = language or settings.LANGUAGE

    with app.app_context():
        if create_tables_if_missing:
            db.create_all()

        path = Path(prompts_file) if prompts_file else resolve_document_path(language)
        if not path.is_file():
            raise FileNotFoundError(f'Prompt collection not found: {path}')

        result = parse_prompts(path.read_text(encoding='utf-8'), markers_for(language))

        warnings = [w.to_dict() for w in result.warnings]
        created = 0
        updated = 0
        skipped = 0
        seen = set()
        for entry in result.entries:
            # Rows are keyed by (category, role); a repeat would overwrite the first entry.
            key = (entry.category, entry.role)
            if key in seen:
                warnings.append(ParseWarning(
                    "duplicate_entry", f"Duplicate role skipped: {entry.role}", entry.category
                ).to_dict())
                continue
            seen.add(key)

            # Only ownerless rows belong to the seeder.
            existing = Prompt.query.filter(
                Prompt.title == entry.role,
                Prompt.tags == entry.category,
                Prompt.is_public.is_(True),
                Prompt.user_id.is_(None),
            ).first()
            if existing is None:
                prompt_service.create_prompt({
                    "title": entry.role,
                    "content": entry.prompt,
                    "tags": entry.category,
                    "is_public": True,
                })
                created += 1
            elif existing.content != entry.prompt:
                existing.content = entry.prompt
                db.session.commit()
                updated += 1
            else:
                skipped += 1

    log.info("seed.prompts.done", path=str(path), created=created, updated=updated, skipped=skipped)
    return {
        "created": created,
        "updated": updated,
        "skipped": skipped,
        "warnings": warnings,
    }
