from pathlib import Path
import structlog
from flask import current_app
from app.services.markdown_parser import ParseResult, markers_for, parse_prompts

log = structlog.get_logger()

DOCUMENTS = {"zh": "prompts-cn.md"}
FALLBACK_DOCUMENT = "prompts-en.md"


def resolve_document_path(language: str) -> Path:
    """Return the collection file for `language` ('zh' or anything else)."""
    filename = DOCUMENTS.get(language, FALLBACK_DOCUMENT)
    return Path(current_app.config["PUBLIC_PROMPTS_DIR"]) / filename


def load_public_prompts(language: str) -> ParseResult:
    """Read and parse the public collection for `language`.

    Raises FileNotFoundError when the document does not exist; other I/O
    errors propagate unchanged.
    """
    path = resolve_document_path(language)
    if not path.is_file():
        log.warning("public_prompts.missing", language=language, path=str(path))
        raise FileNotFoundError(f"Public prompt collection not found: {path.name}")

    text = path.read_text(encoding="utf-8")
    result = parse_prompts(text, markers_for(language))
    log.info(
        "public_prompts.loaded",
        language=language,
        total=result.total,
        warnings=len(result.warnings),
    )
    return result


def filter_by_category(result: ParseResult, category: str | None) -> ParseResult:
    if not category:
        return result
    entries = [e for e in result.entries if e.category == category]
    return ParseResult(entries=entries, warnings=result.warnings)


def list_categories(language: str) -> list[dict]:
    """Distinct categories in document order with their entry counts."""
    counts: dict[str, int] = {}
    for entry in load_public_prompts(language).entries:
        counts[entry.category] = counts.get(entry.category, 0) + 1
    return [{"name": name, "count": count} for name, count in counts.items()]
