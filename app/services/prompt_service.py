import uuid
from typing import Any, Mapping
import structlog
from app.extensions import db
from app.models.prompt import Prompt
from app.api.pagination import paginate_query
from app.settings import settings

log = structlog.get_logger()

EDITABLE_FIELDS = ("title", "content", "description", "tags", "version", "is_public", "cover_img", "user_id")
SORTABLE_FIELDS = ("created_at", "updated_at", "title", "version")


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _normalize_tags(tags):
    """Accept a list of names or a comma separated string; store a string."""
    if tags is None:
        return None
    if isinstance(tags, (list, tuple)):
        return ",".join(str(t).strip() for t in tags if str(t).strip())
    return str(tags)


def _apply_fields(prompt: Prompt, data: Mapping[str, Any]) -> None:
    for name in EDITABLE_FIELDS:
        if name not in data:
            continue
        value = data[name]
        if name == "is_public":
            value = _to_bool(value)
        elif name == "tags":
            value = _normalize_tags(value)
        setattr(prompt, name, value)
    # Older clients send the cover image as `image_url`.
    if "image_url" in data and "cover_img" not in data:
        prompt.cover_img = data["image_url"]


def _validate_text(data: Mapping[str, Any], *names: str, partial: bool = False) -> None:
    for name in names:
        if partial and name not in data:
            continue
        value = data.get(name)
        if value is None or not str(value).strip():
            raise ValueError(f"'{name}' is required")


def get_prompt_by_id(prompt_id: str) -> Prompt | None:
    if not prompt_id:
        raise ValueError("Missing id")
    return db.session.get(Prompt, prompt_id)


def _filtered_query(tag=None, title=None, user_id=None, public_only=False):
    query = Prompt.query
    if tag:
        query = query.filter(Prompt.tags.ilike(f"%{tag}%"))
    if title:
        query = query.filter(Prompt.title == title)
    if user_id:
        query = query.filter(Prompt.user_id == user_id)
    if public_only:
        query = query.filter(Prompt.is_public.is_(True))
    return query


def list_prompts(tag=None, title=None, user_id=None, public_only=False) -> list[Prompt]:
    """Return prompts matching the filters, newest first."""
    query = _filtered_query(tag, title, user_id, public_only)
    return query.order_by(Prompt.created_at.desc()).all()


def list_prompts_page(request_args: Mapping[str, str]) -> dict:
    query = _filtered_query(
        tag=request_args.get("tag"),
        title=request_args.get("title"),
        user_id=request_args.get("user_id"),
        public_only=_to_bool(request_args.get("public_only", False)),
    )
    return paginate_query(
        query,
        Prompt,
        request_args,
        serialize=lambda p: p.to_dict(),
        default_sort="created_at",
        allowed_sort_fields=SORTABLE_FIELDS,
    )


def create_prompt(data: Mapping[str, Any], commit: bool = True) -> Prompt:
    """Insert a new prompt.

    Without `parent_id` the prompt starts its own version group; with it the
    new row joins the parent's group. With `commit=False` the row is only
    flushed and the caller owns the transaction.
    """
    _validate_text(data, "title", "content")

    parent = None
    parent_id = data.get("parent_id")
    if parent_id:
        parent = db.session.get(Prompt, parent_id)
        if parent is None:
            raise ValueError(f"Parent prompt '{parent_id}' not found")

    prompt = Prompt(id=str(uuid.uuid4()))
    prompt.is_public = True
    _apply_fields(prompt, data)
    prompt.version = prompt.version or settings.DEFAULT_PROMPT_VERSION
    prompt.group_id = _ensure_group(parent) if parent else prompt.id

    db.session.add(prompt)
    if commit:
        db.session.commit()
    else:
        db.session.flush()
    log.info("prompt.created", prompt_id=prompt.id, group_id=prompt.group_id, version=prompt.version)
    return prompt


def update_prompt(prompt_id: str, data: Mapping[str, Any]) -> Prompt | None:
    prompt = get_prompt_by_id(prompt_id)
    if prompt is None:
        return None
    _validate_text(data, "title", "content", partial=True)

    _apply_fields(prompt, data)
    db.session.commit()
    log.info("prompt.updated", prompt_id=prompt.id, fields=sorted(k for k in data if k in EDITABLE_FIELDS))
    return prompt


def delete_prompt(prompt_id: str) -> bool:
    prompt = get_prompt_by_id(prompt_id)
    if prompt is None:
        return False
    db.session.delete(prompt)
    db.session.commit()
    log.info("prompt.deleted", prompt_id=prompt_id)
    return True


def share_prompt(prompt_id: str) -> Prompt | None:
    """Mark a prompt public so it can be read through the share endpoint."""
    prompt = get_prompt_by_id(prompt_id)
    if prompt is None:
        return None
    prompt.is_public = True
    db.session.commit()
    log.info("prompt.shared", prompt_id=prompt_id)
    return prompt


def copy_prompt(source_id: str, user_id: str | None = None) -> Prompt | None:
    """Copy a prompt into a new private group with the version reset."""
    source = get_prompt_by_id(source_id)
    if source is None:
        return None

    copy = Prompt(id=str(uuid.uuid4()))
    copy.title = source.title
    copy.content = source.content
    copy.description = source.description
    copy.tags = source.tags
    copy.cover_img = source.cover_img
    copy.version = settings.DEFAULT_PROMPT_VERSION
    copy.is_public = False
    copy.user_id = user_id
    copy.group_id = copy.id

    db.session.add(copy)
    db.session.commit()
    log.info("prompt.copied", source_id=source_id, prompt_id=copy.id)
    return copy


def _ensure_group(prompt: Prompt) -> str:
    """Return the prompt's group id, assigning one to a legacy title group.

    Legacy rows (group_id NULL) sharing the prompt's title are moved into
    the new group so their history survives later renames.
    """
    if prompt.group_id:
        return prompt.group_id
    group_id = prompt.id
    legacy = Prompt.query.filter(Prompt.group_id.is_(None), Prompt.title == prompt.title).all()
    for row in legacy:
        row.group_id = group_id
    log.info("prompt.group_assigned", group_id=group_id, rows=len(legacy))
    return group_id


def create_version(prompt_id: str, data: Mapping[str, Any]) -> Prompt | None:
    """Snapshot a new version of `prompt_id` in the same group.

    Fields absent from `data` are copied from the source row.
    """
    source = get_prompt_by_id(prompt_id)
    if source is None:
        return None
    _validate_text(data, "version")
    _validate_text(data, "title", "content", partial=True)

    version = Prompt(id=str(uuid.uuid4()))
    for name in EDITABLE_FIELDS:
        setattr(version, name, getattr(source, name))
    _apply_fields(version, data)
    version.group_id = _ensure_group(source)

    db.session.add(version)
    db.session.commit()
    log.info("prompt.version_created", source_id=prompt_id, prompt_id=version.id, version=version.version)
    return version


def get_version_labels(title: str) -> list[str]:
    """Distinct version labels of public prompts titled `title`, newest first."""
    if not title:
        raise ValueError("Missing title")
    rows = (
        db.session.query(Prompt.version)
        .filter(Prompt.title == title, Prompt.is_public.is_(True))
        .order_by(Prompt.created_at.desc())
        .all()
    )
    labels = []
    seen = set()
    for (version,) in rows:
        if version is None or version in seen:
            continue
        seen.add(version)
        labels.append(version)
    return labels


def get_version_records(title: str) -> list[Prompt]:
    """Every stored row titled `title`, public or not, newest first."""
    if not title:
        raise ValueError("Missing title")
    return Prompt.query.filter(Prompt.title == title).order_by(Prompt.created_at.desc()).all()


def get_prompt_versions(prompt: Prompt, public_only: bool = False) -> list[Prompt]:
    """Rows in the prompt's version group, newest first.

    Legacy rows without a group fall back to exact title equality.
    """
    query = Prompt.query
    if prompt.group_id:
        query = query.filter(Prompt.group_id == prompt.group_id)
    else:
        query = query.filter(Prompt.group_id.is_(None), Prompt.title == prompt.title)
    if public_only:
        query = query.filter(Prompt.is_public.is_(True))
    return query.order_by(Prompt.created_at.desc()).all()
