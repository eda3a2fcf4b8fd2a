import structlog
from app.extensions import db, cache
from app.models.tag import Tag

log = structlog.get_logger()

CACHE_KEY = 'all_tags'


def get_all_tags() -> list[dict]:
    """All tags sorted by name, cached until the next write."""
    cached = cache.get(CACHE_KEY)
    if cached is not None:
        return cached
    tags = [t.to_dict() for t in Tag.query.order_by(Tag.name).all()]
    cache.set(CACHE_KEY, tags)
    return tags


def get_tag_by_id(tag_id: str) -> Tag | None:
    if not tag_id:
        raise ValueError("Missing id")
    return db.session.get(Tag, tag_id)


def _check_unique(name: str, user_id, exclude_id=None):
    query = Tag.query.filter(Tag.name == name)
    query = query.filter(Tag.user_id.is_(None)) if user_id is None else query.filter(Tag.user_id == user_id)
    if exclude_id:
        query = query.filter(Tag.id != exclude_id)
    if query.first():
        raise ValueError(f"Tag '{name}' already exists")


def create_tag(name: str, user_id: str | None = None) -> Tag:
    name = (name or "").strip()
    if not name:
        raise ValueError("Missing name")
    _check_unique(name, user_id)

    tag = Tag(name=name, user_id=user_id)
    db.session.add(tag)
    db.session.commit()
    cache.delete(CACHE_KEY)
    log.info("tag.created", tag_id=tag.id, name=name)
    return tag


def update_tag(tag_id: str, name: str) -> Tag | None:
    name = (name or "").strip()
    if not tag_id or not name:
        raise ValueError("Missing id or name")
    tag = db.session.get(Tag, tag_id)
    if tag is None:
        return None
    _check_unique(name, tag.user_id, exclude_id=tag_id)

    tag.name = name
    db.session.commit()
    cache.delete(CACHE_KEY)
    log.info("tag.updated", tag_id=tag_id, name=name)
    return tag


def delete_tag(tag_id: str) -> bool:
    """Delete a user tag. Public tags (no owner) cannot be deleted."""
    tag = get_tag_by_id(tag_id)
    if tag is None:
        return False
    if tag.is_public:
        raise PermissionError("Public tags cannot be deleted")

    db.session.delete(tag)
    db.session.commit()
    cache.delete(CACHE_KEY)
    log.info("tag.deleted", tag_id=tag_id)
    return True
