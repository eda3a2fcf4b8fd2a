import uuid
from datetime import datetime, timezone
from app.extensions import db


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


class Prompt(db.Model):
    """A single stored version of a prompt.

    Versions of the same logical prompt share a `group_id`. Rows created
    before groups existed have `group_id = NULL` and are grouped by title.
    """

    __tablename__ = 'prompts'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    title = db.Column(db.Text, nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)
    # Comma separated tag names
    tags = db.Column(db.Text, nullable=True)
    version = db.Column(db.String(64), nullable=True)
    is_public = db.Column(db.Boolean, nullable=False, default=False)
    user_id = db.Column(db.String(255), nullable=True, index=True)
    cover_img = db.Column(db.Text, nullable=True)
    group_id = db.Column(db.String(36), nullable=True, index=True)

    created_at = db.Column(
        db.DateTime,
        nullable=False,
        default=_utcnow,
        server_default=db.func.now(),
    )
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=db.func.now(),
    )

    @property
    def tag_list(self) -> list[str]:
        return [t.strip() for t in (self.tags or "").split(",") if t.strip()]

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "description": self.description,
            "tags": self.tags,
            "version": self.version,
            "is_public": bool(self.is_public),
            "user_id": self.user_id,
            "cover_img": self.cover_img,
            "group_id": self.group_id,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def to_version_dict(self):
        return {"id": self.id, "version": self.version, "created_at": _iso(self.created_at)}

    def __repr__(self):
        return f'<Prompt {self.title} v{self.version}>'
