import uuid
from datetime import datetime, timezone
from app.extensions import db
from app.types.status_types import ContributionStatus


def _iso(value):
    return value.isoformat() if value else None


class Contribution(db.Model):
    """A prompt submitted by a visitor, waiting for review."""

    __tablename__ = 'prompt_contributions'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = db.Column(db.Text, nullable=False)
    role_category = db.Column(db.Text, nullable=False)
    content = db.Column(db.Text, nullable=False)
    contributor_email = db.Column(db.String(255), nullable=True)
    contributor_name = db.Column(db.String(255), nullable=True)
    status = db.Column(
        db.String(32), nullable=False, default=ContributionStatus.PENDING.value, index=True
    )
    admin_notes = db.Column(db.Text, nullable=True)
    reviewed_at = db.Column(db.DateTime, nullable=True)
    reviewed_by = db.Column(db.String(255), nullable=True)
    published_prompt_id = db.Column(db.String(36), nullable=True)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "role_category": self.role_category,
            "content": self.content,
            "contributor_email": self.contributor_email,
            "contributor_name": self.contributor_name,
            "status": self.status,
            "admin_notes": self.admin_notes,
            "reviewed_at": _iso(self.reviewed_at),
            "reviewed_by": self.reviewed_by,
            "published_prompt_id": self.published_prompt_id,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def __repr__(self):
        return f'<Contribution {self.title} ({self.status})>'
