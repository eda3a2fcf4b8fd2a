import uuid
from datetime import datetime, timezone
from app.extensions import db


class Tag(db.Model):
    __tablename__ = 'tags'
    __table_args__ = (db.UniqueConstraint('name', 'user_id', name='uq_tags_name_user'),)

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    # NULL for public tags shared by every user
    user_id = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    @property
    def is_public(self) -> bool:
        return self.user_id is None

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Tag {self.name}>'
