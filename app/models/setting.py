import json
from app.extensions import db


class Setting(db.Model):
    """Persisted override for one `AppSettings` attribute.

    Values are stored as text; JSON-encodable values (lists, dicts, numbers,
    booleans) round-trip through `parsed_value`.
    """

    __tablename__ = 'settings'
    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(255), unique=True, nullable=False, index=True)
    value = db.Column(db.Text, nullable=False)

    @property
    def parsed_value(self):
        try:
            return json.loads(self.value)
        except (json.JSONDecodeError, TypeError):
            return self.value

    def to_dict(self):
        return {"id": self.id, "key": self.key, "value": self.parsed_value}

    def __repr__(self):
        return f'<Setting {self.key}>'
