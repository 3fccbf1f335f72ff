from padel_tracker import db


class HistoryBlob(db.Model):
    """One serialized match history per key (key-value blob store)."""
    __tablename__ = 'history_blob'
    key = db.Column(db.String(64), primary_key=True)
    payload = db.Column(db.Text, nullable=True)  # JSON-encoded list of match records
    updated_at = db.Column(db.Float, nullable=True)
