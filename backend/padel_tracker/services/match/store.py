import json
import logging
import time
from typing import List, Optional, Sequence

from .lifecycle import MatchRecord


logger = logging.getLogger(__name__)


def encode_history(history: Sequence[MatchRecord]) -> str:
    return json.dumps([m.to_dict() for m in history])


def decode_history(payload: Optional[str]) -> List[MatchRecord]:
    """Decode a stored blob. Any malformed entry invalidates the whole blob."""
    if not payload:
        return []
    try:
        raw = json.loads(payload)
        if not isinstance(raw, list):
            raise ValueError('history blob is not a list')
        return [MatchRecord.from_dict(item) for item in raw]
    except Exception as exc:
        logger.warning(f"[history-decode-failed] {exc}")
        return []


class HistoryStore:
    """Load/save contract for the completed-match history.

    Implementations never raise: load() falls back to an empty history and
    save() reports failure through its return value.
    """

    def load(self) -> List[MatchRecord]:
        raise NotImplementedError

    def save(self, history: Sequence[MatchRecord]) -> bool:
        raise NotImplementedError


class InMemoryHistoryStore(HistoryStore):
    def __init__(self, payload: Optional[str] = None):
        self.payload = payload

    def load(self) -> List[MatchRecord]:
        return decode_history(self.payload)

    def save(self, history: Sequence[MatchRecord]) -> bool:
        try:
            self.payload = encode_history(history)
        except Exception as exc:
            logger.warning(f"[history-encode-failed] {exc}")
            return False
        return True


class SqlHistoryStore(HistoryStore):
    """History kept as a single JSON blob row, keyed like a defaults store."""

    def __init__(self, app, key: str = 'savedMatches'):
        self.app = app
        self.key = key

    def load(self) -> List[MatchRecord]:
        from padel_tracker.models import HistoryBlob
        with self.app.app_context():
            try:
                row = HistoryBlob.query.filter_by(key=self.key).first()
            except Exception as exc:
                self.app.logger.warning(f"[history-load-failed] key={self.key} {exc}")
                return []
            return decode_history(row.payload if row else None)

    def save(self, history: Sequence[MatchRecord]) -> bool:
        from padel_tracker import db
        from padel_tracker.models import HistoryBlob
        with self.app.app_context():
            try:
                row = HistoryBlob.query.filter_by(key=self.key).first()
                if row is None:
                    row = HistoryBlob(key=self.key)
                row.payload = encode_history(history)
                row.updated_at = time.time()
                db.session.add(row)
                db.session.commit()
            except Exception as exc:
                db.session.rollback()
                self.app.logger.warning(f"[history-save-failed] key={self.key} {exc}")
                return False
        return True
