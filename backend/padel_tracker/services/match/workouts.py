import logging
from datetime import datetime
from typing import Optional

import httpx

from .lifecycle import MatchRecord


logger = logging.getLogger(__name__)

HEADERS = {"User-Agent": "padel-tracker", "Accept": "application/json"}


class WorkoutSync:
    """Fitness-tracker collaborator. Every call reports success as a bool."""

    is_authorized = False

    def request_authorization(self) -> bool:
        raise NotImplementedError

    def log_workout(self, start_time: datetime, end_time: datetime, energy: float) -> bool:
        raise NotImplementedError

    def close(self) -> None:
        pass


class DisabledWorkoutSync(WorkoutSync):
    """Used when no tracker endpoint is configured."""

    def request_authorization(self) -> bool:
        logger.info("[workout-sync] no tracker configured; authorization refused")
        return False

    def log_workout(self, start_time: datetime, end_time: datetime, energy: float) -> bool:
        return False


class WebhookWorkoutSync(WorkoutSync):
    """Posts finished matches to an HTTP fitness-tracker endpoint.

    ``POST {base_url}/authorize`` grants access; ``POST {base_url}/workouts``
    records one workout. Transport errors and non-2xx replies count as
    failures and are only logged.
    """

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 8.0,
                 transport: Optional[httpx.BaseTransport] = None):
        headers = dict(HEADERS)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.client = httpx.Client(base_url=base_url, headers=headers, timeout=timeout, transport=transport)
        self.is_authorized = False

    def _post(self, path: str, payload: dict) -> bool:
        try:
            r = self.client.post(path, json=payload)
            r.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"[workout-sync-failed] path={path} error={e}")
            return False
        return True

    def request_authorization(self) -> bool:
        self.is_authorized = self._post("/authorize", {"share": ["workout", "activeEnergyBurned"]})
        return self.is_authorized

    def log_workout(self, start_time: datetime, end_time: datetime, energy: float) -> bool:
        if not self.is_authorized:
            return False
        return self._post("/workouts", {
            "activityType": "padel",
            "start": start_time.isoformat(),
            "end": end_time.isoformat(),
            "duration": (end_time - start_time).total_seconds(),
            "energyKcal": energy,
            "metadata": {"brand": "Padel Tracker", "sport": "Padel"},
        })

    def close(self) -> None:
        self.client.close()


def sync_completed_match(sync: WorkoutSync, match: MatchRecord) -> bool:
    """Log a finished match as a workout when the tracker is authorized."""
    if not sync.is_authorized or not match.is_complete or match.end_time is None:
        return False
    try:
        ok = sync.log_workout(match.start_time, match.end_time, match.estimated_energy)
    except Exception as exc:
        logger.warning(f"[workout-sync-failed] match={match.id} error={exc}")
        return False
    if not ok:
        logger.warning(f"[workout-sync-failed] match={match.id}")
    return ok
