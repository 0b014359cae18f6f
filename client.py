import requests
from typing import Optional


class CalendarClient:
    """Simple REST client for the exercise calendar API."""

    def __init__(self, base_url: str = "http://localhost:8000") -> None:
        self.base_url = base_url.rstrip("/")

    def health(self) -> dict:
        resp = requests.get(f"{self.base_url}/health")
        resp.raise_for_status()
        return resp.json()

    def list_exercises(self, start: str, end: str) -> list[dict]:
        resp = requests.get(
            f"{self.base_url}/exercises", params={"from": start, "to": end}
        )
        resp.raise_for_status()
        return resp.json()

    def daily_summary(self, start: str, end: str) -> list[dict]:
        resp = requests.get(
            f"{self.base_url}/exercises/daily-summary",
            params={"from": start, "to": end},
        )
        resp.raise_for_status()
        return resp.json()

    def create_exercise(
        self, date: str, type: str, target: float, title: Optional[str] = None
    ) -> dict:
        body = {"date": date, "type": type, "target": target}
        if title is not None:
            body["title"] = title
        resp = requests.post(f"{self.base_url}/exercises", json=body)
        resp.raise_for_status()
        return resp.json()

    def update_progress(self, exercise_id: str, progress: float) -> dict:
        resp = requests.patch(
            f"{self.base_url}/exercises/{exercise_id}/progress",
            json={"progress": progress},
        )
        resp.raise_for_status()
        return resp.json()
