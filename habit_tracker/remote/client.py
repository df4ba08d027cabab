"""REST client for the remote habit service."""

import logging
from typing import Any, Optional

import requests

from ..exceptions import (
    MalformedResponseError,
    RemoteStatusError,
    RemoteTransportError,
)
from ..habits.models import Habit, Theme
from .mapping import habit_from_api, habit_to_api, merge_api_echo, remote_id

logger = logging.getLogger(__name__)


class HabitAPIClient:
    """HTTP client for the remote habit service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Service URL (e.g., https://habit-track.up.railway.app)
            timeout: Seconds to wait for each request
            session: Optional requests session to reuse
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method
            path: Path below the base URL (e.g., "/habits")
            payload: Optional JSON body

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            RemoteTransportError: On connection failure or timeout
            RemoteStatusError: On a non-2xx status
            MalformedResponseError: If the body is not JSON
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteTransportError(f"{method} {path} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise RemoteStatusError(
                response.status_code,
                f"{method} {path} returned {response.status_code}",
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"{method} {path} returned invalid JSON: {e}") from e

    def health(self) -> bool:
        """Probe the liveness endpoint. Returns False instead of raising."""
        try:
            self._request("GET", "/health")
            return True
        except (RemoteTransportError, RemoteStatusError, MalformedResponseError) as e:
            logger.info(f"Remote habit service not healthy: {e}")
            return False

    def fetch_habits(self) -> list[Habit]:
        """
        Get all habits from the remote service.

        Returns:
            List of habits (may be empty)
        """
        data = self._request("GET", "/habits")
        if not isinstance(data, list):
            raise MalformedResponseError(f"Expected habit list, got {type(data).__name__}")
        return [habit_from_api(item) for item in data]

    def create_habit(self, habit: Habit) -> Habit:
        """
        Create a habit remotely.

        Fields the service does not echo keep their local values.

        Returns:
            The created habit with its remote id

        Raises:
            MalformedResponseError: If the service did not return an id
        """
        data = self._request("POST", "/habits", habit_to_api(habit))
        if not isinstance(data, dict) or data.get("id") is None:
            raise MalformedResponseError(f"Create of {habit.name!r} returned no id")
        return merge_api_echo(habit, data)

    def update_habit(self, habit: Habit) -> Optional[Habit]:
        """
        Replace a remote habit with the full local record.

        Returns:
            The updated habit if the service echoed one, else None
        """
        data = self._request("PUT", f"/habits/{remote_id(habit.id)}", habit_to_api(habit))
        return habit_from_api(data) if data else None

    def delete_habit(self, habit_id: str):
        """Delete a remote habit by id."""
        self._request("DELETE", f"/habits/{remote_id(habit_id)}")

    def get_theme(self) -> Theme:
        """
        Get the stored theme preference.

        Raises:
            MalformedResponseError: If the value is not a known theme
        """
        data = self._request("GET", "/settings/theme")
        value = data.get("theme") if isinstance(data, dict) else None
        try:
            return Theme(value)
        except ValueError:
            raise MalformedResponseError(f"Unrecognized theme value: {value!r}")

    def put_theme(self, theme: Theme):
        """Store the theme preference."""
        self._request("PUT", "/settings/theme", {"theme": Theme(theme).value})


def check_connection():
    """Check the remote habit service and list its habits."""
    from dotenv import load_dotenv

    from ..config import Settings

    load_dotenv()
    settings = Settings()

    client = HabitAPIClient(settings.habit_api_url, settings.habit_api_timeout)

    if not client.health():
        print(f"Remote habit service at {client.base_url} is not reachable")
        return

    habits = client.fetch_habits()
    print(f"\nFound {len(habits)} habits")
    for habit in habits:
        print(f"  - {habit.name} ({habit.id}): {habit.category.value}, {habit.frequency.value}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    check_connection()
