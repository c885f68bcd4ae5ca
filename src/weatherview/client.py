# OOP boundary for external i/o
# all http/keys live here, so the rest of the code is pure and testable
# one session per worker thread, the region fetch runs in a ThreadPoolExecutor

from __future__ import annotations
import logging
import threading
from typing import Any, Dict, Sequence
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Settings
from .models import WeatherUnit

logger = logging.getLogger(__name__)

class WeatherAPIError(RuntimeError):
    # single error type used to propagate clear messages from this layer
    pass

class CityNotFoundError(WeatherAPIError):
    pass

class OpenWeatherClient:
    # provider details: base url, params, auth and the single-attempt policy
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = "weatherview/0.1",
    ):
        if not api_key:
            raise WeatherAPIError("API key is required")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent

        self._local = threading.local()

        # one best-effort attempt per request, no retries and no backoff
        self._retry = Retry(total=0, read=False, raise_on_status=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenWeatherClient":
        return cls(api_key=settings.api_key, base_url=settings.base_url, timeout=settings.timeout)

    def _build_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent})
        adapter = HTTPAdapter(max_retries=self._retry)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    def _session(self) -> requests.Session:
        sess = getattr(self._local, "session", None)
        if sess is None:
            sess = self._build_session()
            self._local.session = sess
        return sess

    def _get(self, path: str, params: Dict[str, Any], label: str) -> Dict[str, Any]:
        params = {**params, "appid": self.api_key}
        url = f"{self.base_url}/{path}"
        logger.debug("GET %s for %s", url, label)

        try:
            resp = self._session().get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise WeatherAPIError(f"Request error for {label}: {exc}") from exc

        if resp.status_code == 404:
            raise CityNotFoundError(f"No match for {label}")
        if resp.status_code >= 400:
            # short snippet of the body is enough for triage
            snippet = (resp.text or "")[:300]
            raise WeatherAPIError(f"HTTP {resp.status_code} for {label}. Body: {snippet}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise WeatherAPIError(f"Invalid JSON for {label}: {exc}") from exc
        if not isinstance(data, dict):
            raise WeatherAPIError(f"Unexpected API shape for {label}: expected an object")
        return data

    def get_current_weather(self, city: str, unit: WeatherUnit = WeatherUnit.METRIC) -> Dict[str, Any]:
        data = self._get("weather", {"q": city, "units": unit.value}, label=repr(city))
        # the service layer relies on these keys being present
        for key in ("name", "main", "weather", "wind"):
            if key not in data:
                raise WeatherAPIError(f"Unexpected API shape: missing {key!r}")
        return data

    def get_group(self, city_ids: Sequence[int], unit: WeatherUnit = WeatherUnit.METRIC) -> Dict[str, Any]:
        if not city_ids:
            raise WeatherAPIError("At least one city id is required for a group lookup")
        ids = ",".join(str(i) for i in city_ids)
        data = self._get("group", {"id": ids, "units": unit.value}, label=f"group {ids}")
        if not isinstance(data.get("list"), list):
            raise WeatherAPIError("Unexpected API shape: missing list")
        return data
