"""HTTP client for the Hetzner Robot webservice.

See http://wiki.hetzner.de/index.php/Robot_Webservice/en for the API.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Mapping
from urllib.parse import quote

import requests
from pydantic import ValidationError

from .config import RobotSettings
from .errors import RobotRequestError
from .logger import get_logger
from .models import KeyResponse, UploadedKey

logger = get_logger(__name__)

SUCCESS_STATUSES = frozenset({200, 201})


class RobotClient:
    """Thin wrapper around the Robot API form endpoints."""

    def __init__(
        self,
        login: str,
        password: str,
        settings: RobotSettings | None = None,
        *,
        session: requests.Session | None = None,
    ):
        self._login = login
        self._password = password
        self._settings = settings or RobotSettings.from_env()
        # an injected session belongs to the caller and is left open
        self._owns_session = session is None
        self._session = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "RobotClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def host(self) -> str:
        return self._settings.host

    def _build_url(self, path: str) -> str:
        # credentials ride in the authority; requests turns them into Basic auth
        return "https://{login}:{password}@{host}{path}".format(
            login=quote(self._login, safe=""),
            password=quote(self._password, safe=""),
            host=self.host,
            path=path,
        )

    @contextmanager
    def post_form(self, path: str, data: Mapping[str, str]) -> Iterator[requests.Response]:
        """POST a form and yield the response if the API accepted it.

        The response is closed when the block exits, whatever the outcome.
        Rejected responses are raised as :class:`RobotRequestError` with the
        raw response attached.
        """

        url = self._build_url(path)
        logger.debug("Robot request POST https://%s%s fields=%s", self.host, path, sorted(data))

        try:
            response = self._session.post(
                url,
                data=dict(data),
                headers=self._settings.headers(),
                timeout=self._settings.timeout,
                verify=self._settings.verify_ssl,
                stream=True,
            )
        except requests.RequestException as exc:
            logger.error("Robot request %s failed: %s", path, exc)
            raise RobotRequestError(f"POST {path} failed: {exc}") from exc

        try:
            if response.status_code not in SUCCESS_STATUSES:
                detail = response.text or "Unknown error"
                raise RobotRequestError(
                    f"POST {path} returned HTTP {response.status_code}: {detail}",
                    status_code=response.status_code,
                    response=response,
                )
            yield response
        finally:
            response.close()

    # ------------------------------------------------------------------
    # High-level helpers
    # ------------------------------------------------------------------

    def upload_key(self, name: str, data: str) -> UploadedKey:
        """Register a public key and return the stored record."""

        with self.post_form("/key", {"name": name, "data": data}) as response:
            try:
                parsed = KeyResponse.model_validate(response.json())
            except (ValueError, ValidationError) as exc:
                raise RobotRequestError(
                    f"Invalid key response from Robot API: {exc}",
                    status_code=response.status_code,
                    response=response,
                ) from exc
        return parsed.key

    def install_linux(
        self,
        ip: str,
        authorized_key: str,
        *,
        dist: str | None = None,
        arch: str | None = None,
        lang: str | None = None,
    ) -> None:
        """Stage a Linux installation to run on the next boot."""

        form = {
            "dist": dist or self._settings.dist,
            "arch": arch or self._settings.arch,
            "lang": lang or self._settings.lang,
            "authorized_key": authorized_key,
        }
        with self.post_form(f"/boot/{ip}/linux", form):
            pass

    def reset(self, ip: str, reset_type: str = "hw") -> None:
        """Trigger a reset of the server."""

        with self.post_form(f"/reset/{ip}", {"type": reset_type}):
            pass
