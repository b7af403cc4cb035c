from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Collection, Dict, Optional

import requests
from requests import Response

from ..errors import ErrorKind, WeatherError


DEFAULT_USER_AGENT = "weather-proxy/0.1"


@dataclass
class RequestConfig:
    timeout: float = 2.0
    retries: int = 2
    delay: float = 0.1
    status_forcelist: Collection[int] = range(500, 600)
    headers: Dict[str, str] = field(
        default_factory=lambda: {"Accept": "application/json", "User-Agent": DEFAULT_USER_AGENT}
    )

    @property
    def max_attempts(self) -> int:
        return 1 + self.retries


class WeatherProvider:
    """Base class that adds timeouts and bounded retry for HTTP providers.

    One call to :meth:`_request` issues at most ``1 + retries`` sequential
    attempts. Transport timeouts, connection failures and responses whose
    status is in ``status_forcelist`` are retried after a fixed ``delay``;
    any other HTTP error is terminal. Failures surface as :class:`WeatherError`
    tagged with the kind of the last failed attempt.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
        sleep_func: Callable[[float], None] = time.sleep,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or self._build_session(self.request_config)
        self._sleep = sleep_func
        self._log = logging.getLogger(self.__class__.__name__)

    def _build_session(self, config: RequestConfig) -> requests.Session:
        session = requests.Session()
        session.headers.update(config.headers)
        return session

    def _request(self, method: str, url: str, **kwargs) -> Response:
        config = self.request_config
        attempt = 1
        while True:
            try:
                response = self._attempt(method, url, **kwargs)
            except WeatherError as exc:
                if not self._is_retryable(exc) or attempt >= config.max_attempts:
                    raise
                self._log.warning(
                    "Attempt %s/%s failed (%s), retrying in %.3fs",
                    attempt,
                    config.max_attempts,
                    exc.code,
                    config.delay,
                )
                attempt += 1
                self._sleep(config.delay)
                continue
            return response

    def _attempt(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out: %s", exc)
            raise WeatherError(ErrorKind.UPSTREAM_TIMEOUT) from exc
        except requests.ConnectionError as exc:
            self._log.error("Connection failed: %s", exc)
            raise WeatherError(ErrorKind.UPSTREAM_UNAVAILABLE) from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise WeatherError(ErrorKind.UPSTREAM_UNAVAILABLE, "Cannot connect to upstream service") from exc
        return self._handle_response(response)

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text[:200])
            raise WeatherError(
                ErrorKind.UPSTREAM_SERVICE_ERROR,
                f"Upstream service returned HTTP {response.status_code}",
                upstream_status=response.status_code,
            )
        return response

    def _is_retryable(self, error: WeatherError) -> bool:
        if error.kind in (ErrorKind.UPSTREAM_TIMEOUT, ErrorKind.UPSTREAM_UNAVAILABLE):
            # only plain transport failures, not exotic request errors
            return isinstance(error.__cause__, (requests.Timeout, requests.ConnectionError))
        status = error.upstream_status
        return status is not None and status in self.request_config.status_forcelist


__all__ = ["DEFAULT_USER_AGENT", "WeatherProvider", "RequestConfig"]
