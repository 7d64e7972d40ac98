"""Base API client with common HTTP logic."""

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from tunas import get_logger
from tunas.models import ApiErrorBody

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class ApiClientError(Exception):
    """Any failure talking to the Tunas API.

    ``message`` is safe to show to the user.
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        response: ApiErrorBody | None = None,
    ):
        self.message = message
        self.status = status
        self.response = response
        super().__init__(message)


def _error_body(response: httpx.Response) -> ApiErrorBody | None:
    try:
        return ApiErrorBody.model_validate(response.json())
    except ValueError:
        # Not JSON, or JSON without a detail field
        return None


class BaseApi:
    """Base class for the resource clients. All of them share one httpx.Client."""

    def __init__(self, http: httpx.Client):
        self._http = http

    def _request(self, method: str, path: str, *, json_data: Any = None) -> Any:
        """Send a request and return the decoded JSON body.

        Responses that are not JSON decode to an empty dict.

        Raises:
            ApiClientError: On transport failure or a 4xx/5xx response
        """
        try:
            response = self._http.request(method, path, json=json_data)
        except httpx.HTTPError as e:
            logger.warning("api_request_failed", method=method, path=path, error=str(e))
            raise ApiClientError(str(e) or "Network error occurred") from e

        if response.is_error:
            body = _error_body(response)
            message = (body.detail if body else "") or response.reason_phrase or "API request failed"
            logger.warning(
                "api_error_response",
                method=method,
                path=path,
                status=response.status_code,
                detail=message,
            )
            raise ApiClientError(message, response.status_code, body)

        logger.debug("api_request_ok", method=method, path=path, status=response.status_code)

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            return response.json()
        return {}

    def _parse(self, model: type[M], data: Any, path: str) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "api_response_invalid", path=path, model=model.__name__, errors=e.error_count()
            )
            raise ApiClientError(f"Unexpected response from {path}") from e

    def _get(self, path: str, model: type[M]) -> M:
        return self._parse(model, self._request("GET", path), path)

    def _post(self, path: str, model: type[M], payload: BaseModel) -> M:
        data = self._request("POST", path, json_data=payload.model_dump(mode="json"))
        return self._parse(model, data, path)
