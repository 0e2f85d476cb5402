"""HTTP transport for the Max Bot API.

Every call is a single round trip with a caller-specified timeout. Non-2xx
responses and network failures both surface as ApiError; nothing is retried.
"""

import os
from contextlib import ExitStack
from typing import Any, Dict, Mapping, Optional

import requests

from .exceptions import ApiError, ConfigurationError, ValidationError
from .logging import get_logger
from .validator import validate_file_size

logger = get_logger(__name__)


class MaxClient:
    """Base client for the Max Bot API.

    Authenticates with the bot token in the Authorization header.
    """

    DEFAULT_URL = "https://platform-api.max.ru/"
    DEFAULT_TIMEOUT = 30
    DEFAULT_UPLOAD_TIMEOUT = 60

    SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

    def __init__(
        self,
        token: str,
        base_url: str = None,
        timeout: float = DEFAULT_TIMEOUT,
        upload_timeout: float = DEFAULT_UPLOAD_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize client.

        Args:
            token: Bot access token
            base_url: API base URL (default https://platform-api.max.ru/)
            timeout: Timeout in seconds for regular requests
            upload_timeout: Timeout in seconds for file uploads
            session: Optional preconfigured requests session

        Raises:
            ConfigurationError: If token is empty
        """
        if not token:
            raise ConfigurationError("Max bot token not configured")

        self.token = token
        self.base_url = (base_url or self.DEFAULT_URL).rstrip("/") + "/"
        self.timeout = timeout
        self.upload_timeout = upload_timeout

        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    def _url(self, endpoint: str) -> str:
        return self.base_url + endpoint.lstrip("/")

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            error = response.json()
        except ValueError:
            return "Unknown error"
        if not isinstance(error, dict):
            return "Unknown error"
        return error.get("message") or error.get("error") or "Unknown error"

    @staticmethod
    def _decode(response: requests.Response) -> Dict[str, Any]:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            raise ApiError("Invalid JSON in Max API response", status_code=response.status_code)

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Dict = None,
        json_data: Dict = None,
    ) -> Dict[str, Any]:
        """Make an API request.

        Args:
            method: HTTP method
            endpoint: Path relative to the base URL (e.g. "messages")
            params: Query parameters
            json_data: JSON body (POST, PUT, PATCH)

        Returns:
            Decoded JSON response ({} for an empty body)

        Raises:
            ApiError: On a 4xx/5xx response or a network failure
        """
        method = method.upper()
        if method not in self.SUPPORTED_METHODS:
            raise ApiError(f"Unsupported HTTP method: {method}")

        try:
            response = self.session.request(
                method=method,
                url=self._url(endpoint),
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code
            error_msg = self._error_message(e.response)
            logger.error(f"Max API error: {method} {endpoint} -> {status}: {error_msg}")
            raise ApiError(error_msg, status_code=status)
        except requests.exceptions.RequestException as e:
            logger.error(f"Max API request failed: {method} {endpoint}: {e}")
            raise ApiError(f"Failed to execute Max API request: {e}")

        return self._decode(response)

    def _get(self, endpoint: str, params: Dict = None) -> Dict[str, Any]:
        return self._request("GET", endpoint, params=params)

    def _post(self, endpoint: str, data: Dict = None, params: Dict = None) -> Dict[str, Any]:
        return self._request("POST", endpoint, params=params, json_data=data)

    def _put(self, endpoint: str, data: Dict = None, params: Dict = None) -> Dict[str, Any]:
        return self._request("PUT", endpoint, params=params, json_data=data)

    def _patch(self, endpoint: str, data: Dict = None, params: Dict = None) -> Dict[str, Any]:
        return self._request("PATCH", endpoint, params=params, json_data=data)

    def _delete(self, endpoint: str, params: Dict = None) -> Dict[str, Any]:
        return self._request("DELETE", endpoint, params=params)

    def upload_file(
        self,
        files: Mapping[str, Mapping[str, Any]],
        upload_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Upload files as multipart form data.

        Args:
            files: Form field -> {"content": bytes, "filename": str}
                or {"path": str, "filename": str (optional)}
            upload_type: Optional upload type (image, video, audio, file)

        Returns:
            Decoded JSON response

        Raises:
            ValidationError: If a file exceeds the size limit or has no content
            ApiError: If the upload fails
        """
        params = {"type": upload_type} if upload_type else None

        with ExitStack() as stack:
            form = {}
            for key, file in files.items():
                if "content" in file:
                    content = file["content"]
                    validate_file_size(len(content))
                    form[key] = (file.get("filename", "file"), content)
                elif "path" in file:
                    path = file["path"]
                    validate_file_size(os.path.getsize(path))
                    handle = stack.enter_context(open(path, "rb"))
                    form[key] = (file.get("filename") or os.path.basename(path), handle)
                else:
                    raise ValidationError(f"File {key} has neither content nor path", field="files")

            try:
                # Drop the session's JSON content type so requests sets the multipart boundary
                response = self.session.post(
                    self._url("upload"),
                    params=params,
                    files=form,
                    headers={"Content-Type": None},
                    timeout=self.upload_timeout,
                )
                response.raise_for_status()
            except requests.exceptions.HTTPError as e:
                error_msg = self._error_message(e.response)
                logger.error(f"Max file upload failed: {e.response.status_code}: {error_msg}")
                raise ApiError(f"File upload failed: {error_msg}", status_code=e.response.status_code)
            except requests.exceptions.RequestException as e:
                logger.error(f"Max file upload failed: {e}")
                raise ApiError(f"Failed to upload file: {e}")

        logger.info(f"Uploaded {len(form)} file(s)")
        return self._decode(response)

    def get_me(self) -> Dict[str, Any]:
        """Get information about the current bot."""
        return self._get("bots/me")
