"""
Dropbox API client with OAuth 1.0a request signing.

This module provides the resource client for Dropbox's version 0 API.
It handles:

- Signing every call with the consumer credentials and access token
- Mapping operations onto fixed URL templates
- Multipart uploads and streamed downloads
- Normalizing responses into result dictionaries

Results are plain dictionaries decoded from the JSON body, always carrying
``http_response_code``. Failed calls return ``{"error": ..., "http_response_code": ...}``
instead of raising; callers branch on the presence of ``"error"``.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import IO, Any, Dict, Optional, Union
from urllib.parse import quote, urlencode

import requests

from ..http_status import TRANSPORT_ERROR_CODE, is_success, status_line, transport_error_line
from ..oauth.config import DropboxOAuthConfig, validate_context
from ..oauth.coordinator import OAuthCoordinator
from ..oauth.signing import sign_url
from . import endpoints
from .classifiers import ResponseClassifier, default_error_classifier, not_modified_classifier
from .exceptions import DropboxArgumentError

logger = logging.getLogger(__name__)

INVALID_JSON_ERROR = "Invalid JSON server response"
METADATA_HEADER = "x-dropbox-metadata"
DOWNLOAD_CHUNK_SIZE = 64 * 1024

DownloadSink = Union[str, "os.PathLike[str]", IO[bytes]]


@dataclass
class FilePart:
    """
    File content sent as a multipart upload.

    Attributes:
        filename: Name stored on Dropbox, sent verbatim
        content: Binary file object to read from
    """

    filename: str
    content: IO[bytes]


class DropboxClient:
    """
    Signed HTTP client for the Dropbox API.

    The client reuses the access token held by its OAuthCoordinator, so the
    handshake must be completed (coordinator.login() then coordinator.auth())
    before calls succeed. Calling earlier is not blocked; Dropbox answers
    with an authentication failure that comes back as an error result.

    Example:
        from netdropbox import DropboxClient, DropboxOAuthConfig, OAuthCoordinator

        oauth = OAuthCoordinator(DropboxOAuthConfig("KEY", "SECRET"))
        login = oauth.login()       # send the user to login.authorization_url
        oauth.auth()                # after the user accepted the application
        client = DropboxClient(oauth)

        info = client.account_info()
        if "error" in info:
            ...
    """

    def __init__(
        self,
        oauth_coordinator: OAuthCoordinator,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize Dropbox API client.

        Args:
            oauth_coordinator: Coordinator holding the configuration and access token
            session: requests session (creates one if not provided)
        """
        self.oauth = oauth_coordinator
        self.session = session or requests.Session()
        self.error: Optional[str] = None

        logger.info("DropboxClient initialized")

    @property
    def config(self) -> DropboxOAuthConfig:
        return self.oauth.config

    @property
    def context(self) -> str:
        """Root namespace file operations address ("sandbox" or "dropbox")."""
        return self.config.context

    @context.setter
    def context(self, value: str) -> None:
        self.config.context = validate_context(value)

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def _root_path(self, path: str) -> str:
        """Context followed by the percent-encoded path."""
        return f"{self.context}/{quote(path.lstrip('/'), safe='/')}"

    def _root_params(self) -> Dict[str, str]:
        return {"root": self.context}

    def invoke(
        self,
        command: str,
        http_method: str = "GET",
        host: str = endpoints.API_HOST,
        params: Optional[Dict[str, str]] = None,
        form: Optional[Dict[str, str]] = None,
        upload: Optional[FilePart] = None,
        download_sink: Optional[DownloadSink] = None,
        classifier: Optional[ResponseClassifier] = None,
    ) -> Dict[str, Any]:
        """
        Send one signed request and normalize the response.

        Dispatch:
        - download_sink given: streamed GET, body written to the sink
        - upload given: multipart POST, filename also signed as the "file" parameter
        - otherwise: GET, or POST/PUT/... with a URL-encoded form body

        Args:
            command: Path below the version prefix (e.g. "account/info")
            http_method: HTTP method for ordinary requests
            host: endpoints.API_HOST or endpoints.CONTENT_HOST
            params: Query parameters (signed)
            form: Form fields for POST requests (signed)
            upload: File to send as multipart form data
            download_sink: Path or binary file object receiving the body
            classifier: Maps non-2xx responses to a result (default: error result)

        Returns:
            Decoded JSON object with http_response_code, or an error result

        Raises:
            DropboxArgumentError: If form is combined with a request that has no form body
        """
        classifier = classifier or default_error_classifier
        method = http_method.upper()

        if form and (download_sink is not None or upload is not None or method in ("GET", "HEAD")):
            raise DropboxArgumentError(f"form fields cannot be sent with this {method} request")

        query = dict(params or {})
        headers: Dict[str, str] = {}
        body: Optional[str] = None

        if download_sink is not None:
            method = "GET"
        elif upload is not None:
            method = "POST"
            query["file"] = upload.filename
        elif form:
            body = urlencode(form)
            headers["Content-Type"] = "application/x-www-form-urlencoded"

        url = self.config.api_url(command, host)
        if query:
            url = f"{url}{'&' if '?' in url else '?'}{urlencode(query)}"

        signed_url, headers, body = sign_url(
            self.config,
            url,
            http_method=method,
            token=self.oauth.access_token,
            body=body,
            headers=headers,
        )

        logger.debug(f"{method} {url}")

        try:
            if download_sink is not None:
                response = self.session.request(
                    method, signed_url, headers=headers, stream=True
                )
            elif upload is not None:
                response = self.session.request(
                    method,
                    signed_url,
                    headers=headers,
                    files={"file": (upload.filename, upload.content)},
                )
            else:
                response = self.session.request(
                    method, signed_url, headers=headers, data=body
                )
        except requests.RequestException as e:
            self.error = transport_error_line(e)
            logger.warning(f"Something went wrong: {self.error}")
            return {"error": self.error, "http_response_code": TRANSPORT_ERROR_CODE}

        if not is_success(response):
            self.error = status_line(response)
            try:
                return classifier(response)
            finally:
                response.close()

        if download_sink is not None:
            return self._save_download(response, download_sink)

        return self._decode(response)

    def _decode(self, response: requests.Response) -> Dict[str, Any]:
        """Decode a JSON object body and stamp it with the status code."""
        if self.config.debug:
            logger.debug(f"Got content {response.text}")

        try:
            data = response.json()
        except ValueError:
            data = None

        if not isinstance(data, dict):
            logger.warning(f"Invalid JSON in {response.status_code} response")
            return {"error": INVALID_JSON_ERROR, "http_response_code": response.status_code}

        data["http_response_code"] = response.status_code
        return data

    def _save_download(
        self, response: requests.Response, sink: DownloadSink
    ) -> Dict[str, Any]:
        """
        Stream the response body into sink and return the file metadata.

        A connection lost mid-body yields the transport error result; a file
        this method created for a path sink is removed again.
        """
        owns_file = isinstance(sink, (str, os.PathLike))
        try:
            if owns_file:
                with open(sink, "wb") as f:
                    written = self._copy_body(response, f)
            else:
                written = self._copy_body(response, sink)
        except requests.RequestException as e:
            if owns_file:
                os.remove(sink)
            self.error = transport_error_line(e)
            logger.warning(f"Download interrupted: {self.error}")
            return {"error": self.error, "http_response_code": TRANSPORT_ERROR_CODE}
        finally:
            response.close()

        logger.debug(f"Downloaded {written} bytes")

        result: Dict[str, Any] = {}
        raw_metadata = response.headers.get(METADATA_HEADER)
        if raw_metadata:
            try:
                metadata = json.loads(raw_metadata)
            except ValueError:
                logger.warning(f"Ignoring malformed {METADATA_HEADER} header")
            else:
                if isinstance(metadata, dict):
                    result.update(metadata)

        result["http_response_code"] = response.status_code
        return result

    @staticmethod
    def _copy_body(response: requests.Response, f: IO[bytes]) -> int:
        written = 0
        for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
            if chunk:
                f.write(chunk)
                written += len(chunk)
        return written

    def account_info(self) -> Dict[str, Any]:
        """
        Get information about the authorized user's account.

        Returns:
            Account data (display_name, uid, quota_info, ...) with http_response_code
        """
        return self.invoke(endpoints.ACCOUNT_INFO)

    def list(self, path: str = "", folder_hash: Optional[str] = None) -> Dict[str, Any]:
        """
        List the files in a folder.

        The result contains a ``hash`` value describing the folder contents.
        Pass it back as ``folder_hash`` to ask whether anything changed:
        an unchanged folder yields ``{"http_response_code": 304}``.

        Args:
            path: Folder path (default: the root)
            folder_hash: Hash from a previous listing of the same folder

        Returns:
            Folder listing, or {"http_response_code": 304} when unchanged
        """
        command = endpoints.FILES.format(root_path=self._root_path(path))

        if folder_hash is None:
            return self.invoke(command)

        return self.invoke(
            command,
            params={"hash": folder_hash},
            classifier=not_modified_classifier,
        )

    def copy(self, from_path: str, to_path: str) -> Dict[str, Any]:
        """Copy a file or folder."""
        return self.invoke(
            endpoints.FILEOPS_COPY,
            "POST",
            params=self._root_params(),
            form={"from_path": from_path, "to_path": to_path},
        )

    def move(self, from_path: str, to_path: str) -> Dict[str, Any]:
        """Move a file or folder."""
        return self.invoke(
            endpoints.FILEOPS_MOVE,
            "POST",
            params=self._root_params(),
            form={"from_path": from_path, "to_path": to_path},
        )

    def mkdir(self, path: str) -> Dict[str, Any]:
        """Create a folder."""
        return self.invoke(
            endpoints.FILEOPS_CREATE_FOLDER,
            "POST",
            params=self._root_params(),
            form={"path": path},
        )

    def delete(self, path: str) -> Dict[str, Any]:
        """Delete a file or folder."""
        return self.invoke(
            endpoints.FILEOPS_DELETE,
            "POST",
            params=self._root_params(),
            form={"path": path},
        )

    def view(self, path: str) -> Dict[str, Any]:
        """Create a cookie protected link the user can open to look at a file."""
        return self.invoke(endpoints.FILEOPS_LINKS.format(root_path=self._root_path(path)))

    def metadata(self, path: str = "") -> Dict[str, Any]:
        """Get metadata for a file or folder."""
        return self.invoke(endpoints.METADATA.format(root_path=self._root_path(path)))

    def putfile(
        self,
        file: Union[str, "os.PathLike[str]", IO[bytes]],
        path: str = "",
        filename: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Upload a file.

        Args:
            file: Local path, or a binary file object
            path: Destination folder on Dropbox (default: the root)
            filename: Name to store the file under (default: basename of file path;
                      required when file is a file object)

        Returns:
            Metadata of the uploaded file with http_response_code

        Raises:
            DropboxArgumentError: If file is a file object and no filename is given
        """
        command = endpoints.FILES.format(root_path=self._root_path(path))

        if isinstance(file, (str, os.PathLike)):
            name = filename or os.path.basename(os.fspath(file))
            with open(file, "rb") as f:
                return self.invoke(
                    command,
                    "POST",
                    host=endpoints.CONTENT_HOST,
                    upload=FilePart(name, f),
                )

        if not filename:
            raise DropboxArgumentError("filename is required when uploading a file object")

        return self.invoke(
            command,
            "POST",
            host=endpoints.CONTENT_HOST,
            upload=FilePart(filename, file),
        )

    def getfile(self, path: str, sink: DownloadSink) -> Dict[str, Any]:
        """
        Download a file, streaming it into sink.

        Args:
            path: File path on Dropbox
            sink: Local path to write to, or a binary file object

        Returns:
            {"http_response_code": ...} plus file metadata when Dropbox sends it
        """
        return self.invoke(
            endpoints.FILES.format(root_path=self._root_path(path)),
            host=endpoints.CONTENT_HOST,
            download_sink=sink,
        )
