import logging
from email.utils import parsedate_to_datetime

import requests

from ..domain.interfaces import IFileAccess
from ..domain.models import FileStats

logger = logging.getLogger(__name__)

# Mount point of the shared media volume inside the container
FILES_MOUNT_PREFIX = "/files"


class WebDAVFileAccess(IFileAccess):
    """
    HTTP-based file access against the media server's WebDAV endpoint.
    Used when the container has no direct mount of the media library.
    """

    def __init__(self, base_url: str, timeout: float = 30.0, session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def to_webdav_url(self, path: str) -> str:
        """
        Converts "/files/watch/movie.mkv" into "{base_url}/watch/movie.mkv".
        """
        relative_path = str(path)
        if relative_path.startswith(FILES_MOUNT_PREFIX):
            relative_path = relative_path[len(FILES_MOUNT_PREFIX):]

        if not relative_path.startswith("/"):
            relative_path = "/" + relative_path

        return self.base_url + relative_path

    def to_input_locator(self, path: str) -> str:
        return self.to_webdav_url(path)

    def stat(self, path: str) -> FileStats:
        url = self.to_webdav_url(path)
        try:
            response = self.session.head(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise IOError(f"WebDAV HEAD failed for {path}: {e}") from e

        if not response.ok:
            raise IOError(f"WebDAV HEAD failed for {path}: {response.status_code} {response.reason}")

        content_length = response.headers.get("content-length")
        if not content_length:
            raise IOError(f"WebDAV HEAD for {path} reported no Content-Length")
        last_modified = response.headers.get("last-modified")

        return FileStats(
            size=int(content_length),
            mtime=parsedate_to_datetime(last_modified) if last_modified else None
        )

    def read_range(self, path: str, start: int, end: int) -> bytes:
        if end < start:
            return b""

        url = self.to_webdav_url(path)
        try:
            response = self.session.get(
                url,
                headers={"Range": f"bytes={start}-{end}"},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise IOError(f"WebDAV Range GET failed for {path}: {e}") from e

        if response.status_code not in (200, 206):
            raise IOError(f"WebDAV Range GET failed for {path}: {response.status_code} {response.reason}")

        data = response.content
        # A server ignoring Range answers 200 with the whole body
        if response.status_code == 200 and len(data) > end - start + 1:
            data = data[start:end + 1]
        return data

    def exists(self, path: str) -> bool:
        try:
            response = self.session.head(self.to_webdav_url(path), timeout=self.timeout)
        except requests.RequestException:
            return False
        return response.ok
