import logging
from urllib.parse import quote

import requests

from subextract.core.errors import LinkError
from ..domain.interfaces import IMetadataStore

logger = logging.getLogger(__name__)

class MetaCoreClient(IMetadataStore):
    """
    HTTP client for the central metadata service.
    The service owns the video records and serializes concurrent set additions.
    """

    def __init__(self, base_url: str, timeout: float = 30.0, session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def add_to_set(self, video_cid: str, field: str, value: str) -> None:
        url = f"{self.base_url}/meta/{quote(video_cid, safe='')}/{quote(field, safe='')}/add"

        try:
            response = self.session.post(url, json={"value": value}, timeout=self.timeout)
        except requests.RequestException as e:
            raise LinkError(f"Meta-core unreachable while adding to {field} of {video_cid}: {e}") from e

        if not response.ok:
            raise LinkError(
                f"Meta-core rejected {field} update for {video_cid}: {response.status_code} {response.text[:200]}"
            )
