import logging
from subextract.core.config.settings import Settings, settings as default_settings
from ..domain.interfaces import IFileAccess
from ..data.local_fs import LocalFileAccess
from ..data.webdav_client import WebDAVFileAccess

logger = logging.getLogger(__name__)

def build_file_access(config: Settings = default_settings) -> IFileAccess:
    """
    Picks the source file backend.
    WebDAV when WEBDAV_URL is set, the mounted filesystem otherwise.
    """
    if config.WEBDAV_URL:
        logger.info(f"Using WebDAV for file access: {config.WEBDAV_URL}")
        return WebDAVFileAccess(config.WEBDAV_URL, timeout=config.HTTP_TIMEOUT_SECONDS)

    logger.info("Using direct filesystem access")
    return LocalFileAccess()
