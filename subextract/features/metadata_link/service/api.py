import logging
from subextract.core.config.settings import Settings, settings as default_settings
from subextract.core.database.connection import init_db
from ..domain.interfaces import IMetadataStore
from ..data.meta_core_client import MetaCoreClient
from ..data.repository import SqlMetadataStore

logger = logging.getLogger(__name__)

def build_metadata_store(config: Settings = default_settings) -> IMetadataStore:
    """
    Picks the metadata store.
    The meta-core HTTP service when META_CORE_URL is set, the local database otherwise.
    """
    if config.META_CORE_URL:
        logger.info(f"Using meta-core at {config.META_CORE_URL}")
        return MetaCoreClient(config.META_CORE_URL, timeout=config.HTTP_TIMEOUT_SECONDS)

    init_db()
    logger.info("Using local SQL metadata store")
    return SqlMetadataStore()
