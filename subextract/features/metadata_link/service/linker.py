import logging
from typing import Optional

from subextract.core.common.enums import MetadataField
from ..domain.interfaces import IMetadataStore
from ..domain.models import SubtitleLink

logger = logging.getLogger(__name__)

class MetadataLinker:
    """
    Folds extracted subtitle CIDs and their languages into the source video record.
    Write-only: never reads or removes members.
    """

    def __init__(self, store: IMetadataStore):
        self.store = store

    def link(self, video_cid: str, subtitle_cid: str, language: Optional[str] = None) -> None:
        """
        Raises:
            LinkError: If either set addition fails. A failed language write
            leaves the CID addition in place.
        """
        link = SubtitleLink(video_cid=video_cid, subtitle_cid=subtitle_cid, language=language)

        self.store.add_to_set(link.video_cid, MetadataField.EXTRACTED_SUBTITLES.value, link.subtitle_cid)

        if link.language:
            self.store.add_to_set(link.video_cid, MetadataField.SUBTITLE_LANGUAGES.value, link.language)

        logger.info(f"Linked subtitle {link.subtitle_cid} ({link.language or 'no language'}) to video {link.video_cid}")
