import logging
from pathlib import Path
from typing import Any, Dict, Optional

from subextract.core.config.settings import settings
from subextract.core.errors import InputError

from ..data.callback_client import CallbackClient
from ..domain.models import ExtractionConfig, ExtractionRequest, RunResult
from .orchestrator import SubtitleOrchestrator

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("taskId", "cid", "filePath")


class SubtitleExtractionHandler:
    """
    Worker for a subtitle extraction process request.
    Runs one video and reports its outcome exactly once.
    """

    def __init__(self,
                 orchestrator: SubtitleOrchestrator,
                 callback_client: Optional[CallbackClient] = None,
                 output_dir: Optional[Path] = None):
        self.orchestrator = orchestrator
        self.callback_client = callback_client or CallbackClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        self.output_dir = output_dir or settings.OUTPUT_DIR

    @staticmethod
    def parse_request(params: Dict[str, Any]) -> ExtractionRequest:
        """
        Raises:
            InputError: If a required field is missing. The caller should reject the request.
        """
        missing = [name for name in REQUIRED_FIELDS if not params.get(name)]
        if missing:
            raise InputError(f"Missing required fields: {', '.join(missing)}")

        return ExtractionRequest(
            video_cid=params["cid"],
            file_path=params["filePath"],
            existing_meta=params.get("existingMeta") or {},
            task_id=params["taskId"]
        )

    def handle(self, params: Dict[str, Any], config: ExtractionConfig) -> RunResult:
        request = self.parse_request(params)
        logger.info(f"Processing subtitle extraction task {request.task_id} for {request.video_cid}")

        result = self.orchestrator.run(request, self.output_dir, config)
        logger.info(f"Task {request.task_id} finished: {result.status.value} in {result.duration_ms}ms")

        callback_url = params.get("callbackUrl")
        if callback_url:
            self.callback_client.send(callback_url, result.to_callback_payload(request.task_id))

        return result
