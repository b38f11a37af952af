import logging
from typing import Any, Dict

import requests

logger = logging.getLogger(__name__)

class CallbackClient:
    """
    Delivers a run's completion report to the caller's callback URL.
    Delivery failures are logged; the run result itself is unaffected.
    """

    def __init__(self, timeout: float = 30.0, session: requests.Session = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, callback_url: str, payload: Dict[str, Any]) -> bool:
        try:
            response = self.session.post(callback_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Callback to {callback_url} failed: {e}")
            return False

        if not response.ok:
            logger.error(f"Callback to {callback_url} rejected: {response.status_code}")
            return False
        return True
