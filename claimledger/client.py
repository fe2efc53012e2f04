"""
Ledger Client

Thin HTTP client used by actor applications to invoke ledger operations.
"""
import json
import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"


class InvokeError(Exception):
    """An invocation was rejected by the ledger."""

    def __init__(self, kind: str, message: str, status_code: int):
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message
        self.status_code = status_code


class LedgerClient:
    def __init__(self, api_url: str = DEFAULT_API_URL, timeout: float = 10):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def invoke(self, operation: str, payload: Optional[Any] = None) -> Any:
        """
        Invoke an operation with an optional single JSON argument.

        Raises:
            InvokeError: If the ledger reports a failure
        """
        args = [] if payload is None else [json.dumps(payload)]
        response = requests.post(
            f"{self.api_url}/invoke/{operation}",
            json={"args": args},
            timeout=self.timeout,
        )
        return self._result(response)

    def initialize(self, contract_types: list) -> None:
        response = requests.post(
            f"{self.api_url}/init",
            json={"args": [json.dumps(contract_types)]},
            timeout=self.timeout,
        )
        self._result(response)

    def _result(self, response: requests.Response) -> Any:
        if response.status_code == 200:
            return response.json()
        detail = response.json().get("detail", {}) if response.content else {}
        if not isinstance(detail, dict):
            detail = {"message": str(detail)}
        logger.warning(f"Ledger rejected request: {detail}")
        raise InvokeError(
            detail.get("error") or "HTTPError",
            detail.get("message") or response.text,
            response.status_code,
        )
