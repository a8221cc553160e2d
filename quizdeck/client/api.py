import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from quizdeck.client.session import QuizQuestion

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"


class APIClientError(Exception):
    """Network failure or non-2xx answer from the quiz API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _segment(module_name: str) -> str:
    return quote(module_name, safe="")


class QuizAPIClient:
    """Thin async wrapper over the HTTP API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "QuizAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise APIClientError(f"Could not reach the server: {exc}") from exc

        logger.debug("%s %s -> %s", method, path, response.status_code)
        if response.is_success:
            return response.json()

        message = None
        try:
            body = response.json()
            if isinstance(body, dict):
                message = body.get("message")
        except ValueError:
            pass
        raise APIClientError(
            message or f"HTTP error! status: {response.status_code}",
            status_code=response.status_code,
        )

    async def list_modules(self) -> List[str]:
        data = await self._request("GET", "/api/modules")
        return data.get("modules") or []

    async def fetch_quiz(self, module_name: str) -> List[QuizQuestion]:
        data = await self._request("GET", f"/api/quiz/{_segment(module_name)}")
        return [QuizQuestion.from_dict(q) for q in data["questions"]]

    async def submit_score(
        self, module_name: str, user_name: str, correct_count: int, incorrect_count: int
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/api/scores",
            json={
                "moduleName": module_name,
                "userName": user_name,
                "correctCount": correct_count,
                "incorrectCount": incorrect_count,
            },
        )

    async def list_scores(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/scores")

    async def create_module(self, questions: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self._request("POST", "/api/admin/create-module", json=questions)

    async def delete_module(self, module_name: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/api/admin/module/{_segment(module_name)}")
