import logging
from typing import Any, List, Optional

import aiohttp

from app.config.settings import settings
from app.schemas.profesor import Professor

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Respuesta HTTP no exitosa de la API académica"""

    def __init__(self, status: int, message: str):
        super().__init__(f"HTTP {status}: {message}")
        self.status = status
        self.message = message


class AcademicApiClient:
    """
    Cliente aiohttp de la API académica usado por el formulario de materias.

    Se usa como context manager; si recibe una sesión externa no la cierra.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout or settings.api_timeout_seconds)

    async def __aenter__(self) -> "AcademicApiClient":
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("AcademicApiClient debe usarse con 'async with'")
        return self._session

    async def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        async with self.session.get(url) as response:
            if response.status != 200:
                raise ApiError(response.status, await response.text())
            return await response.json(content_type=None)

    async def get_degrees(self) -> Any:
        return await self._get_json("/api/getDegrees")

    async def get_course_details(self) -> Any:
        return await self._get_json("/api/course-details")

    async def get_subjects(self) -> Any:
        return await self._get_json("/api/subjects")

    async def get_professors(self) -> List[Professor]:
        data = await self._get_json("/api/professors")
        return [Professor.model_validate(p) for p in data]

    async def update_professor_classes(self, professor_id: str, classes: str) -> Any:
        """El resultado lo indica `success` en el cuerpo, no el status HTTP"""
        url = f"{self.base_url}/api/professors"
        payload = {"professorId": professor_id, "classes": classes}
        async with self.session.post(url, json=payload) as response:
            logger.debug(f"POST {url} -> {response.status}")
            data = await response.json(content_type=None)
            if not isinstance(data, dict) or not data.get("success"):
                error = data.get("error") if isinstance(data, dict) else None
                raise ApiError(response.status, error or "No se pudieron actualizar las materias")
            return data
