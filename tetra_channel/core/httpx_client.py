import httpx
from typing import Optional
from .config import get_http_timeout, get_user_agent
from .exceptions import TransportError
from .logger import get_logger

logger = get_logger(__name__)


class HTTPClient:
    """Client HTTP asynchrone basé sur httpx, retourne le corps brut des réponses."""

    def __init__(self, base_url: str, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        # Le slash final est conservé : les endpoints sont relatifs à la base
        self.base_url = base_url.rstrip("/") + "/"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else get_http_timeout(),
            headers={"User-Agent": get_user_agent()},
            transport=transport,
        )

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def get(self, endpoint: str) -> str:
        url = endpoint.lstrip('/')

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"HTTPX Error on {url}: {e}")
            raise TransportError(f"Erreur HTTPX: {e}") from e

        logger.debug(f"⬅️ Response {response.status_code}: {response.text[:300]}")

        if not response.is_success:
            logger.error(f"API Error {response.status_code}: {response.text[:300]}")
            raise TransportError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        return response.text

    async def aclose(self):
        """Libère le pool de connexions (sans effet s'il est déjà fermé)."""
        if not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
