# tetra_channel/tetrio/api_client.py

import math
from typing import Optional
from tetra_channel.core.config import TETRIO_BASE_URL
from tetra_channel.core.exceptions import DisposedError, InvalidArgumentError
from tetra_channel.core.httpx_client import HTTPClient
from tetra_channel.core.logger import get_logger
from tetra_channel.core.utils import Number, build_request_path, quote_segment

logger = get_logger(__name__)

# Bornes et valeurs par défaut côté serveur
TR_MAX = 25000
TL_BEFORE_DEFAULT = 25000
TL_AFTER_DEFAULT = 0
XP_BEFORE_DEFAULT = 0
XP_AFTER_DEFAULT = 0
LEADERBOARD_LIMIT_DEFAULT = 50
NEWS_LIMIT_DEFAULT = 25
LIMIT_MIN = 1
LIMIT_MAX = 100


class TetrioClient:
    """
    Client pour l'API Tetra Channel de TETR.IO (https://ch.tetr.io).

    Chaque méthode retourne le corps JSON brut (str), sans désérialisation.

    Endpoints:
     - get_server_stats()                        api/general/stats
     - get_server_activity()                     api/general/activity
     - get_user_info(user)                       api/users/{user}
     - get_user_records(user)                    api/users/{user}/records
     - get_tl_leaderboard(...)                   api/users/lists/league
     - get_tl_leaderboard_export(country)        api/users/lists/league/all
     - get_xp_leaderboard(...)                   api/users/lists/xp
     - get_stream(stream)                        api/streams/{stream}
     - get_latest_news(limit)                    api/news
     - get_latest_news_in_stream(stream, limit)  api/streams/{stream}

    L'URL de base est fixe. Le client possède son HTTPClient (injecté ou non)
    et le ferme via aclose() ou en sortie de `async with`.
    Sans HTTPClient injecté, le constructeur lève RuntimeError si
    TETRIO_HTTP_TIMEOUT est invalide (voir core.config.get_http_timeout).
    Ne pas fermer le client pendant que des appels sont en cours.
    """

    BASE_URL = TETRIO_BASE_URL

    def __init__(self, http_client: Optional[HTTPClient] = None):
        # HTTPClient wrapper (testable / injectable)
        self.http = http_client if http_client is not None else HTTPClient(base_url=self.BASE_URL)
        self._closed = False

    # ---------------- Cycle de vie ----------------
    @property
    def closed(self) -> bool:
        return self._closed

    async def aclose(self):
        """Ferme le transport une seule fois ; les appels suivants sont sans effet."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Fermeture du client Tetra Channel")
        await self.http.aclose()

    async def __aenter__(self):
        self._ensure_open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def _ensure_open(self):
        if self._closed:
            raise DisposedError(type(self).__name__)

    # ---------------- Validation utilitaires ----------------
    @staticmethod
    def _validate_required(name: str, value: Optional[str]) -> str:
        if value is None or not isinstance(value, str) or not value.strip():
            raise InvalidArgumentError(name, f"`{name}` est obligatoire et ne peut pas être vide.")
        return value

    @staticmethod
    def _validate_number(name: str, value: Optional[Number], minimum: Number,
                         maximum: Optional[Number] = None):
        if value is None:
            return
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidArgumentError(name, f"`{name}` doit être un nombre : {value!r}.")
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidArgumentError(name, f"`{name}` doit être fini : {value!r}.")
        if value < minimum or (maximum is not None and value > maximum):
            bounds = f"entre {minimum} et {maximum}" if maximum is not None else f">= {minimum}"
            raise InvalidArgumentError(name, f"`{name}` hors bornes : {value} (doit être {bounds}).")

    @staticmethod
    def _validate_limit(limit: Optional[int]):
        if limit is None:
            return
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise InvalidArgumentError("limit", f"`limit` doit être un entier : {limit!r}.")
        if not (LIMIT_MIN <= limit <= LIMIT_MAX):
            raise InvalidArgumentError(
                "limit", f"`limit` hors bornes : {limit} (doit être entre {LIMIT_MIN} et {LIMIT_MAX}).")

    @staticmethod
    def _validate_exclusive(before: Optional[Number], before_default: Number,
                            after: Optional[Number], after_default: Number):
        # exclusivité : seulement si les deux s'écartent de leur valeur par défaut
        before_set = before is not None and before != before_default
        after_set = after is not None and after != after_default
        if before_set and after_set:
            raise InvalidArgumentError("before", "Les paramètres `before` et `after` ne peuvent pas être combinés.")

    @staticmethod
    def _normalize_country(country: Optional[str]) -> Optional[str]:
        """Code pays envoyé tel quel (espaces retirés) ; vide ou None = pas de filtre."""
        if country is None:
            return None
        if not isinstance(country, str):
            raise InvalidArgumentError("country", f"`country` doit être une chaîne : {country!r}.")
        country = country.strip()
        return country or None

    @staticmethod
    def _unless_default(value, default):
        """Une valeur égale au défaut serveur n'est pas envoyée."""
        return None if value is None or value == default else value

    # ---------------- Requête ----------------
    async def _request(self, path: str) -> str:
        logger.debug("GET %s", path)
        return await self.http.get(path)

    # ---------------- Endpoints ----------------
    async def get_server_stats(self) -> str:
        """Statistiques générales du serveur."""
        self._ensure_open()
        return await self._request("api/general/stats")

    async def get_server_activity(self) -> str:
        """Activité générale du serveur."""
        self._ensure_open()
        return await self._request("api/general/activity")

    async def get_user_info(self, user: str) -> str:
        """
        Données détaillées d'un utilisateur.
        :param user: nom d'utilisateur ou ID (insensible à la casse)
        """
        self._ensure_open()
        user = self._validate_required("user", user)
        return await self._request(f"api/users/{quote_segment(user.lower())}")

    async def get_user_records(self, user: str) -> str:
        """
        Records solo (40 LINES, BLITZ, ...) d'un utilisateur.
        :param user: nom d'utilisateur ou ID (insensible à la casse)
        """
        self._ensure_open()
        user = self._validate_required("user", user)
        return await self._request(f"api/users/{quote_segment(user.lower())}/records")

    async def get_tl_leaderboard(self, before: Optional[Number] = None, after: Optional[Number] = None,
                                 limit: Optional[int] = None, country: Optional[str] = None) -> str:
        """
        Une page du classement TETRA LEAGUE.

        :param before: borne basse en TR, pour paginer vers le haut (inverse l'ordre de recherche)
        :param after: borne haute en TR, pour paginer vers le bas
        :param limit: nombre d'entrées, entre 1 et 100 (50 par défaut)
        :param country: code pays ISO 3166-1 ; vide ou None = pas de filtre
        """
        self._ensure_open()
        self._validate_number("before", before, 0, TR_MAX)
        self._validate_number("after", after, 0, TR_MAX)
        self._validate_limit(limit)
        self._validate_exclusive(before, TL_BEFORE_DEFAULT, after, TL_AFTER_DEFAULT)
        country = self._normalize_country(country)

        path = build_request_path("api/users/lists/league", {
            "before": self._unless_default(before, TL_BEFORE_DEFAULT),
            "after": self._unless_default(after, TL_AFTER_DEFAULT),
            "limit": self._unless_default(limit, LEADERBOARD_LIMIT_DEFAULT),
            "country": country,
        })
        return await self._request(path)

    async def get_tl_leaderboard_export(self, country: Optional[str] = None) -> str:
        """
        Tous les joueurs du classement TETRA LEAGUE correspondant au filtre.
        Endpoint coûteux côté serveur : à utiliser avec parcimonie.
        """
        self._ensure_open()
        country = self._normalize_country(country)
        path = build_request_path("api/users/lists/league/all", {"country": country})
        return await self._request(path)

    async def get_xp_leaderboard(self, before: Optional[Number] = None, after: Optional[Number] = None,
                                 limit: Optional[int] = None, country: Optional[str] = None) -> str:
        """
        Une page du classement XP.

        :param before: borne basse en XP, pour paginer vers le haut (inverse l'ordre de recherche)
        :param after: borne haute en XP, pour paginer vers le bas (infinie par défaut)
        :param limit: nombre d'entrées, entre 1 et 100 (50 par défaut)
        :param country: code pays ISO 3166-1 ; vide ou None = pas de filtre
        """
        self._ensure_open()
        self._validate_number("before", before, 0)
        self._validate_number("after", after, 0)
        self._validate_limit(limit)
        self._validate_exclusive(before, XP_BEFORE_DEFAULT, after, XP_AFTER_DEFAULT)
        country = self._normalize_country(country)

        path = build_request_path("api/users/lists/xp", {
            "before": self._unless_default(before, XP_BEFORE_DEFAULT),
            "after": self._unless_default(after, XP_AFTER_DEFAULT),
            "limit": self._unless_default(limit, LEADERBOARD_LIMIT_DEFAULT),
            "country": country,
        })
        return await self._request(path)

    async def get_stream(self, stream: str) -> str:
        """
        Records d'un Stream (liste de records de longueur fixe).
        :param stream: ID du stream, ex. '40l_global'
        """
        self._ensure_open()
        stream = self._validate_required("stream", stream)
        return await self._request(f"api/streams/{quote_segment(stream)}")

    async def get_latest_news(self, limit: Optional[int] = None) -> str:
        """Dernières news, tous streams confondus."""
        self._ensure_open()
        self._validate_limit(limit)
        path = build_request_path("api/news", {"limit": self._unless_default(limit, NEWS_LIMIT_DEFAULT)})
        return await self._request(path)

    async def get_latest_news_in_stream(self, stream: str, limit: Optional[int] = None) -> str:
        """
        Dernières news d'un stream.
        :param stream: 'global' ou 'user_{userID}'
        :param limit: nombre d'entrées, entre 1 et 100 (25 par défaut)
        """
        self._ensure_open()
        stream = self._validate_required("stream", stream)
        self._validate_limit(limit)
        path = build_request_path(f"api/streams/{quote_segment(stream)}",
                                  {"limit": self._unless_default(limit, NEWS_LIMIT_DEFAULT)})
        return await self._request(path)
