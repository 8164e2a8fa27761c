import math

import httpx
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

Number = Union[int, float]

# --- Fonctions utilitaires d'encodage des requêtes ---


def format_query_value(value: Any) -> str:
    """
    Convertit une valeur de paramètre en texte pour la query string.
    Un float entier est rendu sans décimale (100.0 -> '100').
    Un float non fini (inf, nan) est refusé.
    """
    if isinstance(value, bool):
        raise TypeError("Les booléens ne sont pas des valeurs de paramètre valides.")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Valeur non finie : {value!r}.")
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def quote_segment(value: str) -> str:
    # un segment ne doit jamais introduire de '/'
    return quote(value, safe="")


def build_request_path(path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Construit le chemin relatif 'path?k1=v1&k2=v2'.
    Les paramètres à None sont omis ; sans paramètre restant, aucun '?' n'est ajouté.
    """
    pairs = [(key, format_query_value(value)) for key, value in (params or {}).items() if value is not None]
    if not pairs:
        return path
    return f"{path}?{httpx.QueryParams(pairs)}"
