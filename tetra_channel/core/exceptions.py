# tetra_channel/core/exceptions.py
from typing import Optional


class APIError(Exception):
    """Erreur racine de la librairie Tetra Channel"""
    pass


class DisposedError(APIError):
    """Appel d'une méthode sur un client déjà fermé."""

    def __init__(self, owner: str = "TetrioClient"):
        self.owner = owner
        super().__init__(f"{owner} est fermé : aucun appel n'est possible après aclose().")


class InvalidArgumentError(APIError, ValueError):
    """Paramètre manquant, vide, hors bornes ou combiné avec un paramètre exclusif."""

    def __init__(self, param: str, message: Optional[str] = None):
        self.param = param
        super().__init__(message or f"Paramètre invalide : {param}")


class TransportError(APIError):
    """Erreur de connexion ou code de statut non géré (4xx, 5xx)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)
