"""Configuration du serveur de quiz musical"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Charger les variables d'environnement
load_dotenv()

ANSWER_MODES = ("artist", "song", "both")


class Config:
    """Configuration centralisée"""

    # Catalogue Deezer
    DEEZER_BASE_URL: str = os.getenv("DEEZER_BASE_URL", "https://api.deezer.com")
    DEEZER_TIMEOUT: int = int(os.getenv("DEEZER_TIMEOUT", "15"))
    PLAYLIST_LIMIT: int = int(os.getenv("PLAYLIST_LIMIT", "50"))

    # Partie
    ROUND_DURATION: int = int(os.getenv("ROUND_DURATION", "30"))  # secondes par morceau
    DEFAULT_MAX_POINTS: int = int(os.getenv("DEFAULT_MAX_POINTS", "100"))
    DEFAULT_ANSWER_MODE: str = os.getenv("DEFAULT_ANSWER_MODE", "both")

    # Serveur
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "4000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # Origines autorisées pour Socket.IO, séparées par des virgules ("*" = toutes)
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    @classmethod
    def cors_origins(cls) -> str | list[str]:
        if cls.CORS_ORIGINS.strip() == "*":
            return "*"
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(",") if origin.strip()]

    @classmethod
    def validate(cls) -> bool:
        """Valide que la configuration est correcte"""
        if cls.ROUND_DURATION <= 0:
            raise ValueError("ROUND_DURATION doit être positif")
        if cls.PLAYLIST_LIMIT <= 0:
            raise ValueError("PLAYLIST_LIMIT doit être positif")
        if cls.DEFAULT_MAX_POINTS <= 0:
            raise ValueError("DEFAULT_MAX_POINTS doit être positif")
        if cls.DEEZER_TIMEOUT <= 0:
            raise ValueError("DEEZER_TIMEOUT doit être positif")
        if cls.DEFAULT_ANSWER_MODE not in ANSWER_MODES:
            raise ValueError(f"DEFAULT_ANSWER_MODE inconnu: {cls.DEFAULT_ANSWER_MODE}")
        return True
