#!/usr/bin/env python3
"""
Script de démarrage du serveur de quiz musical
"""
import logging
import sys

import uvicorn

from musicquiz.config import Config


def setup_logging():
    """Configure le système de logging"""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Réduire le bruit des requêtes HTTP sortantes
    logging.getLogger("urllib3").setLevel(logging.WARNING)


if __name__ == "__main__":
    setup_logging()
    logger = logging.getLogger("musicquiz")
    try:
        Config.validate()
    except ValueError as e:
        logger.error(f"Erreur de configuration: {e}")
        sys.exit(1)

    from musicquiz.main import app

    logger.info("🎵 Démarrage du serveur de quiz musical...")
    logger.info(f"🌐 API disponible sur: http://localhost:{Config.PORT}/api/state")

    uvicorn.run(
        app,
        host=Config.HOST,
        port=Config.PORT,
        log_level=Config.LOG_LEVEL.lower()
    )
