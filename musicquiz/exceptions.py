"""Exceptions de la couche de transport (Socket.IO).

Le moteur de partie ne lève rien : les erreurs de configuration ou de saisie
y sont des états dégénérés. Seuls les payloads clients mal formés remontent.
"""


class QuizError(Exception):
    """Exception de base du serveur de quiz"""

    def __init__(self, message: str = "Une erreur s'est produite"):
        self.message = message
        super().__init__(self.message)


class InvalidPayload(QuizError):
    """Payload client invalide"""

    def __init__(self, field: str = "", message: str = ""):
        if not message:
            message = f"Valeur invalide pour '{field}'" if field else "Payload invalide"
        super().__init__(message)
        self.field = field
