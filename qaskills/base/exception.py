class ConfigurationError(Exception):
    def __init__(self, setting: str, message: str = None):
        self.setting = setting
        self.message = message or f"{setting} must be set"
        super().__init__(self.message)

    def __str__(self):
        return f"ConfigurationError: {self.message}"


class DataNotFoundError(Exception):
    def __init__(self, entity_name: str, identifier: str, message: str = None):
        self.entity_name = entity_name
        self.identifier = identifier
        self.message = message or f"{entity_name} with identifier {identifier} not found."
        super().__init__(self.message)

    def __str__(self):
        return f"DataNotFoundError: {self.message}"


class DatabaseConnectionError(Exception):
    def __init__(self, message: str = "Unable to connect to the database.", details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        return f"DatabaseConnectionError: {self.message} Details: {self.details or 'No further details provided.'}"


class AuthenticationError(Exception):
    def __init__(self, message: str = "Unauthorized"):
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return f"AuthenticationError: {self.message}"


class InvalidTokenError(Exception):
    """Raised by callers that need an exception for a rejected unsubscribe token."""

    def __init__(self, message: str = "Invalid or expired unsubscribe token"):
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return f"InvalidTokenError: {self.message}"
