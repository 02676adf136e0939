class LeadforgeError(Exception):
    pass


class ConfigurationError(LeadforgeError):
    """Missing or invalid credentials. Raised before any network call."""


class SearchProviderError(LeadforgeError):
    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"Search API error {status}: {message}")


class EnrichmentError(LeadforgeError):
    pass


class MailerError(LeadforgeError):
    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"Brevo error {status}: {message}")
