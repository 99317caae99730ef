"""Custom exceptions for Metaobject synchronization."""


class DefinitionBootstrapError(Exception):
    """Raised when metaobjectDefinitionCreate returns userErrors."""

    def __init__(self, user_errors: list[dict]):
        self.user_errors = user_errors
        messages = ", ".join(e.get("message", str(e)) for e in user_errors)
        super().__init__(f"Failed to create definition: {messages}")
