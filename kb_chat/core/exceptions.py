class ConfigError(Exception):
    """Raised when config loading or validation fails."""


class ChatRequestError(Exception):
    """Raised when the chat webhook returns a non-success status."""


class EmptyResponseError(ChatRequestError):
    """Raised when the chat webhook keeps answering with an empty body."""
