class ExchangeBusyError(RuntimeError):
    """Raised when an exchange is started while another is still in flight."""


class NoProviderError(RuntimeError):
    """Raised by callers that require a provider when none is selected."""
