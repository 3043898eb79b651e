"""Custom exception hierarchy for the clipboard-ai CLI."""


class AppError(Exception):
    """Base exception for app-specific failures."""


class ResolutionError(LookupError, AppError):
    """Action name not found in the registry."""


class EmptyInputError(ValueError, AppError):
    """Acquired input text is empty."""


class PolicyBlocked(AppError):
    """Safe-mode gate denied a cloud provider call."""


class ExecutionError(AppError):
    """An action's run capability failed."""


class HistoryWriteError(AppError):
    """Appending a history record failed."""


class RegistryConstructionError(ValueError, AppError):
    """Duplicate action id or alias in a static action set."""


class UnsupportedProviderError(ValueError, AppError):
    """Provider configuration cannot be used to build a client."""


class AgentError(AppError):
    """Base class for agent IPC failures."""


class AgentNotRunningError(AgentError):
    """Agent socket endpoint is absent."""


class AgentNotRespondingError(AgentError):
    """Agent socket exists but refuses connections."""


class AgentRequestError(AgentError):
    """Transport, status, or parse failure talking to the agent."""
