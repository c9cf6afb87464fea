"""Domain-specific errors for bluectl."""


class BluectlError(Exception):
    """Base error for bluectl."""


class SettingsLoadError(BluectlError):
    """Raised when reading a settings file fails."""


class SettingsValidationError(BluectlError):
    """Raised when a settings file does not conform to schema or semantics."""


class DiscoveryStateError(BluectlError):
    """Base error for discovery precondition violations."""


class DiscoveryInProgressError(DiscoveryStateError):
    """Raised when starting discovery while the adapter is already discovering."""


class DiscoveryNotStartedError(DiscoveryStateError):
    """Raised when stopping discovery while the adapter is not discovering."""


class WrongParameterError(DiscoveryStateError):
    """Raised when discovery options are not a mapping."""


class LookupMissError(BluectlError):
    """Base error for bus objects that are not currently present."""


class AdapterNotFoundError(LookupMissError):
    """Raised when the requested adapter is not exposed by BlueZ."""


class DeviceNotFoundError(LookupMissError):
    """Raised when a peer is not among the adapter's current children."""


class OperationTimeoutError(BluectlError):
    """Raised when waiting for a peer exceeds its deadline."""


class TransportError(BluectlError):
    """Base transport error."""


class TransportConnectError(TransportError):
    """Raised when the system bus cannot be reached."""


class BusCallError(TransportError):
    """Raised when the bus answers a call with an error reply."""

    def __init__(self, error_name: str, message: str = "") -> None:
        self.error_name = error_name
        self.message = message
        super().__init__(f"{error_name}: {message}" if message else error_name)
