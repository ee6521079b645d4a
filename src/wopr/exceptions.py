"""
Custom exceptions for the WOPR terminal.
"""


class WoprError(Exception):
    """Base exception for all WOPR related errors."""
    pass


class ConfigurationError(WoprError):
    """Raised when environment or command line configuration is invalid."""
    pass


class ServerBindError(WoprError):
    """Raised when the network listener cannot be opened."""
    pass


class SessionRegistryError(WoprError):
    """Raised when the session registry is used inconsistently."""
    pass


class UnregisteredTransportError(SessionRegistryError):
    """Raised when a transport without a registry entry is looked up."""
    pass


class DuplicateRegistrationError(SessionRegistryError):
    """Raised when a transport is registered twice."""
    pass
