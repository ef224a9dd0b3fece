"""
Exceptions raised by the service insights graph builder.

Both concrete errors point at a bug or misconfiguration in a collaborator,
never at bad user input, so callers should let them propagate.
"""


class ServiceInsightsError(Exception):
    """Base class for service insights errors."""


class SchemaError(ServiceInsightsError, ValueError):
    """A node or link was constructed without one of its required properties."""

    def __init__(self, property_name: str, factory: str):
        self.property_name = property_name
        self.factory = factory
        super().__init__(f"Missing required property {property_name} when calling {factory}()")


class ConfigurationError(ServiceInsightsError):
    """The span type matcher chain is not usable."""
