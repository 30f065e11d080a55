"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business rules that span entities or need a
    repository; entities themselves stay plain immutable data.
    """

    pass
