"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class MissingCredentialsError(InterfaceError):
    """The request carried no bearer token or auth cookie."""

    pass
