class RemoteCallError(Exception):
    """Raised when a call to the remote model fails or returns unusable data."""

    pass
