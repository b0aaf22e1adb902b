class GpmError(Exception):
    """Fatal error, reported before any dependency is touched."""

    pass


class EnvironmentMisconfigured(GpmError):
    pass


class ManifestNotFound(GpmError):
    pass
