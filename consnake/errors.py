"""Error types."""


class ConsnakeError(Exception):
    pass


class FatalResourceError(ConsnakeError):
    """A resource the session cannot run without could not be acquired.

    Raised for frame-buffer allocation failures and unusable consoles. The
    terminal is restored and the process exits non-zero; nothing is retried.
    """
