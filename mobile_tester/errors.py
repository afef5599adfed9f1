"""
Error taxonomy shared by the executor, runner, recorder and lifecycle layers
"""


class MobileTesterError(Exception):
    """Base class for every error raised by the tester itself."""


class ElementNotFoundError(MobileTesterError):
    """The driver could not locate the target element."""


class ActionFailedError(MobileTesterError):
    """A located element rejected the requested action."""


class AssertionMismatchError(MobileTesterError):
    """The terminal assertion observed something other than expected."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected: {expected}. Actual: {actual}")


class DriverAcquisitionError(MobileTesterError):
    """No automation session could be established. Fatal to the run."""


class ReportWriteError(MobileTesterError):
    """The report artifact could not be persisted."""


class AppResetWarning(UserWarning):
    """A best-effort application reset sub-step failed."""
