# Errors raised by the monitor itself. A monitored host being down is not an
# error here: the probe turns that into a result record.


class SiteMonitorError(Exception):
    """Base class for failures of the monitor's own machinery."""


class ConfigurationError(SiteMonitorError):
    """Settings are missing or malformed. Raised at startup, before the loop runs."""


class StorePersistenceError(SiteMonitorError):
    """The table store could not be created or a row could not be inserted."""
