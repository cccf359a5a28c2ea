"""
vcloud-rest exceptions
"""


class VCloudError(Exception):
    """Base exception for all vcloud-rest errors"""
    def __init__(self, message, code=None, details=None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class AuthenticationMissingError(VCloudError):
    """No session token or JWT could be resolved for the request"""
    pass


class RequestFailedError(VCloudError):
    """Transport or HTTP-level failure"""

    @property
    def item(self):
        """Resource the failure relates to, when known"""
        return self.details.get('uri')


class NoVersionsAvailableError(VCloudError):
    """Version discovery returned no non-deprecated version"""
    pass


class TaskFailedError(VCloudError):
    """Task finished in error, canceled or aborted state"""
    pass


class TaskTimeoutError(VCloudError):
    """Task budget exhausted before a terminal status was reported"""
    pass


class NoTaskToAwait(UserWarning):
    """Wait for task was requested but the response carried no task"""
    pass
