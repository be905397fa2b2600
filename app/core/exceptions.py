# app/core/exceptions.py
"""
Error taxonomy for the aigc feature.

Every error carries an ``errcode`` (the value placed in the JSON envelope)
and an HTTP status. They are raised from the services and turned into
``{"errcode": ..., "message": ...}`` by the handlers registered in app.main.
"""


class AigcError(Exception):
    errcode = 1
    status_code = 400
    default_message = "request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AigcError):
    errcode = 4000
    status_code = 400
    default_message = "invalid parameter"


class PermissionDenied(AigcError):
    errcode = 4003
    status_code = 403
    default_message = "permission denied"


class NotFound(AigcError):
    errcode = 4004
    status_code = 404
    default_message = "not found"


class StorageError(AigcError):
    errcode = 5000
    status_code = 500
    default_message = "storage failure"


class InferenceError(AigcError):
    errcode = 5002
    status_code = 502
    default_message = "failed to call inference server"
