class ExamVaultError(Exception):
    """Base error carrying the message shown to the user."""

    status_code = 500
    status = "error"

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"status": self.status, "message": self.message}


class ValidationError(ExamVaultError):
    status_code = 400


class AuthError(ExamVaultError):
    status_code = 401


class NotFoundError(ExamVaultError):
    status_code = 404
    status = "not_found"

    def to_dict(self):
        data = super().to_dict()
        data["home"] = "/"
        return data


class ConflictError(ExamVaultError):
    status_code = 409


class StorageError(ExamVaultError):
    status_code = 500
