class LinkServiceError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ConfigurationError(LinkServiceError):
    status_code = 500


class AuthError(LinkServiceError):
    status_code = 401


class ValidationError(LinkServiceError):
    status_code = 400


class ConflictError(LinkServiceError):
    status_code = 409


class NotFoundError(LinkServiceError):
    status_code = 404


class MethodNotSupportedError(LinkServiceError):
    status_code = 405


class StoreError(LinkServiceError):
    status_code = 500
