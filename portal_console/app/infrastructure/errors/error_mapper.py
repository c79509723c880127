from portal_console.clients.portal_sdk.errors import APIError


class ErrorMapper:
    _KNOWN_CODES = {
        "TIMEOUT_ERROR": "The server took too long to respond. Try again.",
        "NETWORK_ERROR": "The portal API is unreachable. Check your connection.",
    }

    _STATUS_MESSAGES = {
        400: "The request was rejected. Check the filters and try again.",
        401: "Your session has expired. Log in again.",
        403: "You do not have permission for this operation.",
        404: "The requested record was not found.",
        422: "The request failed validation.",
        500: "The server failed to process the request.",
    }

    @classmethod
    def to_payload(cls, error: Exception) -> dict:
        if isinstance(error, APIError):
            status_code = error.status_code or -1
            message = cls._STATUS_MESSAGES.get(status_code)
            if message is None and status_code >= 500:
                message = cls._STATUS_MESSAGES[500]
            if message is None:
                message = cls._KNOWN_CODES.get(error.code, error.message)
            return {
                "code": error.code,
                "message": message,
                "details": error.details,
                "trace_id": error.trace_id,
                "status_code": error.status_code,
            }
        return {
            "code": "INTERNAL_ERROR",
            "message": str(error),
            "details": None,
            "trace_id": None,
            "status_code": None,
        }

    @classmethod
    def to_display_message(cls, error: Exception, context: str | None = None) -> str:
        payload = cls.to_payload(error)
        prefix = f"{context}: " if context else ""
        trace = f" (trace_id={payload['trace_id']})" if payload["trace_id"] else ""
        return f"{prefix}{payload['message']}{trace}"
