"""
notifications/exceptions.py

Push relay failures as DRF exceptions, so a view can let them propagate and
the operator gets {"detail": ...} with a meaningful status and code.

Taxonomy
- RelayConfigurationError  relay URL or admin key missing (503)
- RelayUnavailable         network error / timeout; retried only by the next user action
- RelayPermissionError     relay rejected our key (401/403 upstream)
- RelayResponseError       body is not JSON (e.g. an HTML error page)
- RelayRequestError        relay answered with {"error": ...} or a non-2xx JSON body
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class PushRelayError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Push relay request failed."
    default_code = "push_relay_error"

    def __init__(self, detail=None, code=None, upstream_status=None):
        super().__init__(detail=detail, code=code)
        self.upstream_status = upstream_status


class RelayConfigurationError(PushRelayError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Push relay is not configured."
    default_code = "push_relay_not_configured"


class RelayUnavailable(PushRelayError):
    default_detail = "Push relay could not be reached. Please try again."
    default_code = "push_relay_unavailable"


class RelayPermissionError(PushRelayError):
    default_detail = "Push relay rejected the API key."
    default_code = "push_relay_forbidden"


class RelayResponseError(PushRelayError):
    default_detail = "Push relay returned an unexpected response."
    default_code = "push_relay_bad_response"


class RelayRequestError(PushRelayError):
    default_detail = "Push relay reported an error."
    default_code = "push_relay_request_failed"
