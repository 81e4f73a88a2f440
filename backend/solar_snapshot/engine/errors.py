"""
Error taxonomy for irradiance retrieval and parsing.

Every error carries a stable ``code`` so the API layer can report distinct
categories (bad request, missing configuration, upstream down, no data,
unusable payload) without collapsing them into one generic message.
"""

from typing import Optional


class SolarDataError(Exception):
    """Base class for all solar-resource errors."""

    code = "solar_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"error": self.code, "message": self.message}


class InvalidInputError(SolarDataError):
    code = "invalid_input"


class ConfigurationError(SolarDataError):
    code = "missing_configuration"


class UpstreamQueryFailure(SolarDataError):
    """The catalog query or a series download did not succeed.

    ``status`` is the upstream HTTP status, or None when the request never got
    a response (connection error, timeout).
    """

    code = "upstream_failure"

    def __init__(self, message: str, status: Optional[int] = None, detail: str = ""):
        super().__init__(message)
        self.status = status
        self.detail = detail

    def to_detail(self) -> dict:
        body = super().to_detail()
        body["status"] = self.status
        body["detail"] = self.detail
        return body


class NoDataAvailableError(SolarDataError):
    code = "no_data"


class NoRecentYearError(SolarDataError):
    code = "no_recent_year"


# Payload errors: the series was retrieved but is structurally unusable


class SeriesParseError(SolarDataError, ValueError):
    code = "unparseable_series"


class InsufficientDataError(SeriesParseError):
    code = "insufficient_data"


class HeaderNotFoundError(SeriesParseError):
    code = "header_not_found"


class ColumnNotFoundError(SeriesParseError):
    code = "column_not_found"


class NoValidRecordsError(SeriesParseError):
    code = "no_valid_records"
