# This project was developed with assistance from AI tools.
"""Error body returned by every API failure (RFC 7807 Problem Details)."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Problem Details (https://datatracker.ietf.org/doc/html/rfc7807).

    ``code`` is set when the workflow engine rejected the input (for example
    ``unknown_stage``) so clients can branch without parsing ``detail``.
    """

    type: str = Field(default="about:blank", description="Problem type URI.")
    title: str = Field(description="HTTP reason phrase for the status.")
    status: int = Field(description="HTTP status code, repeated in the body.")
    detail: str = Field(default="", description="What went wrong with this request.")
    code: str | None = Field(default=None, description="Engine error kind, if any.")
    request_id: str = Field(
        default="",
        description="Caller's X-Request-ID, or a generated one, for log correlation.",
    )
