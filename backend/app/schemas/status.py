"""
Echo Server Backend: Response Schemas
=======================================

What:  The single JSON body shape every endpoint answers with.
How:   Route handlers return StatusResponse; the 404 and 500 handlers
       serialize the prebuilt NOT_FOUND and INTERNAL_ERROR instances.

    {"status": true,  "message": "Hello world, from /"}
    {"status": false, "message": "Not found"}
"""

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    """
    What:  Success flag plus a fixed human-readable message.
    Who:   Returned by the echo routes, the 404 handler and the error handler.
    """
    status: bool = Field(description="True for a successful exchange, false otherwise")
    message: str = Field(description="Fixed message describing the outcome")


NOT_FOUND = StatusResponse(status=False, message="Not found")
INTERNAL_ERROR = StatusResponse(status=False, message="Internal server error")
