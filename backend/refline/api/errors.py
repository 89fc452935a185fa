"""Map pipeline errors onto HTTP responses."""

from fastapi import HTTPException

from refline.core.errors import RefLineError


def http_error(exc: RefLineError) -> HTTPException:
    return HTTPException(422, detail=[{"message": str(exc), "type": type(exc).__name__}])
