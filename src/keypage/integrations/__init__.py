"""
Web framework integrations for keypage.

Imported lazily so that keypage itself does not require FastAPI.
"""

__all__ = [
    "get_fastapi_integration",
]


def get_fastapi_integration():
    """Return the FastAPI integration module (requires ``keypage[fastapi]``)."""
    from keypage.integrations import fastapi
    return fastapi
