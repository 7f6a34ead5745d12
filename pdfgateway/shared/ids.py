"""ID generation."""

from uuid import uuid4


def generate_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:16]}"


def generate_request_id() -> str:
    return generate_id("req")
