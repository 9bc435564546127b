"""Domain models for authenticated users."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """The authenticated identity behind a request."""

    id: str
    name: str = ""
    email: str = ""
    photo: str = ""
