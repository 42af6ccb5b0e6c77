"""
Pydantic schema for song records.

A song is a flat record of four scalar fields.  None of them is
required: a field missing from the request body is stored and
returned as ``null``.  ``published`` is kept as free text (the client
sends dates such as ``1/1/2009``).
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Song(BaseModel):
    """Schema for reading and creating a song."""

    artist: Optional[str] = Field(None, description="Performing artist")
    track: Optional[str] = Field(None, description="Track title")
    rank: Optional[int] = Field(None, description="Chart rank; not unique")
    published: Optional[str] = Field(None, description="Publication date as entered by the client")

    @field_validator("rank", mode="before")
    @classmethod
    def blank_rank_is_none(cls, v):
        # HTML forms submit an empty string for an untouched number input.
        if isinstance(v, str) and not v.strip():
            return None
        return v
