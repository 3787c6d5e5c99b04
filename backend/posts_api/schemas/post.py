"""
Posts API: Post Request/Response Schemas
==========================================

What:  Pydantic models defining the JSON contract of the /posts resource.
How:   FastAPI parses request bodies into PostPayload and serializes
       handler results through PostResponse.

The payload is permissive: both fields are optional and untyped. Values are
passed straight through to the store, which is the only place a missing,
null or unstorable field gets rejected.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class PostPayload(BaseModel):
    """
    What:  Body of POST /posts and PUT /posts/{id}.

    Unknown keys are ignored. Only the fields the client actually sent end
    up in the SQL statement (see `to_values`).
    """
    title: Optional[Any] = Field(default=None, description="Post title")
    contents: Optional[Any] = Field(default=None, description="Post body text")

    def to_values(self) -> Dict[str, Any]:
        """Column values for INSERT/UPDATE, limited to fields present in the request."""
        return self.model_dump(exclude_unset=True)


class PostResponse(BaseModel):
    """
    What:  A stored post as returned by every read and write endpoint.

    Example:
        {"id": 1, "title": "Hello", "contents": "World"}
    """
    id: int = Field(description="Store-generated identifier")
    title: str = Field(description="Post title")
    contents: str = Field(description="Post body text")

    model_config = {"from_attributes": True}
