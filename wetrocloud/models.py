"""
Pydantic schemas for Wetrocloud API request payloads.

Collection Schemas:
- CreateCollectionRequest, DeleteCollectionRequest
- QueryCollectionRequest, ChatCollectionRequest

Resource Schemas:
- InsertResourceRequest, RemoveResourceRequest, CategorizeResourceRequest

Generation Schemas:
- TextGenerationRequest, ImageToTextRequest
- MarkdownConverterRequest, TranscriptRequest

Which fields go on the wire as null and which are omitted is decided by the
client when it dumps each model, not here.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field


# =============================================================================
# Collection Schemas
# =============================================================================


class CreateCollectionRequest(BaseModel):
    """Request for creating a collection."""

    collection_id: Optional[str] = Field(
        None, description="Unique identifier for the collection"
    )


class DeleteCollectionRequest(BaseModel):
    """Request for deleting a collection."""

    collection_id: str = Field(..., description="Collection to delete")


class QueryCollectionRequest(BaseModel):
    """Request for querying a collection."""

    collection_id: str = Field(..., description="Collection to query")
    request_query: str = Field(..., description="Query submitted to the collection")
    json_schema: Optional[Union[str, dict[str, Any]]] = Field(
        None, description="JSON schema for a structured response"
    )
    json_schema_rules: Optional[Union[str, list[Any], dict[str, Any]]] = Field(
        None, description="Rules applied to the JSON schema"
    )


class ChatCollectionRequest(BaseModel):
    """Request for chatting with a collection."""

    collection_id: str = Field(..., description="Collection to chat with")
    message: str = Field(..., description="Message submitted to the collection")
    chat_history: Optional[Union[str, list[dict[str, Any]]]] = Field(
        None, description="Previous turns between user and system"
    )


# =============================================================================
# Resource Schemas
# =============================================================================


class InsertResourceRequest(BaseModel):
    """Request for inserting a resource into a collection."""

    collection_id: str = Field(..., description="Target collection")
    resource: str = Field(..., description="Resource content, URL or file link")
    type: str = Field(..., description="Resource type, e.g. 'web', 'file', 'text'")


class RemoveResourceRequest(BaseModel):
    """Request for removing a resource from a collection."""

    collection_id: str = Field(..., description="Collection the resource belongs to")
    resource_id: str = Field(..., description="Resource to remove")


class CategorizeResourceRequest(BaseModel):
    """Request for categorizing a resource."""

    resource: str = Field(..., description="Resource to categorize")
    type: str = Field(..., description="Resource type")
    json_schema: Union[str, dict[str, Any]] = Field(
        ..., description="JSON schema for the category output"
    )
    categories: Union[str, list[str]] = Field(
        ..., description="Candidate categories"
    )
    prompt: str = Field(..., description="Instruction for categorization")


# =============================================================================
# Generation Schemas
# =============================================================================


class TextGenerationRequest(BaseModel):
    """Request for text generation. Sent as multipart form fields."""

    messages: list[Any] = Field(
        ..., description="Chat messages, each with 'role' and 'content'"
    )
    model: str = Field(..., description="Model identifier")


class ImageToTextRequest(BaseModel):
    """Request for extracting text or answers from an image."""

    image_url: str = Field(..., description="Public URL of the image")
    request_query: str = Field(..., description="Question about the image")


class MarkdownConverterRequest(BaseModel):
    """Request for converting a resource to markdown."""

    link: str = Field(..., description="Link to the resource")
    resource_type: Literal["file", "web", "image"] = Field(
        ..., description="Kind of resource behind the link"
    )


class TranscriptRequest(BaseModel):
    """Request for extracting a transcript."""

    link: str = Field(..., description="Link to the media")
    resource_type: str = Field("youtube", description="Media source type")
