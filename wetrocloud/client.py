"""
HTTP client for the Wetrocloud API.

Every operation goes through the same request/response layer:
- the payload is built from a pydantic request schema
- the request is sent as a JSON body, multipart form fields, or with no body
- the body is decoded into a JSON object whatever the HTTP status is

Error statuses are not raised. The API reports business failures inside the
returned envelope (usually a ``success`` field) and callers inspect it.
"""

import json
import logging
import os
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from wetrocloud import __version__
from wetrocloud.exceptions import (
    ConfigurationError,
    EncodingError,
    InvalidRequestError,
    ResponseShapeError,
    TransportFailure,
)
from wetrocloud.models import (
    CategorizeResourceRequest,
    ChatCollectionRequest,
    CreateCollectionRequest,
    DeleteCollectionRequest,
    ImageToTextRequest,
    InsertResourceRequest,
    MarkdownConverterRequest,
    QueryCollectionRequest,
    RemoveResourceRequest,
    TextGenerationRequest,
    TranscriptRequest,
)
from wetrocloud.settings import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientSettings

logger = logging.getLogger(__name__)

USER_AGENT = f"wetrocloud-python/{__version__}"


def _build_payload(schema: type[BaseModel], **fields: Any) -> BaseModel:
    """Validate operation input against its request schema."""
    try:
        return schema(**fields)
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid {schema.__name__}: {e}") from e


class WetrocloudClient:
    """
    Client for the Wetrocloud API.

    Usage:
        with WetrocloudClient(api_key="...") as client:
            created = client.create_collection()
            client.insert_resource(
                created["collection_id"], "https://example.com", "web"
            )
            answer = client.query_collection(
                created["collection_id"], "What is this page about?"
            )
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Wetrocloud API key
            base_url: API base URL, trailing slashes are ignored
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for testing
            user_agent: Overrides the default client identifier

        Raises:
            ConfigurationError: If the API key is empty or the base URL invalid
        """
        if not isinstance(api_key, str) or not api_key.strip():
            raise ConfigurationError("API key cannot be empty")

        if not isinstance(base_url, str) or not base_url.rstrip("/"):
            raise ConfigurationError("Base URL cannot be empty")
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

        try:
            self._client = httpx.Client(
                base_url=self._base_url,
                timeout=timeout,
                headers={
                    "Authorization": f"Token {api_key}",
                    "User-Agent": user_agent or USER_AGENT,
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                transport=transport,
            )
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid base URL {base_url!r}: {e}") from e

    @classmethod
    def from_settings(
        cls,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "WetrocloudClient":
        """
        Create a client from settings.

        Args:
            settings: Client settings (defaults to WETROCLOUD_* environment)
            transport: Optional httpx transport

        Returns:
            Configured WetrocloudClient
        """
        settings = settings or ClientSettings()
        if not settings.api_key:
            raise ConfigurationError(
                "WETROCLOUD_API_KEY environment variable is required"
            )
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=transport,
            user_agent=settings.user_agent or None,
        )

    @property
    def base_url(self) -> str:
        """Base URL without trailing slash."""
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def http_client(self) -> httpx.Client:
        """Underlying httpx client."""
        return self._client

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "WetrocloudClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"WetrocloudClient(base_url={self._base_url!r})"

    # =========================================================================
    # Request/Response Layer
    # =========================================================================

    def _request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        json_body: Optional[dict[str, Any]] = None,
        multipart: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """
        Send a request and decode its envelope.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            action: Human-readable operation name used in error messages
            json_body: Mapping sent as a JSON body
            multipart: String fields sent as multipart/form-data parts

        Returns:
            Decoded top-level JSON object

        Raises:
            EncodingError: If the body cannot be encoded
            TransportFailure: If the request could not be completed
            ResponseShapeError: If the response is not a JSON object
        """
        kwargs: dict[str, Any] = {}
        if multipart is not None:
            # An explicit boundary replaces the default JSON content type.
            boundary = os.urandom(16).hex()
            kwargs["files"] = {name: (None, value) for name, value in multipart.items()}
            kwargs["headers"] = {
                "Content-Type": f"multipart/form-data; boundary={boundary}"
            }
        elif json_body is not None:
            kwargs["json"] = json_body

        try:
            request = self._client.build_request(method, path, **kwargs)
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Failed to encode request to {action}: {e}") from e

        try:
            response = self._client.send(request)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportFailure(f"Failed to {action}: {e}") from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        return self._decode_response(response)

    def _decode_response(self, response: httpx.Response) -> dict[str, Any]:
        """Decode a response body, which must be a JSON object."""
        body = response.text
        try:
            decoded = json.loads(body)
        except (ValueError, RecursionError):
            decoded = None

        if not isinstance(decoded, dict):
            logger.error(
                f"Invalid API response ({response.status_code}): {body[:500]}"
            )
            raise ResponseShapeError(
                f"Invalid API response: expected JSON object, got {body}",
                body=body,
                status_code=response.status_code,
            )
        return decoded

    # =========================================================================
    # Collections
    # =========================================================================

    def create_collection(self, collection_id: Optional[str] = None) -> dict[str, Any]:
        """
        Create a new collection.

        Args:
            collection_id: Optional identifier; the server generates one if omitted

        Returns:
            API response envelope
        """
        payload = _build_payload(CreateCollectionRequest, collection_id=collection_id)
        return self._request(
            "POST",
            "/v1/collection/create/",
            action="create collection",
            json_body=payload.model_dump(exclude_none=True),
        )

    def list_all_collections(self) -> dict[str, Any]:
        """Retrieve all collections."""
        return self._request(
            "GET", "/v1/collection/all/", action="fetch collections"
        )

    def query_collection(
        self,
        collection_id: str,
        request_query: str,
        json_schema: Optional[Any] = None,
        json_schema_rules: Optional[Any] = None,
    ) -> dict[str, Any]:
        """
        Query a collection.

        The schema fields are always sent, as null when not given.

        Args:
            collection_id: Collection to query
            request_query: Query text
            json_schema: Optional JSON schema for a structured answer
            json_schema_rules: Optional rules for the JSON schema

        Returns:
            API response envelope
        """
        payload = _build_payload(
            QueryCollectionRequest,
            collection_id=collection_id,
            request_query=request_query,
            json_schema=json_schema,
            json_schema_rules=json_schema_rules,
        )
        return self._request(
            "POST",
            "v1/collection/query/",
            action="query collection",
            json_body=payload.model_dump(),
        )

    def chat_collection(
        self,
        collection_id: str,
        message: str,
        chat_history: Optional[Any] = None,
    ) -> dict[str, Any]:
        """
        Chat with a collection.

        Args:
            collection_id: Collection to chat with
            message: User message
            chat_history: Optional previous turns, as a JSON string or a list
                of role/content mappings

        Returns:
            API response envelope with the response text and token usage
        """
        payload = _build_payload(
            ChatCollectionRequest,
            collection_id=collection_id,
            message=message,
            chat_history=chat_history,
        )
        return self._request(
            "POST",
            "/v1/collection/chat/",
            action="chat with collection",
            json_body=payload.model_dump(exclude_none=True),
        )

    def delete_collection(self, collection_id: str) -> dict[str, Any]:
        """
        Delete a collection.

        Args:
            collection_id: Collection to delete

        Returns:
            API response envelope
        """
        payload = _build_payload(DeleteCollectionRequest, collection_id=collection_id)
        return self._request(
            "DELETE",
            "/v1/collection/delete/",
            action="delete collection",
            json_body=payload.model_dump(),
        )

    # =========================================================================
    # Resources
    # =========================================================================

    def insert_resource(
        self, collection_id: str, resource: str, type: str
    ) -> dict[str, Any]:
        """
        Insert a resource into a collection.

        Args:
            collection_id: Target collection
            resource: Resource content, URL or file link
            type: Resource type, e.g. 'web', 'file' or 'text'

        Returns:
            API response envelope with the new resource_id
        """
        payload = _build_payload(
            InsertResourceRequest,
            collection_id=collection_id,
            resource=resource,
            type=type,
        )
        return self._request(
            "POST",
            "/v1/resource/insert/",
            action="insert resource",
            json_body=payload.model_dump(),
        )

    def remove_resource(self, collection_id: str, resource_id: str) -> dict[str, Any]:
        """
        Remove a resource from a collection.

        Args:
            collection_id: Collection the resource belongs to
            resource_id: Resource to remove

        Returns:
            API response envelope
        """
        payload = _build_payload(
            RemoveResourceRequest,
            collection_id=collection_id,
            resource_id=resource_id,
        )
        return self._request(
            "DELETE",
            "/v1/resource/remove/",
            action="remove resource",
            json_body=payload.model_dump(),
        )

    def categorize_resource(
        self,
        resource: str,
        type: str,
        json_schema: Any,
        categories: Any,
        prompt: str,
    ) -> dict[str, Any]:
        """
        Categorize a resource.

        Args:
            resource: Resource to categorize
            type: Resource type
            json_schema: JSON schema for the category output
            categories: Candidate categories, comma-separated or as a list
            prompt: Instruction for categorization

        Returns:
            API response envelope with the label and token usage
        """
        payload = _build_payload(
            CategorizeResourceRequest,
            resource=resource,
            type=type,
            json_schema=json_schema,
            categories=categories,
            prompt=prompt,
        )
        return self._request(
            "POST",
            "/v1/categorize/",
            action="categorize resource",
            json_body=payload.model_dump(),
        )

    # =========================================================================
    # Generation and Conversion
    # =========================================================================

    def text_generation(self, messages: list[Any], model: str) -> dict[str, Any]:
        """
        Generate text from a list of chat messages.

        The endpoint expects form fields, so the messages are JSON-encoded
        into a single multipart part.

        Args:
            messages: Chat messages, each with 'role' and 'content'
            model: Model identifier

        Returns:
            API response envelope

        Raises:
            EncodingError: If the messages cannot be JSON-encoded
        """
        payload = _build_payload(TextGenerationRequest, messages=messages, model=model)
        try:
            encoded_messages = json.dumps(payload.messages)
        except (TypeError, ValueError, RecursionError) as e:
            raise EncodingError(f"Failed to encode messages: {e}") from e

        return self._request(
            "POST",
            "/v1/text-generation/",
            action="generate text",
            multipart={"messages": encoded_messages, "model": payload.model},
        )

    def image_to_text(self, image_url: str, request_query: str) -> dict[str, Any]:
        """
        Ask a question about an image.

        Args:
            image_url: Public URL of the image
            request_query: Question about the image

        Returns:
            API response envelope
        """
        payload = _build_payload(
            ImageToTextRequest, image_url=image_url, request_query=request_query
        )
        return self._request(
            "POST",
            "/v1/image-to-text/",
            action="convert image to text",
            json_body=payload.model_dump(),
        )

    def markdown_converter(self, link: str, resource_type: str) -> dict[str, Any]:
        """
        Convert a file, web page or image to markdown.

        Args:
            link: Link to the resource
            resource_type: One of 'file', 'web' or 'image'

        Returns:
            API response envelope

        Raises:
            InvalidRequestError: If resource_type is not supported
        """
        payload = _build_payload(
            MarkdownConverterRequest, link=link, resource_type=resource_type
        )
        return self._request(
            "POST",
            "/v2/markdown-converter/",
            action="convert to markdown",
            json_body=payload.model_dump(),
        )

    def transcript(self, link: str, resource_type: str = "youtube") -> dict[str, Any]:
        """
        Extract the transcript of a media link.

        Args:
            link: Link to the media
            resource_type: Media source type

        Returns:
            API response envelope
        """
        payload = _build_payload(TranscriptRequest, link=link, resource_type=resource_type)
        return self._request(
            "POST",
            "/v2/transcript/",
            action="fetch transcript",
            json_body=payload.model_dump(),
        )
