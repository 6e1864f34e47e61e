"""
Canonical specification snapshot models.

Format parsers (OpenAPI, AsyncAPI, GraphQL, gRPC) normalize their input
into these models before it reaches the diff engine.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class SourceType(str, Enum):
    """Format the snapshot was parsed from."""

    OPENAPI = "openapi"
    ASYNCAPI = "asyncapi"
    GRAPHQL = "graphql"
    GRPC = "grpc"


class ParameterLocation(str, Enum):
    """Where a parameter is carried in a request."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"


class Parameter(BaseModel):
    """A single endpoint parameter."""

    name: str = Field(description="Parameter name")
    location: ParameterLocation = Field(
        default=ParameterLocation.QUERY,
        description="Where the parameter is carried",
    )
    required: bool = Field(default=False, description="Whether the parameter is required")
    type: Optional[str] = Field(
        default=None,
        description="Type tag, possibly parameterized (e.g. array<string>)",
    )
    default: Optional[Any] = Field(default=None, description="Default value")
    description: Optional[str] = Field(default=None)

    class Config:
        frozen = True


class RequestBody(BaseModel):
    """Request payload of an endpoint."""

    content_type: Optional[str] = Field(default="application/json")
    schema_ref: Optional[str] = Field(default=None, description="Referenced schema name")
    required: bool = Field(default=False)

    class Config:
        frozen = True


class Response(BaseModel):
    """A status/content pair an endpoint may return."""

    status_code: str = Field(description="Status code, e.g. '200' or 'default'")
    content_type: Optional[str] = Field(default=None)
    schema_ref: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)

    class Config:
        frozen = True

    @field_validator("status_code", mode="before")
    @classmethod
    def _status_code_as_text(cls, value: Any) -> Any:
        # YAML and JSON documents usually write status codes unquoted.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def is_success(self) -> bool:
        """Check if this is a 2xx response."""
        return self.status_code.startswith("2")


class Endpoint(BaseModel):
    """An operation exposed by the API (REST route, channel operation, RPC)."""

    path: Optional[str] = Field(default=None, description="Path or channel key")
    method: Optional[str] = Field(
        default=None,
        description="HTTP verb or RPC kind (e.g. GET, UNARY, SUBSCRIBE)",
    )
    operation_id: Optional[str] = Field(default=None)
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = Field(default=None)
    responses: list[Response] = Field(default_factory=list)
    deprecated: bool = Field(default=False)
    summary: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    tags: list[str] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def identity(self) -> Optional[str]:
        """
        Matching key for this endpoint.

        Returns None when neither (method, path) nor an operation id is
        available; the registry then assigns a synthetic key.
        """
        if self.method and self.path:
            return f"{self.method.upper()} {self.path}"
        if self.operation_id:
            return f"operationId:{self.operation_id}"
        return None

    @property
    def display_name(self) -> str:
        """Human readable label used in change descriptions."""
        if self.method and self.path:
            return f"{self.method.upper()} {self.path}"
        return self.path or self.operation_id or "<anonymous>"


class SchemaKind(str, Enum):
    """Kind of a named type in a schema-graph source."""

    OBJECT = "object"
    INPUT_OBJECT = "input_object"
    INTERFACE = "interface"
    ENUM = "enum"
    UNION = "union"
    SCALAR = "scalar"


class SchemaField(BaseModel):
    """A field of an object, input object or interface type."""

    name: str
    type: Optional[str] = Field(default=None)
    required: bool = Field(default=False, description="Non-null / required field")
    default: Optional[Any] = Field(default=None)
    deprecated: bool = Field(default=False)
    description: Optional[str] = Field(default=None)

    class Config:
        frozen = True


class SchemaType(BaseModel):
    """A named type of a GraphQL schema or Protobuf message/enum."""

    name: str
    kind: SchemaKind = Field(default=SchemaKind.OBJECT)
    fields: list[SchemaField] = Field(default_factory=list)
    enum_values: list[str] = Field(default_factory=list)
    members: list[str] = Field(
        default_factory=list,
        description="Possible types of a union",
    )
    interfaces: list[str] = Field(default_factory=list)
    description: Optional[str] = Field(default=None)

    class Config:
        frozen = True

    @property
    def is_input(self) -> bool:
        """Whether clients send values of this type."""
        return self.kind == SchemaKind.INPUT_OBJECT


class Snapshot(BaseModel):
    """Normalized description of an API surface at one point in time."""

    name: str = Field(description="API name")
    version: Optional[str] = Field(default=None)
    source_type: SourceType = Field(default=SourceType.OPENAPI)
    endpoints: list[Endpoint] = Field(default_factory=list)
    types: list[SchemaType] = Field(default_factory=list)

    class Config:
        frozen = True
