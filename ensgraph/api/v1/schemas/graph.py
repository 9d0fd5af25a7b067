"""Request/response models for the graph API (camelCase on the wire)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GraphNode(_CamelModel):
    id: int
    ens_name: str
    metadata: dict = Field(default_factory=dict)


class GraphLink(_CamelModel):
    id: int
    source: int
    target: int


class GraphResponse(_CamelModel):
    nodes: list[GraphNode] = Field(default_factory=list)
    links: list[GraphLink] = Field(default_factory=list)


class ConnectionRequest(_CamelModel):
    # Optional so that missing names reach the service and get its message.
    source_ens: str | None = Field(default=None, examples=["vitalik.eth"])
    target_ens: str | None = Field(default=None, examples=["balajis.eth"])


class NodeRef(_CamelModel):
    id: int
    ens_name: str


class ConnectionResponse(_CamelModel):
    success: bool = True
    source_node: NodeRef
    target_node: NodeRef
    edge: GraphLink
    created: bool = False
