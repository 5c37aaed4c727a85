"""API routes for the development graph backend.

Provides:
- /graph/ in the wire format the graph view consumes
- /health
"""

import logging

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict, Field

from constellation.api.sample import build_sample_graph

logger = logging.getLogger(__name__)

router = APIRouter()


class GraphNodeResponse(BaseModel):
    """Node as sent to the graph view."""

    id: str
    label: str
    type: str
    review_count: int | None = None
    meaning: str | None = None
    color: str | None = None


class GraphEdgeResponse(BaseModel):
    """Edge as sent to the graph view (``from``/``to`` keys)."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")


class GraphResponse(BaseModel):
    nodes: list[GraphNodeResponse]
    edges: list[GraphEdgeResponse]


class HealthResponse(BaseModel):
    status: str
    nodes: int


@router.get("/graph/", response_model=GraphResponse, response_model_by_alias=True)
async def get_graph(
    limit: int = Query(default=50, ge=1, le=1000),
    min_weight: int = Query(default=2, ge=0),
) -> GraphResponse:
    """Sample vocabulary graph, filtered by connection weight."""
    payload = build_sample_graph(limit=limit, min_weight=min_weight)
    logger.info(f"Serving graph: {len(payload.nodes)} nodes, {len(payload.edges)} edges")

    return GraphResponse(
        nodes=[GraphNodeResponse(**node.to_dict()) for node in payload.nodes],
        edges=[GraphEdgeResponse(source=e.source, target=e.target) for e in payload.edges],
    )


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", nodes=len(build_sample_graph().nodes))
