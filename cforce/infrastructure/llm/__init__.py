"""LLM infrastructure module."""

from cforce.infrastructure.llm.gateway import GenerationConfig, ModelGateway

__all__ = [
    "GenerationConfig",
    "ModelGateway",
]
