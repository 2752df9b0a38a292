"""Application ports (protocols implemented by infrastructure)."""

from cuisine.application.interfaces.repositories import (
    ILikeRepository,
    IRecipeRepository,
    ITitleCorpus,
)

__all__ = ["ILikeRepository", "IRecipeRepository", "ITitleCorpus"]
