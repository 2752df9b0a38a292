"""Firestore-backed repository implementations."""

from cuisine.infrastructure.firebase.repositories.like_repo_firestore import (
    FirestoreLikeRepository,
)
from cuisine.infrastructure.firebase.repositories.recipe_repo_firestore import (
    FirestoreRecipeRepository,
)

__all__ = [
    "FirestoreLikeRepository",
    "FirestoreRecipeRepository",
]
