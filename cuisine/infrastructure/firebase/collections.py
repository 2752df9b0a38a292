"""Firestore collection names (schema-in-code).

Defaults for RECIPES_COLLECTION / LIKES_COLLECTION settings. Recipe documents
carry title, type, position, images, url and the titleKeywords index; like
documents carry recetteId and userId.
"""

COLLECTION_RECIPES = "recipes"
COLLECTION_LIKES = "likes"
