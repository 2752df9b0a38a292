"""Infrastructure layer: Firestore, Redis cache, search corpus."""
