"""Cuisine Artisanale: spelling-tolerant recipe search and recommendations."""
