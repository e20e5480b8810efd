"""Domain layer — vocabulary, generation, classification, and rules.

This layer depends only on stdlib and networkx.
It must never import from services, config, or plugins.
"""
