"""Domain layer: binding metadata, enums, and the error taxonomy.

This layer depends only on stdlib.
It must never import from binding, serializers, infrastructure, or config.
"""
