"""Binding layer: binder strategies and the type-to-binder resolver.

Binders may import from domain and infrastructure layers.
They must never import from serializers, config, or cli.
"""

from htmlbind.binding.base import Binder
from htmlbind.binding.collection import CollectionBinder
from htmlbind.binding.composite import CompositeBinder
from htmlbind.binding.leaves import LeafBinder
from htmlbind.binding.resolver import BinderResolver
from htmlbind.binding.specs import FieldBindingSpec

__all__ = [
    "Binder",
    "BinderResolver",
    "CollectionBinder",
    "CompositeBinder",
    "FieldBindingSpec",
    "LeafBinder",
]
