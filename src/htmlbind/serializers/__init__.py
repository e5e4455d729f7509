"""Serializer layer: content-type codecs built on the binding engine."""

from htmlbind.serializers.base import Serializer
from htmlbind.serializers.html import HtmlSerializer
from htmlbind.serializers.result import BindingFailure, BindingResult

__all__ = ["BindingFailure", "BindingResult", "HtmlSerializer", "Serializer"]
