"""Product DRF serializers used for the OpenAPI schema.

Request validation and response shaping are done by the Pydantic DTOs in
``dtos.py``; these serializers only describe the wire format to
drf-spectacular so ``/api/schema/`` documents the product endpoints.
"""

from __future__ import annotations

from rest_framework import serializers


class ProductNameInputSerializer(serializers.Serializer):
    """Body of ``POST /products`` and ``PUT /products/{id}``."""

    name = serializers.CharField(min_length=2, max_length=255)


class ProductSerializer(serializers.Serializer):
    """Product resource as returned by the API."""

    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    sku = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class ProductListSerializer(serializers.Serializer):
    products = ProductSerializer(many=True, read_only=True)
    total = serializers.IntegerField(read_only=True)


class ErrorSerializer(serializers.Serializer):
    """Error body: a message string or a map of field name to message."""

    errors = serializers.JSONField(read_only=True)
