"""Serializers for request validation and domain-to-response transformation."""

from rest_framework import serializers


class EventIdRequestSerializer(serializers.Serializer):
    """Body of the checkout endpoints."""

    event_id = serializers.CharField(max_length=64)


class PublishEligibilitySerializer(serializers.Serializer):
    """Serializer for the PublishEligibility domain model.

    `published_count` is null for artists, who are never counted.
    """

    allowed = serializers.BooleanField()
    requires_payment = serializers.BooleanField()
    published_count = serializers.IntegerField(allow_null=True)


class EventStatusSerializer(serializers.Serializer):
    """Serializer for an event's publish status."""

    event_id = serializers.CharField(source="id")
    status = serializers.CharField(source="status.value")


class CheckoutSessionSerializer(serializers.Serializer):
    """Serializer for the CheckoutSession domain model."""

    checkout_url = serializers.CharField(source="url")
    session_id = serializers.CharField(source="id")
