"""Serializers for transforming order domain models to API responses."""

from rest_framework import serializers

from events.handlers.serializers import UserRefSerializer


class OrderSerializer(serializers.Serializer):
    """Serializer for Order domain model."""

    id = serializers.UUIDField(source="id.value")
    stripe_id = serializers.CharField()
    total_amount = serializers.DecimalField(source="total_amount.amount", max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField()
    event_id = serializers.UUIDField(source="event_id.value", allow_null=True)
    event_title = serializers.CharField(allow_null=True)
    buyer = UserRefSerializer()
    created_at = serializers.DateTimeField()
