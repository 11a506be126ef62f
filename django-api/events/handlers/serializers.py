"""Serializers for transforming domain models to API responses and validating input."""

from django.conf import settings
from rest_framework import serializers


class UserRefSerializer(serializers.Serializer):
    """Serializer for UserRef domain model."""

    id = serializers.UUIDField(source="id.value")
    first_name = serializers.CharField()
    last_name = serializers.CharField()


class CategorySerializer(serializers.Serializer):
    """Serializer for Category domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()


class RatingSerializer(serializers.Serializer):
    user_id = serializers.UUIDField(source="user_id.value")
    value = serializers.IntegerField()


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    location = serializers.CharField()
    image_url = serializers.CharField()
    url = serializers.CharField()
    start_date_time = serializers.DateTimeField()
    end_date_time = serializers.DateTimeField()
    price = serializers.DecimalField(source="price.amount", max_digits=10, decimal_places=2)
    is_free = serializers.BooleanField()
    category = CategorySerializer(allow_null=True)
    organizer = UserRefSerializer()
    total_tickets = serializers.IntegerField(source="total_tickets.value")
    available_tickets = serializers.IntegerField(source="available_tickets.value")
    average_rating = serializers.FloatField()
    ratings = RatingSerializer(many=True)
    created_at = serializers.DateTimeField()


class EventPageSerializer(serializers.Serializer):
    data = EventSerializer(many=True)
    total_pages = serializers.IntegerField()


class EventInputSerializer(serializers.Serializer):
    """Validates organizer input. Inventory and rating fields are not accepted."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    image_url = serializers.URLField(max_length=500)
    url = serializers.URLField(max_length=500, required=False, allow_blank=True, default="")
    start_date_time = serializers.DateTimeField()
    end_date_time = serializers.DateTimeField()
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    is_free = serializers.BooleanField(required=False, default=False)
    category_id = serializers.UUIDField(required=False, allow_null=True)
    total_tickets = serializers.IntegerField(min_value=0)


class PageQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(
        required=False, min_value=1, max_value=100, default=settings.EVENTS_PAGE_SIZE
    )


class EventListQuerySerializer(PageQuerySerializer):
    query = serializers.CharField(required=False, allow_blank=True, default="")
    category = serializers.CharField(required=False, allow_blank=True, default="")


class RelatedEventsQuerySerializer(PageQuerySerializer):
    limit = serializers.IntegerField(
        required=False, min_value=1, max_value=100, default=settings.RELATED_EVENTS_PAGE_SIZE
    )


class CategoryInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)


class RatingInputSerializer(serializers.Serializer):
    value = serializers.IntegerField()


class CommentSerializer(serializers.Serializer):
    """Serializer for Comment domain model."""

    id = serializers.UUIDField(source="id.value")
    content = serializers.CharField()
    event_id = serializers.UUIDField(source="event_id.value")
    event_title = serializers.CharField()
    author = UserRefSerializer()
    created_at = serializers.DateTimeField()


class CommentInputSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=5000)
