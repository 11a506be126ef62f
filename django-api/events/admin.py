from django.contrib import admin

from events.models import Category, Comment, Event, Rating


class RatingInline(admin.TabularInline):
    """Ratings are shown for reference; average_rating is only kept in sync by RatingService."""

    model = Rating
    extra = 0
    can_delete = False
    readonly_fields = ["user", "value"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name"]
    search_fields = ["name"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = [
        "title",
        "organizer",
        "category",
        "start_date_time",
        "available_tickets",
        "total_tickets",
        "average_rating",
    ]
    search_fields = ["title", "location"]
    list_filter = ["category"]
    readonly_fields = ["available_tickets", "average_rating", "created_at"]
    inlines = [RatingInline]

    def save_model(self, request, obj, form, change):
        if not change:
            obj.available_tickets = obj.total_tickets
            obj.save()
            return
        # Write only what the form changed so ticket sales made since the
        # page was loaded are kept.
        update_fields = list(form.changed_data)
        if "total_tickets" in update_fields:
            obj.available_tickets = obj.total_tickets
            update_fields.append("available_tickets")
        if update_fields:
            obj.save(update_fields=update_fields)


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ["event", "user", "created_at"]
    list_filter = ["event"]
