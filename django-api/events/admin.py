from django.contrib import admin

from events.models import Event, PendingPayment


class PendingPaymentInline(admin.TabularInline):
    model = PendingPayment
    extra = 0
    readonly_fields = ["checkout_session_id", "purpose", "status", "amount", "currency", "created_at"]
    can_delete = False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "creator", "creator_role", "status", "created_at"]
    list_filter = ["status", "creator_role"]
    search_fields = ["title", "location"]
    inlines = [PendingPaymentInline]


@admin.register(PendingPayment)
class PendingPaymentAdmin(admin.ModelAdmin):
    list_display = ["checkout_session_id", "event", "purpose", "status", "amount", "currency"]
    list_filter = ["status", "purpose"]
