from django.contrib import admin

from accounts.models import OneTimeCode


@admin.register(OneTimeCode)
class OneTimeCodeAdmin(admin.ModelAdmin):
    list_display = ["email", "expires_at", "attempts", "created_at"]
    search_fields = ["email"]
    readonly_fields = ["code_hash"]
