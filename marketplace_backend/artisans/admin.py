from django.contrib import admin

from artisans.models import ArtisanProfile


@admin.register(ArtisanProfile)
class ArtisanProfileAdmin(admin.ModelAdmin):
    list_display = ("display_name", "user", "created_at")
    search_fields = ("display_name", "bio", "user__email")
    list_select_related = ("user",)
    readonly_fields = ("created_at", "updated_at")
