# users/admin.py

"""
Accounts in Django Admin.

- email is the login identity; role is chosen at creation
- an artisan's profile is edited inline on the account page
- deactivation is a bulk action (accounts are never hard-deleted from here)
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.contrib.auth.forms import AdminUserCreationForm, UserChangeForm

from artisans.models import ArtisanProfile
from permissions.roles import ROLE_ARTISAN

User = get_user_model()


class AccountCreationForm(AdminUserCreationForm):
    class Meta:
        model = User
        fields = ("email", "role")


class AccountChangeForm(UserChangeForm):
    class Meta:
        model = User
        fields = ("email", "first_name", "last_name", "role", "is_active", "is_staff", "is_superuser")


class ArtisanProfileInline(admin.StackedInline):
    model = ArtisanProfile
    can_delete = False
    extra = 0
    fields = ("display_name", "bio", "profile_image_url", "cover_image_url")


@admin.register(User)
class AccountAdmin(DjangoUserAdmin):
    form = AccountChangeForm
    add_form = AccountCreationForm

    ordering = ("email",)
    list_display = ("email", "role", "is_active", "has_artisan_profile", "created_at")
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("email", "first_name", "last_name", "artisan_profile__display_name")
    readonly_fields = ("created_at", "updated_at", "last_login")
    actions = ["deactivate_accounts"]

    fieldsets = (
        (None, {"fields": ("email", "password", "role")}),
        ("Name", {"fields": ("first_name", "last_name")}),
        ("Access", {"fields": ("is_active", "is_staff", "is_superuser")}),
        ("Timestamps", {"fields": ("last_login", "created_at", "updated_at")}),
    )

    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "role", "password1", "password2")}),
    )

    def get_inlines(self, request, obj):
        if obj is not None and obj.role == ROLE_ARTISAN:
            return [ArtisanProfileInline]
        return []

    @admin.display(boolean=True, description="Artisan profile")
    def has_artisan_profile(self, obj) -> bool:
        return hasattr(obj, "artisan_profile")

    @admin.action(description="Deactivate selected accounts")
    def deactivate_accounts(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f"{updated} account(s) deactivated.")
