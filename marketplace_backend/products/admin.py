# products/admin.py
"""
CATALOG ADMIN

- Category slug is derived server-side (read-only here).
- Images are edited inline on the product; the one-primary rule is
  enforced by a DB constraint, so a second primary fails validation.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Category, Product, ProductImage
from products.services.categories import generate_unique_slug


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0
    fields = ("image_url", "is_primary", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "created_at")
    search_fields = ("name", "slug")
    readonly_fields = ("slug", "created_at", "updated_at")

    def save_model(self, request, obj, form, change):
        if not obj.slug or "name" in form.changed_data:
            obj.slug = generate_unique_slug(obj.name, exclude_id=obj.pk)
        super().save_model(request, obj, form, change)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "artisan", "category", "price", "stock_quantity", "is_featured")
    list_filter = ("is_featured", "category")
    search_fields = ("name", "description", "artisan__display_name")
    list_select_related = ("artisan", "category")
    readonly_fields = ("created_at", "updated_at")
    inlines = [ProductImageInline]
