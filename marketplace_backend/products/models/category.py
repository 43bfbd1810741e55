# products/models/category.py

from django.db import models


class Category(models.Model):
    """
    Product category.

    - name and slug are both unique
    - slug is URL-safe and derived from name (see products/services/categories.py)
    - cannot be deleted while it still owns products
    """

    name = models.CharField(max_length=120, unique=True)
    slug = models.SlugField(max_length=140, unique=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name
