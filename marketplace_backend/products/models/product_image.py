# products/models/product_image.py

from django.db import models


class ProductImage(models.Model):
    """
    Image attached to a product.

    Invariants (DB enforced, service maintained):
    - an image URL appears at most once per product
    - at most one image per product has is_primary=True
      (services clear sibling flags before setting a new primary)
    """

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.CASCADE,
        related_name="images",
    )

    image_url = models.CharField(max_length=500)
    is_primary = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "image_url"],
                name="unique_image_url_per_product",
            ),
            models.UniqueConstraint(
                fields=["product"],
                condition=models.Q(is_primary=True),
                name="one_primary_image_per_product",
            ),
        ]

    def __str__(self):
        flag = " (primary)" if self.is_primary else ""
        return f"{self.image_url}{flag}"
