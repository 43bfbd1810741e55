# products/filters.py

"""
Catalog list filters (django-filter).

    ?category=<id>&artisan=<profile id>&featured=true&in_stock=true&q=<text>
"""

import django_filters
from django.db.models import Q

from products.models import Product


class ProductFilter(django_filters.FilterSet):
    category = django_filters.NumberFilter(field_name="category_id")
    artisan = django_filters.NumberFilter(field_name="artisan_id")
    featured = django_filters.BooleanFilter(field_name="is_featured")
    in_stock = django_filters.BooleanFilter(method="filter_in_stock")
    q = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Product
        fields = ["category", "artisan", "featured", "in_stock", "q"]

    def filter_in_stock(self, queryset, name, value):
        if value is True:
            return queryset.filter(stock_quantity__gt=0)
        if value is False:
            return queryset.filter(stock_quantity=0)
        return queryset

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))
