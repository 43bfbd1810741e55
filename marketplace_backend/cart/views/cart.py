# cart/views/cart.py

"""
CART API VIEWS

- Every endpoint acts on the caller's own cart.
- Admins may address another user's cart with ?user_id=<uuid>.
- Money is server-owned: price_at_time is snapshotted on add and only
  changes through the resync endpoints.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.exceptions import ForbiddenError, NotFoundError
from cart.serializers import AddToCartSerializer, CartItemSerializer, UpdateQuantitySerializer
from cart.services.cart_service import (
    add_to_cart,
    cart_total,
    clear_cart,
    contains_product,
    count_items,
    get_cart_items,
    remove_item,
    remove_product,
    resync_cart_prices,
    resync_item_price,
    update_item_quantity,
    update_product_quantity,
)
from permissions.roles import ROLE_ADMIN, has_role

USER_ID_PARAM = OpenApiParameter(
    name="user_id",
    type=str,
    location=OpenApiParameter.QUERY,
    required=False,
    description="Admin only: act on this user's cart.",
)


# =====================================================
# HELPERS
# =====================================================

def _cart_owner(request):
    raw = (request.query_params.get("user_id") or "").strip()
    if not raw or raw == str(request.user.pk):
        return request.user

    if not has_role(request.user, ROLE_ADMIN):
        raise ForbiddenError("Only admins can access another user's cart")

    User = get_user_model()
    try:
        return User.objects.get(pk=raw)
    except (User.DoesNotExist, ValueError, DjangoValidationError):
        raise NotFoundError(f"User {raw} not found")


def _cart_payload(user) -> dict:
    items = get_cart_items(user)
    return {
        "items": CartItemSerializer(items, many=True).data,
        "count": len(items),
        "total": str(cart_total(user)),
    }


class CartBaseView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CartItemSerializer


# =====================================================
# CART API VIEWS
# =====================================================

class CartView(CartBaseView):
    @extend_schema(
        parameters=[USER_ID_PARAM],
        responses={200: OpenApiResponse(description="Cart items, count and total")},
        tags=["Cart"],
    )
    def get(self, request):
        return Response(_cart_payload(_cart_owner(request)))

    @extend_schema(parameters=[USER_ID_PARAM], responses={204: None}, tags=["Cart"])
    def delete(self, request):
        clear_cart(user=_cart_owner(request))
        return Response(status=status.HTTP_204_NO_CONTENT)


class CartItemsView(CartBaseView):
    @extend_schema(
        parameters=[USER_ID_PARAM],
        request=AddToCartSerializer,
        responses={201: CartItemSerializer},
        description="Adds a product; re-adding the same product merges quantities.",
        tags=["Cart"],
    )
    def post(self, request):
        s = AddToCartSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        item = add_to_cart(user=_cart_owner(request), **s.validated_data)
        return Response(CartItemSerializer(item).data, status=status.HTTP_201_CREATED)


class CartItemDetailView(CartBaseView):
    @extend_schema(
        parameters=[USER_ID_PARAM],
        request=UpdateQuantitySerializer,
        responses={200: CartItemSerializer},
        tags=["Cart"],
    )
    def patch(self, request, item_id: int):
        s = UpdateQuantitySerializer(data=request.data)
        s.is_valid(raise_exception=True)

        item = update_item_quantity(
            user=_cart_owner(request),
            item_id=item_id,
            quantity=s.validated_data["quantity"],
        )
        return Response(CartItemSerializer(item).data)

    @extend_schema(parameters=[USER_ID_PARAM], responses={204: None}, tags=["Cart"])
    def delete(self, request, item_id: int):
        remove_item(user=_cart_owner(request), item_id=item_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CartItemResyncView(CartBaseView):
    @extend_schema(parameters=[USER_ID_PARAM], request=None, responses={200: CartItemSerializer}, tags=["Cart"])
    def post(self, request, item_id: int):
        item = resync_item_price(user=_cart_owner(request), item_id=item_id)
        return Response(CartItemSerializer(item).data)


class CartProductView(CartBaseView):
    @extend_schema(
        parameters=[USER_ID_PARAM],
        request=UpdateQuantitySerializer,
        responses={200: CartItemSerializer},
        tags=["Cart"],
    )
    def patch(self, request, product_id: int):
        s = UpdateQuantitySerializer(data=request.data)
        s.is_valid(raise_exception=True)

        item = update_product_quantity(
            user=_cart_owner(request),
            product_id=product_id,
            quantity=s.validated_data["quantity"],
        )
        return Response(CartItemSerializer(item).data)

    @extend_schema(parameters=[USER_ID_PARAM], responses={204: None}, tags=["Cart"])
    def delete(self, request, product_id: int):
        remove_product(user=_cart_owner(request), product_id=product_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CartContainsProductView(CartBaseView):
    @extend_schema(parameters=[USER_ID_PARAM], responses={200: OpenApiResponse(description='{"in_cart": bool}')}, tags=["Cart"])
    def get(self, request, product_id: int):
        owner = _cart_owner(request)
        return Response({"product_id": product_id, "in_cart": contains_product(user=owner, product_id=product_id)})


class CartCountView(CartBaseView):
    @extend_schema(parameters=[USER_ID_PARAM], responses={200: OpenApiResponse(description='{"count": int}')}, tags=["Cart"])
    def get(self, request):
        return Response({"count": count_items(_cart_owner(request))})


class CartTotalView(CartBaseView):
    @extend_schema(parameters=[USER_ID_PARAM], responses={200: OpenApiResponse(description='{"total": "0.00"}')}, tags=["Cart"])
    def get(self, request):
        return Response({"total": str(cart_total(_cart_owner(request)))})


class CartResyncView(CartBaseView):
    @extend_schema(
        parameters=[USER_ID_PARAM],
        request=None,
        responses={200: OpenApiResponse(description="Cart after overwriting every snapshot with the live price")},
        tags=["Cart"],
    )
    def post(self, request):
        owner = _cart_owner(request)
        updated = resync_cart_prices(user=owner)
        return Response({"updated": updated, **_cart_payload(owner)})
