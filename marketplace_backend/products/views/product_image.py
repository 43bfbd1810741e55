# products/views/product_image.py

"""
PRODUCT IMAGE API

Reads are public. Writes:
- create / bulk create / delete all -> can_create_product_image (via product)
- update / set primary / delete     -> can_edit_product_image (via image)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from permissions.policy import can_create_product_image, can_edit_product_image, require
from products.serializers.product_image import (
    ProductImageBulkSerializer,
    ProductImageCreateSerializer,
    ProductImageSerializer,
    ProductImageUpdateSerializer,
)
from products.services.images import (
    add_image,
    add_images_bulk,
    count_images,
    delete_all_images,
    delete_image,
    get_primary_image,
    list_images,
    set_primary_image,
    update_image,
)


class ProductImagesView(APIView):
    serializer_class = ProductImageSerializer

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(responses={200: ProductImageSerializer(many=True)}, tags=["Catalog"])
    def get(self, request, product_id: int):
        return Response(ProductImageSerializer(list_images(product_id), many=True).data)

    @extend_schema(
        request=ProductImageCreateSerializer,
        responses={201: ProductImageSerializer, 409: OpenApiResponse(description="Duplicate image URL")},
        tags=["Catalog"],
    )
    def post(self, request, product_id: int):
        require(can_create_product_image(request.user, product_id))

        s = ProductImageCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        image = add_image(product_id=product_id, **s.validated_data)
        return Response(ProductImageSerializer(image).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: OpenApiResponse(description='{"deleted": <int>}')}, tags=["Catalog"])
    def delete(self, request, product_id: int):
        require(can_create_product_image(request.user, product_id))

        return Response({"deleted": delete_all_images(product_id=product_id)})


class ProductImagesBulkView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ProductImageBulkSerializer

    @extend_schema(
        request=ProductImageBulkSerializer,
        responses={201: ProductImageSerializer(many=True)},
        description="Adds several images; URLs already on the product are skipped.",
        tags=["Catalog"],
    )
    def post(self, request, product_id: int):
        require(can_create_product_image(request.user, product_id))

        s = ProductImageBulkSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        created = add_images_bulk(
            product_id=product_id,
            image_urls=s.validated_data["image_urls"],
            primary_index=s.validated_data.get("primary_index"),
        )
        return Response(ProductImageSerializer(created, many=True).data, status=status.HTTP_201_CREATED)


class ProductPrimaryImageView(APIView):
    permission_classes = [AllowAny]
    serializer_class = ProductImageSerializer

    @extend_schema(responses={200: ProductImageSerializer}, tags=["Catalog"])
    def get(self, request, product_id: int):
        return Response(ProductImageSerializer(get_primary_image(product_id)).data)


class ProductImageCountView(APIView):
    permission_classes = [AllowAny]
    serializer_class = None

    @extend_schema(responses={200: OpenApiResponse(description='{"count": <int>}')}, tags=["Catalog"])
    def get(self, request, product_id: int):
        return Response({"product_id": product_id, "count": count_images(product_id)})


class ProductImageDetailView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ProductImageUpdateSerializer

    @extend_schema(request=ProductImageUpdateSerializer, responses={200: ProductImageSerializer}, tags=["Catalog"])
    def patch(self, request, image_id: int):
        require(can_edit_product_image(request.user, image_id))

        s = ProductImageUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        image = update_image(image_id=image_id, **s.validated_data)
        return Response(ProductImageSerializer(image).data)

    @extend_schema(responses={204: None}, tags=["Catalog"])
    def delete(self, request, image_id: int):
        require(can_edit_product_image(request.user, image_id))

        delete_image(image_id=image_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProductImageSetPrimaryView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = None

    @extend_schema(request=None, responses={200: ProductImageSerializer}, tags=["Catalog"])
    def post(self, request, image_id: int):
        require(can_edit_product_image(request.user, image_id))

        return Response(ProductImageSerializer(set_primary_image(image_id=image_id)).data)
