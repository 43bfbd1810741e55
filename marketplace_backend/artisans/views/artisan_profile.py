# artisans/views/artisan_profile.py

"""
ARTISAN PROFILE VIEWSET

Public:
- GET /artisans/                 (?q= searches display name + bio)
- GET /artisans/<id>/
- GET /artisans/by-user/<uuid>/

Current artisan:
- POST /artisans/                (create own profile)
- GET/PATCH /artisans/me/

Linked user or admin (can_edit_artisan_profile):
- PUT/PATCH/DELETE /artisans/<id>/
- PUT/DELETE /artisans/<id>/profile-image/
- PUT/DELETE /artisans/<id>/cover-image/
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from artisans.serializers import (
    ArtisanProfileImageSerializer,
    ArtisanProfileSerializer,
    ArtisanProfileWriteSerializer,
)
from artisans.services.profiles import (
    create_profile,
    delete_profile,
    get_profile,
    get_profile_for_user,
    remove_cover_image,
    remove_profile_image,
    search_profiles,
    set_cover_image,
    set_profile_image,
    update_profile,
)
from permissions.policy import can_edit_artisan_profile, require
from permissions.roles import IsArtisan


class ArtisanProfileViewSet(viewsets.ViewSet):
    serializer_class = ArtisanProfileSerializer
    lookup_value_regex = r"\d+"

    def get_permissions(self):
        if self.action in {"list", "retrieve", "by_user"}:
            return [AllowAny()]
        if self.action in {"create", "me"}:
            return [IsArtisan()]
        return [IsAuthenticated()]

    @extend_schema(
        parameters=[OpenApiParameter("q", str, OpenApiParameter.QUERY, required=False)],
        responses={200: ArtisanProfileSerializer(many=True)},
    )
    def list(self, request):
        qs = search_profiles(request.query_params.get("q"))
        return Response(ArtisanProfileSerializer(qs, many=True).data)

    @extend_schema(responses={200: ArtisanProfileSerializer})
    def retrieve(self, request, pk=None):
        return Response(ArtisanProfileSerializer(get_profile(pk)).data)

    @extend_schema(request=ArtisanProfileWriteSerializer, responses={201: ArtisanProfileSerializer})
    def create(self, request):
        s = ArtisanProfileWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        profile = create_profile(user=request.user, **s.validated_data)
        return Response(ArtisanProfileSerializer(profile).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ArtisanProfileWriteSerializer, responses={200: ArtisanProfileSerializer})
    def update(self, request, pk=None, partial=False):
        require(can_edit_artisan_profile(request.user, pk), "You can only edit your own profile")

        s = ArtisanProfileWriteSerializer(data=request.data, partial=partial)
        s.is_valid(raise_exception=True)

        profile = update_profile(profile_id=pk, **s.validated_data)
        return Response(ArtisanProfileSerializer(profile).data)

    @extend_schema(request=ArtisanProfileWriteSerializer, responses={200: ArtisanProfileSerializer})
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    @extend_schema(responses={204: None})
    def destroy(self, request, pk=None):
        require(can_edit_artisan_profile(request.user, pk), "You can only delete your own profile")

        delete_profile(profile_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: ArtisanProfileSerializer})
    @action(detail=False, methods=["get"], url_path=r"by-user/(?P<user_id>[0-9a-f-]+)")
    def by_user(self, request, user_id=None):
        return Response(ArtisanProfileSerializer(get_profile_for_user(user_id)).data)

    @extend_schema(request=ArtisanProfileWriteSerializer, responses={200: ArtisanProfileSerializer})
    @action(detail=False, methods=["get", "patch"], url_path="me")
    def me(self, request):
        profile = get_profile_for_user(request.user.pk)
        if request.method == "GET":
            return Response(ArtisanProfileSerializer(profile).data)

        s = ArtisanProfileWriteSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        profile = update_profile(profile_id=profile.id, **s.validated_data)
        return Response(ArtisanProfileSerializer(profile).data)

    # ----- profile / cover image URLs -----
    def _image_action(self, request, pk, *, setter, remover):
        require(can_edit_artisan_profile(request.user, pk), "You can only edit your own profile")

        if request.method == "DELETE":
            profile = remover(profile_id=pk)
        else:
            s = ArtisanProfileImageSerializer(data=request.data)
            s.is_valid(raise_exception=True)
            profile = setter(profile_id=pk, image_url=s.validated_data["image_url"])

        return Response(ArtisanProfileSerializer(profile).data)

    @extend_schema(request=ArtisanProfileImageSerializer, responses={200: ArtisanProfileSerializer})
    @action(detail=True, methods=["put", "delete"], url_path="profile-image")
    def profile_image(self, request, pk=None):
        return self._image_action(request, pk, setter=set_profile_image, remover=remove_profile_image)

    @extend_schema(request=ArtisanProfileImageSerializer, responses={200: ArtisanProfileSerializer})
    @action(detail=True, methods=["put", "delete"], url_path="cover-image")
    def cover_image(self, request, pk=None):
        return self._image_action(request, pk, setter=set_cover_image, remover=remove_cover_image)
