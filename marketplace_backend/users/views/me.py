from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.serializers import UserSerializer


class MeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    @extend_schema(
        responses={200: UserSerializer},
        description="Get current authenticated user profile",
        tags=["Auth"],
    )
    def get(self, request):
        data = UserSerializer(request.user).data

        profile = getattr(request.user, "artisan_profile", None) if request.user.is_artisan else None
        data["artisan_profile_id"] = profile.id if profile else None
        return Response(data)
