# artisans/serializers/artisan_profile.py

from rest_framework import serializers

from artisans.models import ArtisanProfile


class ArtisanProfileSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    product_count = serializers.SerializerMethodField()

    class Meta:
        model = ArtisanProfile
        fields = [
            "id",
            "user_id",
            "email",
            "display_name",
            "bio",
            "profile_image_url",
            "cover_image_url",
            "product_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_product_count(self, obj) -> int:
        return obj.products.count()


class ArtisanProfileWriteSerializer(serializers.Serializer):
    display_name = serializers.CharField(max_length=200)
    bio = serializers.CharField(required=False, allow_blank=True)
    profile_image_url = serializers.CharField(max_length=500, required=False, allow_blank=True)
    cover_image_url = serializers.CharField(max_length=500, required=False, allow_blank=True)


class ArtisanProfileImageSerializer(serializers.Serializer):
    image_url = serializers.CharField(max_length=500)
