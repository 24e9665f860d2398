from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from django.contrib.auth import get_user_model
from .models import User, Profile


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "email", "username", "first_name", "last_name"]


class EmailOrUsernameTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Allow login with either username or email.
    The user model uses email as USERNAME_FIELD; a username is mapped to its email.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Both identifiers are optional; validate() resolves whichever was sent.
        self.fields[self.username_field] = serializers.CharField(required=False, allow_blank=True, write_only=True)
        self.fields["username"] = serializers.CharField(required=False, allow_blank=True, write_only=True)

    def validate(self, attrs):
        data = dict(attrs)
        if not data.get(self.username_field) and data.get("username"):
            user = get_user_model().objects.filter(username=data["username"]).first()
            if user:
                data[self.username_field] = user.email
        data.pop("username", None)
        data.setdefault(self.username_field, "")
        return super().validate(data)


class ProfileSerializer(serializers.ModelSerializer):
    user = UserSerializer()
    selected_subjects = serializers.SerializerMethodField()

    class Meta:
        model = Profile
        fields = ["user", "nickname", "selected_subjects", "goal_score", "created_at"]

    def get_selected_subjects(self, obj):
        return list(obj.selected_subjects.order_by("name").values_list("name", flat=True))
