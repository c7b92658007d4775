# backend/bm_core/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from bm_core.companies.models import Company
from bm_core.iam.models import UserProfile


# ---------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------

class UserInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True, trim_whitespace=False)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")


class CompanyInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)


class AdminRegistrationSerializer(serializers.Serializer):
    """
    {"company": {"name": ...}, "user": {"name", "email", "password", "phone"}}
    """
    company = CompanyInputSerializer()
    user = UserInputSerializer()


class CollaboratorRegistrationSerializer(UserInputSerializer):
    invite_code = serializers.CharField(max_length=16)
    function = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


# ---------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------

class UserProfileSerializer(serializers.ModelSerializer):
    """
    A company user as seen by the web client.
    `id` is the auth user id: it is what appointments reference as collaborator.
    """
    id = serializers.IntegerField(source="user_id", read_only=True)
    name = serializers.CharField(source="user.first_name", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    company_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = UserProfile
        fields = ["id", "name", "email", "phone", "role", "function", "company_id"]
        read_only_fields = fields


class CompanySerializer(serializers.ModelSerializer):
    """
    invite_code is only rendered for admins (context["show_invite_code"]).
    """

    class Meta:
        model = Company
        fields = ["id", "name", "invite_code", "created_at"]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not self.context.get("show_invite_code", False):
            data.pop("invite_code", None)
        return data


class SessionSerializer(serializers.Serializer):
    user = UserProfileSerializer()
    company = CompanySerializer()


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
