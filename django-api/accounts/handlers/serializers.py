"""Serializers for the sign-in endpoints."""

from rest_framework import serializers


class OtpRequestSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=150)


class OtpVerifySerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=150)
    otp = serializers.RegexField(r"^\d{6}$")


class IssuedSessionSerializer(serializers.Serializer):
    """Serializer for the IssuedSession domain model."""

    access_token = serializers.CharField()
    refresh_token = serializers.CharField()
    token_type = serializers.CharField()
    expires_in = serializers.IntegerField()
    expires_at = serializers.IntegerField()


class UserIdentitySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.EmailField()


class SignInSerializer(serializers.Serializer):
    session = IssuedSessionSerializer()
    user = UserIdentitySerializer()
