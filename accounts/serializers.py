"""
Accounts Serializers
"""

from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    identifier = serializers.CharField(max_length=254)
    password = serializers.CharField()


class SendOTPSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    type = serializers.CharField(max_length=20, required=False, default='login')

    def validate(self, attrs):
        if not attrs.get('email') and not attrs.get('phone'):
            raise serializers.ValidationError('Email or phone is required')
        return attrs


class VerifyOTPSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    code = serializers.CharField(max_length=6, min_length=6)

    def validate(self, attrs):
        if not attrs.get('email') and not attrs.get('phone'):
            raise serializers.ValidationError('Code and email/phone are required')
        return attrs


class IdentitySerializer(serializers.Serializer):
    id = serializers.UUIDField(source='principal.id')
    role = serializers.CharField()
    email = serializers.EmailField(source='principal.email')
    name = serializers.CharField(source='principal.name')
