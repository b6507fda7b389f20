"""
E-Learning User Management Serializers

This module provides serializers for user authentication, registration
and the user's own billing and entitlement data.

Serializers:
- CustomTokenObtainPairSerializer: JWT token with user metadata
- CurrentUserSerializer: The logged in user with plan and owned courses
- UserRegistrationSerializer: Public sign-up

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Any, Dict, List
from django.contrib.auth.models import User
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from .models import CourseOwnership, Profile


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    JWT token serializer with user metadata.

    Token Payload Includes:
    - username: User identification
    - is_staff: Staff privileges flag
    - has_subscription: Whether the user bought a pricing plan
    """

    @classmethod
    def get_token(cls, user: User) -> RefreshToken:
        token = super().get_token(user)

        token['username'] = user.username
        token['is_staff'] = user.is_staff

        profile, _ = Profile.objects.get_or_create(user=user)
        token['has_subscription'] = profile.has_active_subscription

        return token

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        data = super().validate(attrs)

        # Add user information to response for frontend convenience
        data.update({
            'user_id': self.user.id,
            'username': self.user.username,
            'is_staff': self.user.is_staff,
        })

        return data


class CurrentUserSerializer(serializers.ModelSerializer):
    """
    The logged in user with everything the checkout pages need: the Stripe
    customer, the subscription plan and the ids of courses bought separately.
    """

    stripe_customer_id = serializers.SerializerMethodField()
    pricing_plan_id = serializers.SerializerMethodField()
    owned_courses = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = (
            'id', 'username', 'email', 'first_name', 'last_name', 'is_staff',
            'stripe_customer_id', 'pricing_plan_id', 'owned_courses',
        )
        read_only_fields = fields

    def _profile(self, obj: User) -> Profile:
        profile, _ = Profile.objects.get_or_create(user=obj)
        return profile

    def get_stripe_customer_id(self, obj: User) -> str:
        return self._profile(obj).stripe_customer_id

    def get_pricing_plan_id(self, obj: User) -> str:
        return self._profile(obj).pricing_plan_id

    def get_owned_courses(self, obj: User) -> List[int]:
        return list(
            CourseOwnership.objects.filter(user=obj)
            .order_by('course_id')
            .values_list('course_id', flat=True)
        )


class UserRegistrationSerializer(serializers.ModelSerializer):
    """
    Serializer for public sign-up.

    Validates unique username/email and password confirmation, runs Django's
    password validators and creates the user (the profile is created by the
    post_save signal).

    Fields:
    - username: Required, must be unique.
    - email: Required, must be unique.
    - first_name / last_name: Optional.
    - password: Required, write-only, min 8 characters.
    - password_confirm: Required, write-only, must match password.
    """

    password = serializers.CharField(write_only=True, min_length=8, required=True)
    password_confirm = serializers.CharField(write_only=True, min_length=8, required=True)

    class Meta:
        model = User
        fields = ['username', 'email', 'first_name', 'last_name', 'password', 'password_confirm']
        extra_kwargs = {'email': {'required': True}}

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError(_("A user with this email already exists."))
        return value

    def validate(self, data):
        if data['password'] != data['password_confirm']:
            raise serializers.ValidationError({"password_confirm": _("Passwords do not match")})

        try:
            validate_password(data['password'], user=User(username=data['username'], email=data['email']))
        except DjangoValidationError as e:
            raise serializers.ValidationError({"password": list(e.messages)})

        return data

    def create(self, validated_data):
        password = validated_data.pop('password')
        validated_data.pop('password_confirm')

        return User.objects.create_user(password=password, **validated_data)
