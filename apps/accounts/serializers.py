from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .models import User


class UserSerializer(serializers.ModelSerializer):
    """The signed-in user's own profile."""

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name', 'phone', 'created_at', 'last_login']
        read_only_fields = fields


class UserMembershipSerializer(serializers.Serializer):
    company_id = serializers.UUIDField()
    company_name = serializers.CharField(source='company.name')
    role = serializers.CharField()


class CurrentUserSerializer(UserSerializer):
    """Profile plus the companies the user can work in."""

    companies = serializers.SerializerMethodField()

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['companies']
        read_only_fields = fields

    def get_companies(self, obj):
        memberships = obj.company_memberships.select_related('company').order_by('company__name')
        return UserMembershipSerializer(memberships, many=True).data


class UserRegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    full_name = serializers.CharField(max_length=150)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(write_only=True, style={'input_type': 'password'})

    def validate_full_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Full name is required")
        return value

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({'password_confirm': 'Passwords do not match'})
        candidate = User(email=attrs['email'], full_name=attrs['full_name'])
        try:
            validate_password(attrs['password'], candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({'password': list(e.messages)})
        return attrs


class UserLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})


class ProfileUpdateSerializer(serializers.Serializer):
    """``phone: null`` clears the phone number. Email cannot be changed."""

    full_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)

    def validate_phone(self, value):
        return value or ''


class UserMinimalSerializer(serializers.ModelSerializer):
    """User as shown inside company member lists."""

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name']
        read_only_fields = fields
