from django.contrib.auth.validators import UnicodeUsernameValidator
from rest_framework import serializers

from authentication.domain.identity import Role
from authentication.domain.models import CustomUser


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = (
            "id",
            "username",
            "email",
            "role",
            "date_joined",
            "updated_at",
        )
        read_only_fields = fields


def _username_field(**kwargs):
    return serializers.CharField(max_length=150, validators=[UnicodeUsernameValidator()], **kwargs)


def _password_field(**kwargs):
    return serializers.CharField(
        write_only=True, trim_whitespace=False, style={"input_type": "password"}, **kwargs
    )


class SignupSerializer(serializers.Serializer):
    """
    Signup request. There is no role field: every signup is a buyer.

    Uniqueness of email and username is checked by AuthService so a duplicate
    answers with a conflict rather than a validation error.
    """

    email = serializers.EmailField(help_text="User's email address, used to log in")
    username = _username_field(help_text="Unique username")
    password = _password_field(help_text="User's password")


class LoginSerializer(serializers.Serializer):
    # Not an EmailField: a malformed email is just another wrong credential
    email = serializers.CharField(help_text="User's email address")
    password = _password_field(help_text="User's password")


class AdminUserCreateSerializer(serializers.Serializer):
    """Admin user creation; any role may be assigned."""

    username = _username_field()
    email = serializers.EmailField()
    password = _password_field()
    role = serializers.ChoiceField(choices=Role.choices())


class AdminUserUpdateSerializer(serializers.Serializer):
    """Admin user update; validated with ``partial=True`` and other keys are ignored."""

    username = _username_field()
    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=Role.choices())

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("partial", True)
        super().__init__(*args, **kwargs)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide at least one of username, email or role")
        return attrs
