"""
accounts/serializers.py

- EmailOrUsernameTokenObtainPairSerializer: JWT login accepting either the
  email address or the username, returning identity fields for the admin UI.
- MeSerializer: the logged-in operator's profile.
"""
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.models import update_last_login
from rest_framework import exceptions, serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.settings import api_settings

User = get_user_model()


class EmailOrUsernameTokenObtainPairSerializer(TokenObtainPairSerializer):
    username_field = "email_or_username"

    def _resolve_username(self, login: str) -> str:
        if "@" in login:
            match = User.objects.filter(email__iexact=login).first()
            if match is not None:
                return match.get_username()
        return login

    def validate(self, attrs):
        login = (attrs.get(self.username_field) or "").strip()
        self.user = authenticate(
            self.context.get("request"),
            username=self._resolve_username(login),
            password=attrs.get("password"),
        )
        if not api_settings.USER_AUTHENTICATION_RULE(self.user):
            raise exceptions.AuthenticationFailed(self.error_messages["no_active_account"], "no_active_account")

        refresh = self.get_token(self.user)
        if api_settings.UPDATE_LAST_LOGIN:
            update_last_login(None, self.user)
        return {
            "refresh": str(refresh),
            "access": str(refresh.access_token),
            "username": self.user.get_username(),
            "email": self.user.email,
        }


class MeSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email", "is_staff"]
        read_only_fields = fields
