# mat_core/iam/auth.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from mat_core.iam.session import cookie_name, session_from_token


class SessionCookieAuthentication(JWTAuthentication):
    """
    Populates request.user from the `user` session cookie.

    Never raises: an absent or bad cookie leaves the request anonymous and the auth gate
    answers with the proper 401/403/404 in the route's own error shape.
    """

    def authenticate(self, request):
        raw_token = request.COOKIES.get(cookie_name())
        if not raw_token:
            return None

        try:
            validated_token = self.get_validated_token(raw_token)
        except InvalidToken:
            return None

        session = session_from_token(validated_token)
        if session is None:
            return None

        user = get_user_model().objects.filter(pk=session.id, is_active=True).first()
        if user is None:
            return None

        return user, validated_token
