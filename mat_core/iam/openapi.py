from drf_spectacular.extensions import OpenApiAuthenticationExtension


class SessionCookieAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = "mat_core.iam.auth.SessionCookieAuthentication"
    name = "SessionCookie"

    def get_security_definition(self, auto_schema):
        return {
            "type": "apiKey",
            "in": "cookie",
            "name": "user",
            "description": "Signed session token set by POST /api/auth/login/ (24h, HttpOnly).",
        }
