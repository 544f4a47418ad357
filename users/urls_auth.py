# ===========================================================
# users/urls_auth.py
# ===========================================================

from django.urls import path

from .views import LoginView, RefreshTokenView, RegisterView

app_name = "auth"

# ===========================================================
# ROUTES SUMMARY
# ===========================================================
# POST /api/auth/register/        → Public registration
# POST /api/auth/login/           → JWT login (email + password)
# POST /api/auth/token/refresh/   → Refresh JWT access token
# ===========================================================

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("token/refresh/", RefreshTokenView.as_view(), name="token_refresh"),
]
