# ===========================================================
# users/urls.py
# ===========================================================

from rest_framework.routers import SimpleRouter

from .views import UserViewSet

app_name = "users"

# ===========================================================
# ROUTES SUMMARY
# ===========================================================
# GET     /api/users/             → Paginated user list
# POST    /api/users/             → Create employee (Admin)
# GET     /api/users/profile/     → Logged-in user's profile
# GET     /api/users/<id>/        → User detail
# PUT     /api/users/<id>/        → Update (self or Admin)
# DELETE  /api/users/<id>/        → Delete employee (Admin)
# ===========================================================

router = SimpleRouter()
router.register(r"", UserViewSet, basename="user")

urlpatterns = router.urls
