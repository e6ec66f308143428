# reviews/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from reviews.views import ReviewViewSet

app_name = "reviews"

router = SimpleRouter()
router.register(r"", ReviewViewSet, basename="reviews")

urlpatterns = [
    path("", include(router.urls)),
]
