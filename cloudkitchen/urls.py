from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path("", include("authentication.urls")),
    path("", include("availability.urls")),
    path("", include("orders.urls")),
    path("", include("inventory.urls")),
]
