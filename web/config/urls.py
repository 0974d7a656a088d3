from django.urls import include, re_path

urlpatterns = [
    re_path(r"^v1/orders", include("apps.orders.urls")),
]
