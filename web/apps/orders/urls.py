from django.urls import re_path
from .views import OrdersCollectionView, OrderCountriesView
app_name = "orders"

# Mounted under "^v1/orders"; the trailing slash is optional
urlpatterns = [
    re_path(r"^/countries/?$", OrderCountriesView.as_view(), name="orders-countries"),
    re_path(r"^/?$", OrdersCollectionView.as_view(), name="orders-collection"),  # GET list / POST create
]
