from django.urls import path, re_path

from .views import CartItemView, CartView

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    # Malformed ids reach the view and are rejected there with a 400 envelope.
    re_path(
        r"^item/(?P<cart_item_id>[^/]+)/?$",
        CartItemView.as_view(),
        name="api-cart-item",
    ),
]
