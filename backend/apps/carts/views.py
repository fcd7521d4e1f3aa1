from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer, success_envelope
from apps.api.utils import error_response, success_response
from apps.common import get_logger
from .commands import AddToCartCommand, UpdateCartItemCommand
from .container import build_cart_service
from .serializers import (
    AddToCartSerializer,
    CartDetailEnvelopeSerializer,
    CartDetailReadSerializer,
    CartEnvelopeSerializer,
    CartItemPathSerializer,
    CartReadSerializer,
    UpdateCartItemSerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")

CART_RESPONSE = success_envelope("CartResponse", CartEnvelopeSerializer())
CART_DETAIL_RESPONSE = success_envelope("CartDetailResponse", CartDetailEnvelopeSerializer())
ERROR_RESPONSE = OpenApiResponse(response=ErrorResponseSerializer)


class CartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        summary="Get cart",
        description=(
            "Returns the authenticated user's cart with every line item joined to its "
            "product (including image URLs) and variation, plus total_price and total_items."
        ),
        responses={
            200: CART_DETAIL_RESPONSE,
            401: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            500: ERROR_RESPONSE,
        },
    )
    def get(self, request):
        user_id = int(request.user.id)
        self.log.debug("Fetching cart via API", user_id=user_id)
        dto, error = self.service.get_cart(user_id)
        if error:
            code, message, details = error
            return error_response(code, message, details)
        return success_response({"cart": CartDetailReadSerializer(dto).data})

    @extend_schema(
        summary="Add to cart",
        description=(
            "Adds a product variation to the authenticated user's cart, creating the cart on "
            "first use. Adding a pair already in the cart increases its quantity."
        ),
        request=AddToCartSerializer,
        responses={
            200: CART_RESPONSE,
            400: ERROR_RESPONSE,
            401: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            500: ERROR_RESPONSE,
        },
    )
    def post(self, request):
        user_id = int(request.user.id)
        serializer = AddToCartSerializer(data=AddToCartCommand.normalize(request.data))
        serializer.is_valid(raise_exception=True)
        command = AddToCartCommand.from_validated(serializer.validated_data)
        dto, error = self.service.add_to_cart(user_id, command)
        if error:
            code, message, details = error
            return error_response(code, message, details)
        self.log.info(
            "Cart item added via API",
            user_id=user_id,
            cart_id=dto.id,
            items=len(dto.items),
        )
        return success_response({"cart": CartReadSerializer(dto).data})


class CartItemView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemView")

    @staticmethod
    def _validated_item_id(cart_item_id) -> int:
        serializer = CartItemPathSerializer(data={"cartItemId": cart_item_id})
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data["cartItemId"]

    @extend_schema(
        summary="Update cart item quantity",
        parameters=[OpenApiParameter("cart_item_id", int, OpenApiParameter.PATH)],
        request=UpdateCartItemSerializer,
        responses={
            200: CART_RESPONSE,
            400: ERROR_RESPONSE,
            401: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            500: ERROR_RESPONSE,
        },
    )
    def patch(self, request, cart_item_id):
        user_id = int(request.user.id)
        item_id = self._validated_item_id(cart_item_id)
        serializer = UpdateCartItemSerializer(
            data=UpdateCartItemCommand.normalize(request.data)
        )
        serializer.is_valid(raise_exception=True)
        command = UpdateCartItemCommand.from_validated(item_id, serializer.validated_data)
        dto, error = self.service.update_cart_item(user_id, command)
        if error:
            code, message, details = error
            return error_response(code, message, details)
        self.log.info(
            "Cart item updated via API", user_id=user_id, cart_item_id=item_id
        )
        return success_response({"cart": CartReadSerializer(dto).data})

    @extend_schema(
        summary="Delete cart item",
        description="Removes the line item; the response carries the cart with an empty item list.",
        parameters=[OpenApiParameter("cart_item_id", int, OpenApiParameter.PATH)],
        responses={
            200: CART_RESPONSE,
            400: ERROR_RESPONSE,
            401: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            500: ERROR_RESPONSE,
        },
    )
    def delete(self, request, cart_item_id):
        user_id = int(request.user.id)
        item_id = self._validated_item_id(cart_item_id)
        dto, error = self.service.delete_cart_item(user_id, item_id)
        if error:
            code, message, details = error
            return error_response(code, message, details)
        self.log.info(
            "Cart item deleted via API", user_id=user_id, cart_item_id=item_id
        )
        return success_response({"cart": CartReadSerializer(dto).data})
