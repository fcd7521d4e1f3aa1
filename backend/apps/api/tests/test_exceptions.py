from rest_framework import status
from rest_framework.exceptions import (
    NotAuthenticated,
    NotFound,
    ParseError,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.test import APIRequestFactory

from apps.api.exceptions import ApplicationError, global_exception_handler

factory = APIRequestFactory()


class DummyView:
    pass


def _context(request):
    return {"request": request, "view": DummyView()}


def test_application_error_returns_structured_response():
    request = factory.get("/api/cart/")
    exc = ApplicationError(
        "CONFLICT",
        "Cart already exists",
        status_code=status.HTTP_409_CONFLICT,
        details={"cartId": "12"},
    )
    response = global_exception_handler(exc, _context(request))
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.data["success"] is False
    assert response.data["message"] == "Cart already exists"
    assert response.data["error"]["code"] == "CONFLICT"
    assert response.data["error"]["details"] == {"cartId": "12"}


def test_validation_error_preserves_details():
    request = factory.post("/api/cart/", data={})
    exc = ValidationError({"quantity": ["This field is required."]})
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert payload["code"] == "VALIDATION_ERROR"
    assert response.data["message"] == "This field is required."
    assert payload["details"] == {"quantity": ["This field is required."]}


def test_validation_error_without_messages_uses_generic_text():
    request = factory.post("/api/cart/", data={})
    response = global_exception_handler(ValidationError({}), _context(request))
    assert response.data["message"] == "Validation failed"


def test_validation_error_message_follows_field_order():
    request = factory.post("/api/cart/", data={})
    exc = ValidationError(
        {"productId": ["productId must be an integer"], "quantity": ["Quantity must be a positive number"]}
    )
    response = global_exception_handler(exc, _context(request))
    assert response.data["message"] == "productId must be an integer"


def test_parse_error_is_validation_error():
    request = factory.post("/api/cart/")
    response = global_exception_handler(ParseError("Malformed JSON"), _context(request))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data["error"]["code"] == "VALIDATION_ERROR"
    assert response.data["message"] == "Malformed JSON"


def test_not_authenticated_maps_to_unauthorized():
    request = factory.get("/api/cart/")
    response = global_exception_handler(NotAuthenticated(), _context(request))
    assert response.data["error"]["code"] == "UNAUTHORIZED"
    assert response.data["message"] == "Authentication credentials were not provided."


def test_not_found_and_media_type_codes():
    request = factory.get("/api/cart/item/1/")
    not_found = global_exception_handler(NotFound(), _context(request))
    media = global_exception_handler(UnsupportedMediaType("text/plain"), _context(request))
    assert not_found.status_code == status.HTTP_404_NOT_FOUND
    assert not_found.data["error"]["code"] == "NOT_FOUND"
    assert media.status_code == status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    assert media.data["error"]["code"] == "UNSUPPORTED_MEDIA_TYPE"


def test_unhandled_exception_returns_generic_message():
    request = factory.get("/api/cart/")
    response = global_exception_handler(RuntimeError("boom"), _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert payload["code"] == "SERVER_ERROR"
    assert response.data["message"] == "Server error"
    assert "details" not in payload
