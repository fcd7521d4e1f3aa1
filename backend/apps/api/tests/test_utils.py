import unittest
from rest_framework import status
from rest_framework.exceptions import ValidationError
from apps.api.utils import error_response, success_response


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "Cart not found", {"userId": "1"})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIs(resp.data["success"], False)
        self.assertEqual(resp.data["message"], "Cart not found")
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.data["error"]["status"], status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["details"], {"userId": "1"})

    def test_unknown_code_defaults_to_bad_request(self):
        resp = error_response("weird", "oops")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"]["code"], "WEIRD")
        self.assertNotIn("details", resp.data["error"])

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.data["error"]["status"], status.HTTP_202_ACCEPTED)

    def test_validation_error_details_are_flattened(self):
        resp = error_response(
            "VALIDATION_ERROR", "Validation failed", ValidationError({"quantity": ["bad"]})
        )
        self.assertEqual(resp.data["error"]["details"], {"quantity": ["bad"]})

    def test_headers_are_forwarded(self):
        resp = error_response("TOO_MANY_REQUESTS", "Slow down", headers={"Retry-After": 5})
        self.assertEqual(resp.status_code, status.HTTP_429_TOO_MANY_REQUESTS)
        self.assertEqual(resp["Retry-After"], "5")

    def test_rejects_blank_code_or_message(self):
        with self.assertRaises(ValueError):
            error_response(" ", "oops")
        with self.assertRaises(ValueError):
            error_response("NOT_FOUND", "")
        with self.assertRaises(TypeError):
            error_response(404, "oops")


class SuccessResponseTests(unittest.TestCase):
    def test_wraps_payload_in_envelope(self):
        resp = success_response({"cart": {"id": 1}})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data, {"success": True, "data": {"cart": {"id": 1}}})

    def test_optional_message(self):
        resp = success_response(message="Done", http_status=status.HTTP_201_CREATED)
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data, {"success": True, "message": "Done"})
