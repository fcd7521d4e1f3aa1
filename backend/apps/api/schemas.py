from drf_spectacular.utils import inline_serializer
from rest_framework import serializers


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.JSONField(required=False)


class ErrorResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=False)
    message = serializers.CharField()
    error = ErrorDetailSerializer()


def success_envelope(
    name: str, data_serializer: serializers.Serializer
) -> serializers.Serializer:
    """Inline serializer describing ``{"success": true, "data": {...}}`` for the schema."""
    return inline_serializer(
        name=name,
        fields={
            "success": serializers.BooleanField(default=True),
            "data": data_serializer,
        },
    )
