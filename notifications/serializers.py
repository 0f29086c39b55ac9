"""
notifications/serializers.py

Request bodies accepted by the notification endpoints. Responses are built
from the message dataclasses directly.
"""
from rest_framework import serializers


class SubscribeSerializer(serializers.Serializer):
    fcmToken = serializers.CharField(max_length=4096, trim_whitespace=True)


class BackgroundMessageSerializer(serializers.Serializer):
    payload = serializers.DictField()
    focused = serializers.BooleanField(default=False)
    received_ms = serializers.IntegerField(required=False, min_value=0)


class NotificationClickSerializer(serializers.Serializer):
    action = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")
    data = serializers.DictField(required=False, default=dict)
    windows = serializers.ListField(child=serializers.DictField(), required=False, default=list)


class WipeTokensSerializer(serializers.Serializer):
    confirm = serializers.CharField()

    def validate_confirm(self, value):
        if value != "DELETE":
            raise serializers.ValidationError('Type "DELETE" to confirm wiping every token.')
        return value
