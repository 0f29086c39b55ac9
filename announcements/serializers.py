"""
announcements/serializers.py

DRF serializers that define the JSON shapes returned to the public site and
the admin panel. Keep these thin and explicit; they are our API contract.

- Announcement: writable content fields; priority badge/color, expiry state and
  the push audit trail are read-only.
- `send_push` is write-only and only meaningful on create.
"""
from rest_framework import serializers

from .models import Announcement, BoardMember, Program
from .priority import Priority

PUSH_AUDIT_FIELDS = [
    "push_sent",
    "push_sent_at",
    "push_recipients",
    "push_failed",
    "push_error",
    "push_attempted_at",
]


class AnnouncementSerializer(serializers.ModelSerializer):
    priority = serializers.ChoiceField(choices=Priority.choices, default=Priority.LOW)
    priority_label = serializers.SerializerMethodField()
    priority_color = serializers.SerializerMethodField()
    is_expired = serializers.SerializerMethodField()
    is_live = serializers.SerializerMethodField()
    send_push = serializers.BooleanField(write_only=True, required=False, default=False)

    class Meta:
        model = Announcement
        fields = [
            "id",
            "title",
            "message",
            "priority",
            "priority_label",
            "priority_color",
            "is_active",
            "expiry_date",
            "is_expired",
            "is_live",
            "published_by",
            "created_at",
            "updated_at",
            "send_push",
            *PUSH_AUDIT_FIELDS,
        ]
        read_only_fields = ["id", "published_by", "created_at", "updated_at", *PUSH_AUDIT_FIELDS]

    def get_priority_label(self, obj) -> str:
        return obj.priority_enum.display_label

    def get_priority_color(self, obj) -> str:
        return obj.priority_enum.color

    def get_is_expired(self, obj) -> bool:
        return obj.is_expired()

    def get_is_live(self, obj) -> bool:
        return obj.is_live()

    def validate_title(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Please fill in title and message")
        return value

    def validate_message(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Please fill in title and message")
        return value

    def create(self, validated_data):
        validated_data.pop("send_push", None)
        return super().create(validated_data)

    def update(self, instance, validated_data):
        # Pushes only go out on publish; editing never re-sends.
        validated_data.pop("send_push", None)
        return super().update(instance, validated_data)


class PublicAnnouncementSerializer(serializers.ModelSerializer):
    """What a visitor's page needs to render the modal or the floating button."""
    priority_label = serializers.SerializerMethodField()
    priority_color = serializers.SerializerMethodField()

    class Meta:
        model = Announcement
        fields = ["id", "title", "message", "priority", "priority_label", "priority_color", "expiry_date", "created_at"]
        read_only_fields = fields

    def get_priority_label(self, obj) -> str:
        return obj.priority_enum.display_label

    def get_priority_color(self, obj) -> str:
        return obj.priority_enum.color


class ShowAnnouncementMessageSerializer(serializers.Serializer):
    """Body of POST /api/announcements/show/: a SHOW_ANNOUNCEMENT message."""
    type = serializers.ChoiceField(choices=["SHOW_ANNOUNCEMENT"])
    announcement = serializers.DictField()

    def validate_announcement(self, value):
        if value.get("id") in (None, ""):
            raise serializers.ValidationError("announcement.id is required")
        return value


class PositionSerializer(serializers.Serializer):
    x = serializers.FloatField()
    y = serializers.FloatField()


class BellSerializer(serializers.Serializer):
    # id of the announcement already on the page, if any
    current = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ProgramSerializer(serializers.ModelSerializer):
    class Meta:
        model = Program
        fields = ["id", "name", "timing", "icon", "is_active", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class PublicProgramSerializer(serializers.ModelSerializer):
    class Meta:
        model = Program
        fields = ["name", "timing", "icon"]
        read_only_fields = fields


class BoardMemberSerializer(serializers.ModelSerializer):
    class Meta:
        model = BoardMember
        fields = ["id", "name", "order", "is_active", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required.")
        return value


class PublicBoardMemberSerializer(serializers.ModelSerializer):
    order = serializers.IntegerField(source="display_order", read_only=True)

    class Meta:
        model = BoardMember
        fields = ["name", "order"]
        read_only_fields = fields