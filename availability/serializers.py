from rest_framework import serializers

from .models import StoreAvailability, StoreHoliday, ManualOverride
from .timeutils import TIME_OF_DAY_RE, DATE_RE, is_valid_timezone, parse_date


class StoreStatusSerializer(serializers.Serializer):
    """Renders a resolver StoreStatus in the storefront's JSON shape"""
    isOpen = serializers.BooleanField(source='is_open')
    status = serializers.CharField()
    message = serializers.CharField()
    holidayName = serializers.CharField(source='holiday_name', required=False, allow_null=True)
    nextOpenTime = serializers.CharField(source='next_open_time', required=False, allow_null=True)
    openingTime = serializers.CharField(source='opening_time')
    closingTime = serializers.CharField(source='closing_time')
    timezone = serializers.CharField()

    def to_representation(self, instance):
        data = super().to_representation(instance)
        for optional in ('holidayName', 'nextOpenTime'):
            if data.get(optional) is None:
                data.pop(optional, None)
        return data


class StoreAvailabilitySerializer(serializers.ModelSerializer):
    shopId = serializers.UUIDField(source='shop_id', read_only=True)
    openingTime = serializers.RegexField(
        TIME_OF_DAY_RE, source='opening_time', required=False,
        error_messages={'invalid': 'Invalid opening time format. Use HH:MM'}
    )
    closingTime = serializers.RegexField(
        TIME_OF_DAY_RE, source='closing_time', required=False,
        error_messages={'invalid': 'Invalid closing time format. Use HH:MM'}
    )
    timezone = serializers.CharField(required=False, max_length=50)
    manualOverride = serializers.ChoiceField(
        choices=ManualOverride.choices, source='manual_override', required=False,
        error_messages={'invalid_choice': 'Invalid manual override value'}
    )
    overrideReason = serializers.CharField(
        source='override_reason', required=False, allow_null=True, allow_blank=True
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = StoreAvailability
        fields = [
            'id', 'shopId', 'openingTime', 'closingTime', 'timezone',
            'manualOverride', 'overrideReason', 'createdAt', 'updatedAt'
        ]
        read_only_fields = ['id']

    def validate_timezone(self, value):
        if not is_valid_timezone(value):
            raise serializers.ValidationError("Unknown timezone. Use an IANA name such as Asia/Kolkata")
        return value


class BulkAvailabilitySerializer(serializers.Serializer):
    openingTime = serializers.RegexField(
        TIME_OF_DAY_RE, required=False,
        error_messages={'invalid': 'Invalid opening time format. Use HH:MM'}
    )
    closingTime = serializers.RegexField(
        TIME_OF_DAY_RE, required=False,
        error_messages={'invalid': 'Invalid closing time format. Use HH:MM'}
    )
    timezone = serializers.CharField(required=False, allow_blank=True, max_length=50)
    overrideReason = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def validate_timezone(self, value):
        if value and not is_valid_timezone(value):
            raise serializers.ValidationError("Unknown timezone. Use an IANA name such as Asia/Kolkata")
        return value


class OverrideToggleSerializer(serializers.Serializer):
    manualOverride = serializers.ChoiceField(
        choices=ManualOverride.choices,
        error_messages={
            'invalid_choice': "Invalid manual override value. Use 'force_open', 'force_close', or 'none'",
            'required': "Valid manualOverride required (none, force_open, force_close)",
        }
    )
    overrideReason = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class HolidaySerializer(serializers.ModelSerializer):
    shopId = serializers.UUIDField(source='shop_id', read_only=True)
    holidayDate = serializers.RegexField(
        DATE_RE, source='holiday_date',
        error_messages={'invalid': 'Invalid date format. Use YYYY-MM-DD'}
    )
    name = serializers.CharField(max_length=100, allow_blank=False)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = StoreHoliday
        fields = ['id', 'shopId', 'holidayDate', 'name', 'createdAt']
        read_only_fields = ['id']

    def validate_holidayDate(self, value):
        try:
            return parse_date(value)
        except ValueError:
            raise serializers.ValidationError('Invalid date. Use a real calendar date in YYYY-MM-DD format')


class HolidayInputSerializer(serializers.Serializer):
    holidayDate = serializers.RegexField(
        DATE_RE, error_messages={'invalid': 'Invalid date format. Use YYYY-MM-DD'}
    )
    name = serializers.CharField(max_length=100, allow_blank=False)

    def validate_holidayDate(self, value):
        try:
            return parse_date(value)
        except ValueError:
            raise serializers.ValidationError('Invalid date. Use a real calendar date in YYYY-MM-DD format')

    def to_internal_value(self, data):
        validated = super().to_internal_value(data)
        return {'holiday_date': validated['holidayDate'], 'name': validated['name']}


class BulkHolidaySerializer(serializers.Serializer):
    holidays = HolidayInputSerializer(many=True, allow_empty=False)
