from datetime import timedelta

from rest_framework import serializers

from care.models import Payment

from .common import DATETIME_INPUT_FORMATS, MoneyField, PageSerializer


class PaymentSerializer(serializers.ModelSerializer):
    doctor_service_fee = MoneyField(read_only=True)
    medicine_fee = MoneyField(read_only=True)
    total_amount = MoneyField(read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id', 'patient_id', 'medical_record_id', 'cashier_id', 'doctor_service_fee',
            'medicine_fee', 'total_amount', 'payment_date', 'receipt_number',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField(min_value=1)
    medical_record_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    cashier_id = serializers.IntegerField(min_value=1)
    doctor_service_fee = MoneyField(min_value=0)
    medicine_fee = MoneyField(min_value=0)
    receipt_number = serializers.CharField(max_length=64)


class PaymentHistoryQuerySerializer(PageSerializer):
    patient_id = serializers.IntegerField(min_value=1, required=False)
    start_date = serializers.DateTimeField(required=False, input_formats=DATETIME_INPUT_FORMATS)
    end_date = serializers.DateTimeField(required=False, input_formats=DATETIME_INPUT_FORMATS)

    def validate(self, attrs):
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({'end_date': ['end_date must not precede start_date']})
        raw_end = str(self.initial_data.get('end_date') or '')
        if end and len(raw_end) == 10:
            # a bare date covers that whole day
            attrs['end_date'] = end + timedelta(days=1) - timedelta(microseconds=1)
        return attrs
