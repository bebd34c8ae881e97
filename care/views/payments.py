"""
Billing endpoints (``payments.*``).

Amounts leave the server as two-decimal strings.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.common import IdSerializer
from care.serializers.payments import (
    PaymentCreateSerializer,
    PaymentHistoryQuerySerializer,
    PaymentSerializer,
)
from care.services import payments as payment_service
from care.services.audit import log_action
from care.services.dashboard import format_money

from ..permissions import IsAdminOrReceptionist, IsAdminRole
from .common import ok, validated


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def create_payment(request):
    vd = validated(PaymentCreateSerializer, request.data)
    payment = payment_service.create_payment(**vd)
    log_action(user=request.user, action='payment.create', object_type='payment', object_id=payment.id,
               detail={'receipt_number': payment.receipt_number, 'total_amount': format_money(payment.total_amount)})
    return ok(PaymentSerializer(payment).data, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def list_payments(request):
    return ok(PaymentSerializer(payment_service.list_payments(), many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def get_payment(request):
    vd = validated(IdSerializer, request.query_params)
    payment = payment_service.get_payment(vd['id'])
    return ok(PaymentSerializer(payment).data if payment else None)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def payment_history(request):
    q = validated(PaymentHistoryQuerySerializer, request.query_params)
    qs = payment_service.payment_history(**q)
    return ok(PaymentSerializer(qs, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def payment_receipt(request):
    vd = validated(IdSerializer, request.query_params)
    receipt = payment_service.payment_receipt(vd['id'])
    if receipt is None:
        return ok(None)
    p = receipt['payment']
    for key in ('doctor_service_fee', 'medicine_fee', 'total_amount'):
        p[key] = format_money(p[key])
    return ok(receipt)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def payment_statistics(request):
    stats = payment_service.payment_statistics()
    for window in stats.values():
        window['total_amount'] = format_money(window['total_amount'])
    return ok(stats)
