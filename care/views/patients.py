"""
Patient registry endpoints (``patients.*``).

Any signed-in role may read; the front desk and administrators register
and edit; only administrators delete.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.common import IdSerializer
from care.serializers.patients import (
    PatientCreateSerializer,
    PatientListQuerySerializer,
    PatientSearchSerializer,
    PatientSerializer,
    PatientUpdateSerializer,
)
from care.services import patients as patient_service
from care.services.audit import log_action

from ..permissions import IsAdminOrReceptionist, IsAdminRole
from .common import ok, validated, without_id


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def create_patient(request):
    vd = validated(PatientCreateSerializer, request.data)
    patient = patient_service.create_patient(**vd)
    log_action(user=request.user, action='patient.create', object_type='patient', object_id=patient.id,
               detail={'medical_record_number': patient.medical_record_number})
    return ok(PatientSerializer(patient).data, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def list_patients(request):
    q = validated(PatientListQuerySerializer, request.query_params)
    qs = patient_service.list_patients(limit=q.get('limit'), offset=q.get('offset') or 0)
    return ok(PatientSerializer(qs, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_patient(request):
    vd = validated(IdSerializer, request.query_params)
    patient = patient_service.get_patient(vd['id'])
    return ok(PatientSerializer(patient).data if patient else None)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def update_patient(request):
    vd = validated(PatientUpdateSerializer, request.data)
    fields = without_id(vd)
    patient = patient_service.update_patient(vd['id'], **fields)
    log_action(user=request.user, action='patient.update', object_type='patient', object_id=patient.id,
               detail={'fields': sorted(fields)})
    return ok(PatientSerializer(patient).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def delete_patient(request):
    vd = validated(IdSerializer, request.data)
    patient_service.delete_patient(vd['id'])
    log_action(user=request.user, action='patient.delete', object_type='patient', object_id=vd['id'])
    return ok({'success': True})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def search_patients(request):
    q = validated(PatientSearchSerializer, request.query_params)
    qs = patient_service.search_patients(q['query'], limit=q['limit'], offset=q['offset'])
    return ok(PatientSerializer(qs, many=True).data)
