"""
Visit record endpoints (``medicalRecords.*``), clinical staff only.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from care.serializers.common import IdSerializer
from care.serializers.medical_records import (
    DoctorIdQuerySerializer,
    MedicalRecordCreateSerializer,
    MedicalRecordSerializer,
    MedicalRecordUpdateSerializer,
    PatientHistoryQuerySerializer,
)
from care.services import medical_records as record_service
from care.services.audit import log_action

from ..permissions import IsAdminOrDoctor, IsAdminRole
from .common import ok, validated, without_id


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminOrDoctor])
def create_medical_record(request):
    vd = validated(MedicalRecordCreateSerializer, request.data)
    record = record_service.create_medical_record(**vd)
    log_action(user=request.user, action='medical_record.create', object_type='medical_record',
               object_id=record.id, detail={'patient_id': record.patient_id, 'doctor_id': record.doctor_id})
    return ok(MedicalRecordSerializer(record).data, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def list_medical_records(request):
    return ok(MedicalRecordSerializer(record_service.list_medical_records(), many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrDoctor])
def get_medical_record(request):
    vd = validated(IdSerializer, request.query_params)
    record = record_service.get_medical_record(vd['id'])
    return ok(MedicalRecordSerializer(record).data if record else None)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminOrDoctor])
def update_medical_record(request):
    vd = validated(MedicalRecordUpdateSerializer, request.data)
    fields = without_id(vd)
    record = record_service.update_medical_record(vd['id'], **fields)
    log_action(user=request.user, action='medical_record.update', object_type='medical_record',
               object_id=record.id, detail={'fields': sorted(fields)})
    return ok(MedicalRecordSerializer(record).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def delete_medical_record(request):
    vd = validated(IdSerializer, request.data)
    record_service.delete_medical_record(vd['id'])
    log_action(user=request.user, action='medical_record.delete', object_type='medical_record',
               object_id=vd['id'])
    return ok({'success': True})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrDoctor])
def patient_history(request):
    q = validated(PatientHistoryQuerySerializer, request.query_params)
    qs = record_service.patient_history(q['patient_id'], limit=q['limit'], offset=q['offset'])
    return ok(MedicalRecordSerializer(qs, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrDoctor])
def todays_records(request):
    q = validated(DoctorIdQuerySerializer, request.query_params)
    return ok(MedicalRecordSerializer(record_service.todays_records(q['doctor_id']), many=True).data)
