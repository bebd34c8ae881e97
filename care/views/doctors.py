"""
Doctor profile endpoints (``doctors.*``).
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated

from care.exceptions import NotFound
from care.serializers.common import IdSerializer
from care.serializers.doctors import (
    DoctorCreateSerializer,
    DoctorPatientsQuerySerializer,
    DoctorSerializer,
    DoctorUpdateSerializer,
)
from care.serializers.medical_records import MedicalRecordSerializer
from care.serializers.patients import PatientSerializer
from care.services import doctors as doctor_service
from care.services.audit import log_action

from ..permissions import IsAdminOrDoctor, IsAdminRole, IsDoctorProfileOwner
from .common import ok, validated, without_id


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def create_doctor(request):
    vd = validated(DoctorCreateSerializer, request.data)
    doctor = doctor_service.create_doctor(**vd)
    log_action(user=request.user, action='doctor.create', object_type='doctor', object_id=doctor.id,
               detail={'user_id': doctor.user_id})
    return ok(DoctorSerializer(doctor).data, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def list_doctors(request):
    return ok(DoctorSerializer(doctor_service.list_doctors(), many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_doctor(request):
    vd = validated(IdSerializer, request.query_params)
    doctor = doctor_service.get_doctor(vd['id'])
    return ok(DoctorSerializer(doctor).data if doctor else None)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminOrDoctor])
def update_doctor(request):
    vd = validated(DoctorUpdateSerializer, request.data)
    doctor = doctor_service.get_doctor(vd['id'])
    if doctor is None:
        raise NotFound('Doctor', vd['id'])
    # doctors may only edit their own profile
    if not IsDoctorProfileOwner().has_object_permission(request, None, doctor):
        raise PermissionDenied('You can only update your own doctor profile')
    fields = without_id(vd)
    doctor = doctor_service.update_doctor(doctor.id, **fields)
    log_action(user=request.user, action='doctor.update', object_type='doctor', object_id=doctor.id,
               detail={'fields': sorted(fields)})
    return ok(DoctorSerializer(doctor).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def delete_doctor(request):
    vd = validated(IdSerializer, request.data)
    doctor_service.delete_doctor(vd['id'])
    log_action(user=request.user, action='doctor.delete', object_type='doctor', object_id=vd['id'])
    return ok({'success': True})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrDoctor])
def doctor_patients(request):
    q = validated(DoctorPatientsQuerySerializer, request.query_params)
    rows = doctor_service.doctor_patients(q['doctor_id'], q.get('date'))
    return ok([
        {
            'patient': PatientSerializer(row['patient']).data,
            'medical_record': MedicalRecordSerializer(row['medical_record']).data,
        }
        for row in rows
    ])
