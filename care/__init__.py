"""Clinic application.

This package contains the models, services, serializers, views and route
registrations behind the clinic RPC API.
"""
