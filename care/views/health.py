from django.db import connections
from django.utils import timezone
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def healthcheck(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        db_ok = bool(row and row[0] == 1)
    except Exception as e:
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(e)}}, status=503)
    return Response({'ok': True, 'data': {
        'status': 'ok',
        'db': db_ok,
        'timestamp': timezone.now().isoformat(),
    }})
