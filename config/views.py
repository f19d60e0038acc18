from django.db import connection
from django.http import JsonResponse


def _json_error(message, code):
    return JsonResponse({'error': message, 'status': code}, status=code)


def health_check(request):
    """Liveness probe; fails if the database is unreachable."""
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    return _json_error('Not found', 404)


def error_500(request):
    return _json_error('Internal server error', 500)
