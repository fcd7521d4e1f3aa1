import time

from django.db import connections
from django.db.utils import OperationalError
from django.http import JsonResponse

from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _db_check(alias='default'):
    started = time.time()
    try:
        conn = connections[alias]
        with conn.cursor() as cursor:
            cursor.execute('SELECT 1')
        latency = round((time.time() - started) * 1000, 2)
        logger.debug('Database health check succeeded', alias=alias, latency_ms=latency)
        return {'status': 'ok', 'latency_ms': latency}
    except OperationalError as e:
        logger.warning('Database health check encountered operational error', alias=alias, error=str(e))
        return {'status': 'fail', 'error': str(e)}
    except Exception as e:
        logger.error(
            'Database health check failed unexpectedly',
            alias=alias,
            error=str(e),
            exception=e.__class__.__name__,
        )
        return {'status': 'fail', 'error': str(e), 'exception': e.__class__.__name__}


def live_health(request):
    """Liveness check: process is up and can service requests."""
    logger.debug('Liveness check served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness check: the cart tables live in the default database, so it must answer."""
    checks = {'database': _db_check()}
    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    logger.info('Readiness check evaluated', status=overall_status, failing_components=failing)
    return JsonResponse(
        {'status': overall_status, 'checks': checks},
        status=200 if not failing else 503,
    )
