"""
Health Check Endpoints

Liveness and readiness probes for the container orchestrator.
"""

import logging

from django.db import DEFAULT_DB_ALIAS, connections
from django.db.migrations.executor import MigrationExecutor
from django.http import JsonResponse

from infrastructure.container import get_container

logger = logging.getLogger(__name__)


def health_live(request):
    """Liveness probe: the process answers HTTP."""
    return JsonResponse({"status": "ok"})


def health_ready(request):
    """
    Readiness probe: can this instance serve API traffic?

    Checks:
        database: a trivial query succeeds
        migrations: no unapplied migrations
        services: the service container is wired

    Returns 200 with ``{"status": "ready", "checks": {...}}`` or 503 with
    ``"not_ready"`` and the failing check set to false.
    """
    checks = {"database": _database_ok()}
    checks["migrations"] = checks["database"] and _migrations_applied()
    checks["services"] = _services_wired()

    ready = all(checks.values())
    return JsonResponse({"status": "ready" if ready else "not_ready", "checks": checks}, status=200 if ready else 503)


def _database_ok() -> bool:
    try:
        with connections[DEFAULT_DB_ALIAS].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        return True
    except Exception as e:
        logger.error(f"Readiness: database check failed: {e}")
        return False


def _migrations_applied() -> bool:
    try:
        executor = MigrationExecutor(connections[DEFAULT_DB_ALIAS])
        pending = executor.migration_plan(executor.loader.graph.leaf_nodes())
    except Exception as e:
        logger.error(f"Readiness: migration check failed: {e}")
        return False
    if pending:
        logger.warning(f"Readiness: {len(pending)} unapplied migrations")
    return not pending


def _services_wired() -> bool:
    try:
        get_container().order_service()
        return True
    except Exception as e:
        logger.error(f"Readiness: service container unavailable: {e}")
        return False
