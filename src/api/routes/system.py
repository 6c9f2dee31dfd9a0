"""
System endpoints - Task introspection and health
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from lifecycle.task_registry import TaskRegistry
from services.service_container import ServiceContainer

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/tasks/summary")
async def get_task_summary() -> Dict[str, Any]:
    """
    High-level task summary.

    Returns:
        - summary: Human-readable summary string
        - total / running / failed / cancelled counts
    """
    registry = TaskRegistry.instance()
    return {"summary": registry.summary(), **registry.summary_counts()}


@router.get("/tasks")
async def get_all_tasks() -> Dict[str, Any]:
    """Every tracked task with its status"""
    tasks = []
    for r in TaskRegistry.instance().list_all():
        tasks.append({
            "id": r.info.id,
            "category": r.info.category.name,
            "description": r.info.description,
            "created_at": r.info.created_at,
            "finished_at": r.finished_at,
            "status": r.status,
            "error": str(r.finished_with_error) if r.finished_with_error else None,
        })

    return {"count": len(tasks), "tasks": tasks}


@router.get("/health")
async def get_system_health(services: ServiceContainer = Depends(get_service_container)) -> Dict[str, Any]:
    """
    Clock and task health.

    status is "degraded" when a tracked task failed or the frame callback
    raised; the clock keeps running either way.
    """
    registry = TaskRegistry.instance()
    engine = services.clock_engine
    failed = len(registry.failed())

    return {
        "status": "degraded" if failed or engine.scheduler.frame_errors else "healthy",
        "clock_running": engine.running,
        "frame_errors": engine.scheduler.frame_errors,
        "failed_tasks": failed,
        "config_warnings": len(engine.config_warnings),
    }
