"""Background jobs run inside the API process."""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from dishka import AsyncContainer
import logfire

from cluster.application.usecase.invitation import (
    ExpireInvitationsRequest,
    ExpireInvitationsUseCase,
)
from cluster.config import InvitationSettings

SWEEP_JOB_ID = "expire_invitations"


async def run_invitation_sweep(container: AsyncContainer) -> int:
    """Expire overdue invitations in a request scope of its own.

    Errors are logged and swallowed so the next run still happens.

    Returns:
        Number of invitations expired (0 on failure)
    """
    with logfire.span("scheduler.invitation_sweep"):
        try:
            async with container() as request_container:
                use_case = await request_container.get(ExpireInvitationsUseCase)
                result = await use_case.execute(ExpireInvitationsRequest())
        except Exception as e:
            logfire.error("Invitation sweep failed", error=str(e), _exc_info=e)
            return 0
        logfire.info("Invitation sweep finished", expired=result.expired)
        return result.expired


def create_scheduler(
    container: AsyncContainer, settings: InvitationSettings
) -> AsyncIOScheduler:
    """Build the scheduler with the invitation sweep registered.

    The scheduler is returned unstarted; the caller owns start/shutdown.
    """
    scheduler = AsyncIOScheduler(timezone="UTC")
    if settings.sweep_enabled:
        scheduler.add_job(
            run_invitation_sweep,
            trigger=IntervalTrigger(hours=settings.sweep_interval_hours),
            args=[container],
            id=SWEEP_JOB_ID,
            name="Expire overdue invitations",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
    return scheduler
