"""Background job tasks"""

import asyncio
import structlog

from qrmenu.jobs.celery_app import celery_app

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async functions in sync context"""
    return asyncio.run(coro)


@celery_app.task(name="purge_expired_invitations")
def purge_expired_invitations():
    """Remove unused invitations whose expiry has passed"""
    logger.info("Purging expired invitations")

    async def _purge():
        from qrmenu.database import SessionLocal
        from qrmenu.services.invitations import purge_expired

        async with SessionLocal() as db:
            return await purge_expired(db)

    return run_async(_purge())
