"""Background scheduler for membership expiry."""
import logging
from typing import Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import AsyncSessionLocal
from app.services.membership_service import membership_service

logger = logging.getLogger(__name__)


class MembershipExpiryScheduler:
    """Periodically expires paid memberships whose term has ended."""

    def __init__(self, session_factory: Optional[Callable[[], AsyncSession]] = None):
        """Initialize the scheduler."""
        self.scheduler = AsyncIOScheduler()
        self.session_factory = session_factory or AsyncSessionLocal
        self.running = False

    async def start(self):
        """Start the scheduler."""
        if self.running:
            logger.warning("Scheduler is already running")
            return

        logger.info("Starting membership expiry scheduler")

        self.scheduler.add_job(
            self.expire_memberships,
            IntervalTrigger(minutes=settings.MEMBERSHIP_EXPIRY_INTERVAL_MINUTES),
            id="membership_expiry_job",
            name="Expire overdue memberships",
            replace_existing=True,
        )

        self.scheduler.start()
        self.running = True
        logger.info("Membership expiry scheduler started")

    async def stop(self):
        """Stop the scheduler."""
        if not self.running:
            return

        logger.info("Stopping membership expiry scheduler")
        self.scheduler.shutdown(wait=False)
        self.running = False
        logger.info("Membership expiry scheduler stopped")

    async def expire_memberships(self) -> int:
        """
        Run one expiry sweep.

        Returns:
            Number of memberships expired, 0 if the sweep failed
        """
        logger.debug("Running membership expiry sweep")

        async with self.session_factory() as db:
            try:
                expired = await membership_service.expire_overdue(db)
            except Exception as e:
                logger.error(f"Membership expiry sweep failed: {e}", exc_info=True)
                await db.rollback()
                return 0

        if expired:
            logger.info(f"Expired {expired} overdue membership(s)")
        return expired


# Singleton instance
membership_scheduler = MembershipExpiryScheduler()
