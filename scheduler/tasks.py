# src/scheduler/tasks.py
import logging
from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import Session
from database import Database
from browse.services import BrowseService
from payment.services import PaymentService
from subscription.services import SubscriptionService
from config import settings

logger = logging.getLogger(__name__)


def sweep_expired_sessions(database: Database) -> int:
    """Delete sessions past their auto-delete deadline."""
    if not database.available:
        return 0
    db: Session = database.session()
    try:
        swept = BrowseService.sweep_expired(db)
        if swept:
            logger.info(f"Auto-deleted {swept} expired sessions")
        return swept
    except Exception as e:
        db.rollback()
        logger.error(f"Error in sweep_expired_sessions: {str(e)}", exc_info=True)
        return 0
    finally:
        db.close()


def check_pending_payments(database: Database) -> int:
    """Fail pending payments past their expiration time."""
    if not database.available:
        return 0
    db: Session = database.session()
    try:
        expired = PaymentService.expire_pending(db)
        if expired:
            logger.info(f"Marked {expired} pending payments as failed")
        return expired
    except Exception as e:
        db.rollback()
        logger.error(f"Error in check_pending_payments: {str(e)}", exc_info=True)
        return 0
    finally:
        db.close()


def expire_subscriptions(database: Database) -> int:
    """Downgrade users whose pro period has ended."""
    if not database.available:
        return 0
    db: Session = database.session()
    try:
        downgraded = SubscriptionService.expire_subscriptions(db)
        if downgraded:
            logger.info(f"Downgraded {downgraded} expired subscriptions")
        return downgraded
    except Exception as e:
        db.rollback()
        logger.error(f"Error in expire_subscriptions: {str(e)}", exc_info=True)
        return 0
    finally:
        db.close()


def start_scheduler(database: Database) -> BackgroundScheduler:
    """Start the background scheduler."""
    scheduler = BackgroundScheduler()
    scheduler.add_job(sweep_expired_sessions, 'interval', minutes=settings.SWEEP_INTERVAL_MINUTES, args=[database])
    scheduler.add_job(check_pending_payments, 'interval', minutes=5, args=[database])
    scheduler.add_job(expire_subscriptions, 'interval', hours=1, args=[database])
    scheduler.start()
    return scheduler
