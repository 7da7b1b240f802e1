from datetime import timedelta

from auth.models import User, SubscriptionTier
from browse.models import BrowsingSession, SessionStatus
from database import Database, utcnow
from payment.models import Payment, PaymentStatus
from scheduler.tasks import sweep_expired_sessions, check_pending_payments, expire_subscriptions


def test_sweep_expired_sessions(database, login, start_session):
    session_id = start_session(login())["sessionId"]
    with database.session() as db:
        db.get(BrowsingSession, session_id).auto_delete_at = utcnow() - timedelta(seconds=1)
        db.commit()

    assert sweep_expired_sessions(database) == 1
    with database.session() as db:
        session = db.get(BrowsingSession, session_id)
        assert session.status == SessionStatus.deleted
        assert session.deleted_at is not None


def test_check_pending_payments(client, database, login):
    headers = login()
    payment_id = client.post("/subscription/createPayment", json={"tier": "pro", "months": 1},
                             headers=headers).json()["paymentId"]
    assert check_pending_payments(database) == 0

    with database.session() as db:
        db.get(Payment, payment_id).expiration_time = utcnow() - timedelta(minutes=1)
        db.commit()
    assert check_pending_payments(database) == 1
    with database.session() as db:
        assert db.get(Payment, payment_id).status == PaymentStatus.failed


def test_expire_subscriptions(database, login):
    login()
    with database.session() as db:
        user = db.query(User).filter(User.email == "alice@example.com").one()
        user.subscription_tier = SubscriptionTier.pro
        user.subscription_expiry = utcnow() - timedelta(days=1)
        db.commit()

    assert expire_subscriptions(database) == 1
    with database.session() as db:
        assert db.query(User).filter(User.email == "alice@example.com").one().subscription_tier == SubscriptionTier.free


def test_tasks_skip_without_database():
    database = Database(None)
    assert not database.connect()
    assert sweep_expired_sessions(database) == 0
    assert check_pending_payments(database) == 0
    assert expire_subscriptions(database) == 0
