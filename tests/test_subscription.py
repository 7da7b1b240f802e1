from datetime import timedelta

from auth.models import User, SubscriptionTier
from database import utcnow
from payment.models import Payment, PaymentStatus


def create_payment(client, headers, months=1):
    response = client.post("/subscription/createPayment", json={"tier": "pro", "months": months}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def confirm(client, headers, payment_id):
    return client.post("/subscription/confirmPayment", json={"paymentId": payment_id}, headers=headers)


def get_user(database, email="alice@example.com"):
    with database.session() as db:
        user = db.query(User).filter(User.email == email).one()
        db.expunge(user)
        return user


def test_create_payment(client, database, login):
    body = create_payment(client, login(), months=3)
    assert body["amount"] == 2997
    assert body["currency"] == "USD"
    with database.session() as db:
        payment = db.get(Payment, body["paymentId"])
        assert payment.status == PaymentStatus.pending
        assert payment.subscription_months == 3
        assert payment.expiration_time > payment.created_at


def test_invalid_payment_requests(client, login):
    headers = login()
    for data in ({"tier": "enterprise", "months": 1}, {"tier": "pro", "months": 0}, {"tier": "pro", "months": 13}):
        assert client.post("/subscription/createPayment", json=data, headers=headers).status_code == 422


def test_confirm_upgrades_user(client, database, login):
    headers = login()
    payment_id = create_payment(client, headers, months=6)["paymentId"]
    assert confirm(client, headers, payment_id).json() == {"success": True}

    user = get_user(database)
    assert user.subscription_tier == SubscriptionTier.pro
    # one period from now, whatever the number of months bought
    assert abs(user.subscription_expiry - (utcnow() + timedelta(days=30))) < timedelta(minutes=1)
    with database.session() as db:
        payment = db.get(Payment, payment_id)
        assert payment.status == PaymentStatus.completed
        assert payment.completed_at is not None

    assert client.get("/auth/me", headers=headers).json()["subscriptionTier"] == "pro"


def test_second_confirm_is_noop(client, database, login):
    headers = login()
    payment_id = create_payment(client, headers)["paymentId"]
    confirm(client, headers, payment_id)
    expiry = get_user(database).subscription_expiry
    assert confirm(client, headers, payment_id).status_code == 200
    assert get_user(database).subscription_expiry == expiry


def test_confirm_other_users_payment(client, database, login):
    payment_id = create_payment(client, login())["paymentId"]
    assert confirm(client, login(email="bob@example.com"), payment_id).status_code == 403
    assert get_user(database).subscription_tier == SubscriptionTier.free


def test_confirm_unknown_payment(client, login):
    assert confirm(client, login(), "missing").status_code == 404


def test_confirm_failed_payment(client, database, login):
    headers = login()
    payment_id = create_payment(client, headers)["paymentId"]
    with database.session() as db:
        db.get(Payment, payment_id).status = PaymentStatus.failed
        db.commit()
    assert confirm(client, headers, payment_id).status_code == 409
    assert get_user(database).subscription_tier == SubscriptionTier.free


def test_confirm_expired_payment(client, database, login):
    headers = login()
    payment_id = create_payment(client, headers)["paymentId"]
    with database.session() as db:
        db.get(Payment, payment_id).expiration_time = utcnow() - timedelta(minutes=1)
        db.commit()
    assert confirm(client, headers, payment_id).status_code == 409
    with database.session() as db:
        assert db.get(Payment, payment_id).status == PaymentStatus.failed


def test_list_payments_newest_first(client, login):
    headers = login()
    first = create_payment(client, headers)["paymentId"]
    second = create_payment(client, headers, months=2)["paymentId"]
    create_payment(client, login(email="bob@example.com"))
    payments = client.get("/subscription/payments", headers=headers).json()
    assert [p["id"] for p in payments] == [second, first]
    assert payments[0]["subscriptionMonths"] == 2
