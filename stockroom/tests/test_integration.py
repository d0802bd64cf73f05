from __future__ import annotations

import io
import re

import pytest
from flask import Flask
from flask.testing import FlaskClient

from stockroom.app import create_app
from stockroom.infrastructure.container import Container
from stockroom.infrastructure.db import ENGINE, Base, SessionLocal
from stockroom.infrastructure.db.models import Product, ResetToken, User

_RESET_LINK = re.compile(r'/resetpassword/([0-9a-f]+)"')


class RecordingSender:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str, str, str]] = []

    def send(self, sent_from, send_to, reply_to, subject, html_body) -> None:
        self.sent.append((sent_from, send_to, reply_to, subject, html_body))


@pytest.fixture(autouse=True)
def reset_database() -> None:
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)


@pytest.fixture()
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture()
def app(sender: RecordingSender) -> Flask:
    container = Container()
    container.email_sender = sender
    return create_app(container)


def _register(client: FlaskClient, email: str = "ada@example.com") -> dict:
    response = client.post(
        "/api/users/register",
        json={"name": "Ada", "email": email, "password": "secret1"},
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_register_login_logout_flow(app: Flask) -> None:
    with app.test_client() as client:
        registered = _register(client)
        assert client.get_cookie("token")

        duplicate = client.post(
            "/api/users/register",
            json={"name": "Ada", "email": "ADA@example.com", "password": "secret1"},
        )
        assert duplicate.status_code == 400
        assert duplicate.get_json()["message"] == "Email has already been registered"

        wrong = client.post(
            "/api/users/login", json={"email": "ada@example.com", "password": "wrong-pass"}
        )
        assert wrong.status_code == 400
        assert wrong.get_json()["message"] == "Invalid email or password"

        login = client.post(
            "/api/users/login", json={"email": "ada@example.com", "password": "secret1"}
        )
        assert login.status_code == 200
        assert login.get_json()["_id"] == registered["_id"]

        profile = client.get("/api/users/getuser")
        assert profile.status_code == 200
        assert profile.get_json()["email"] == "ada@example.com"

        assert client.get("/api/users/loggedin").get_json() is True
        assert client.get("/api/users/logout").status_code == 200
        assert client.get_cookie("token") is None
        assert client.get("/api/users/loggedin").get_json() is False
        assert client.get("/api/users/getuser").status_code == 401

    session = SessionLocal()
    try:
        row = session.query(User).one()
        assert row.password_hash != "secret1"
    finally:
        session.close()


def test_update_profile_and_change_password(app: Flask) -> None:
    with app.test_client() as client:
        token = _register(client)["token"]
        client.delete_cookie("token")

        updated = client.patch(
            "/api/users/updateuser", json={"phone": "+44 1234", "bio": "Stock lead"},
            headers=_bearer(token),
        )
        assert updated.status_code == 200
        assert updated.get_json()["name"] == "Ada"
        assert updated.get_json()["phone"] == "+44 1234"

        bad = client.patch(
            "/api/users/changepassword",
            json={"oldPassword": "nope-nope", "password": "secret2"},
            headers=_bearer(token),
        )
        assert bad.status_code == 400
        assert bad.get_json()["message"] == "Old password is incorrect"

        ok = client.patch(
            "/api/users/changepassword",
            json={"oldPassword": "secret1", "password": "secret2"},
            headers=_bearer(token),
        )
        assert ok.status_code == 200

        relogin = client.post(
            "/api/users/login", json={"email": "ada@example.com", "password": "secret2"}
        )
        assert relogin.status_code == 200


def test_forgot_and_reset_password_flow(app: Flask, sender: RecordingSender) -> None:
    with app.test_client() as client:
        _register(client)

        missing = client.post("/api/users/forgotpassword", json={"email": "ghost@example.com"})
        assert missing.status_code == 404
        assert missing.get_json()["message"] == "User does not exist"

        forgot = client.post("/api/users/forgotpassword", json={"email": "ada@example.com"})
        assert forgot.status_code == 200
        assert forgot.get_json() == {"success": True, "message": "Reset Email Sent"}

        assert len(sender.sent) == 1
        _, send_to, _, subject, html_body = sender.sent[0]
        assert send_to == "ada@example.com"
        assert subject == "Password Reset Request"
        assert "http://frontend.test/resetpassword/" in html_body
        raw_token = _RESET_LINK.search(html_body).group(1)

        session = SessionLocal()
        try:
            stored = session.query(ResetToken).one()
            assert stored.token_hash != raw_token
        finally:
            session.close()

        reset = client.put(
            f"/api/users/resetpassword/{raw_token}", json={"password": "brandnew"}
        )
        assert reset.status_code == 200
        assert reset.get_json()["message"] == "Password Reset Successful, Please Login"

        again = client.put(
            f"/api/users/resetpassword/{raw_token}", json={"password": "another1"}
        )
        assert again.status_code == 404
        assert again.get_json()["message"] == "Invalid or expired token"

        old = client.post(
            "/api/users/login", json={"email": "ada@example.com", "password": "secret1"}
        )
        assert old.status_code == 400
        new = client.post(
            "/api/users/login", json={"email": "ada@example.com", "password": "brandnew"}
        )
        assert new.status_code == 200

    session = SessionLocal()
    try:
        assert session.query(ResetToken).count() == 0
    finally:
        session.close()


def test_product_crud_is_owner_scoped(app: Flask) -> None:
    with app.test_client() as client:
        owner = _register(client)["token"]
        other = _register(client, email="bob@example.com")["token"]
        client.delete_cookie("token")

        unauthenticated = client.post("/api/products", json={"name": "Widget"})
        assert unauthenticated.status_code == 401

        incomplete = client.post(
            "/api/products", json={"name": "Widget"}, headers=_bearer(owner)
        )
        assert incomplete.status_code == 400
        assert incomplete.get_json()["message"] == "Please fill in all fields"

        created = client.post(
            "/api/products",
            data={
                "name": "Widget",
                "category": "Tools",
                "quantity": "4",
                "price": "19.99",
                "sku": "",
                "image": (io.BytesIO(b"\x89PNG fake image"), "widget.png"),
            },
            content_type="multipart/form-data",
            headers=_bearer(owner),
        )
        assert created.status_code == 201, created.get_json()
        product = created.get_json()
        assert product["price"] == 19.99
        assert product["sku"] is None
        image_path = product["image"]["filePath"]
        assert image_path.startswith("/uploads/")
        assert client.get(image_path).data == b"\x89PNG fake image"

        listed = client.get("/api/products", headers=_bearer(owner))
        assert [item["_id"] for item in listed.get_json()] == [product["_id"]]
        assert client.get("/api/products", headers=_bearer(other)).get_json() == []

        url = f"/api/products/{product['_id']}"
        assert client.get(url, headers=_bearer(other)).status_code == 401
        assert client.patch(url, json={"quantity": 0}, headers=_bearer(other)).status_code == 401
        assert client.delete(url, headers=_bearer(other)).status_code == 401

        patched = client.patch(url, json={"quantity": 0}, headers=_bearer(owner))
        assert patched.status_code == 200
        assert patched.get_json()["quantity"] == 0
        assert patched.get_json()["name"] == "Widget"

        deleted = client.delete(url, headers=_bearer(owner))
        assert deleted.status_code == 200
        assert deleted.get_json()["message"] == "Product removed"
        assert client.get(url, headers=_bearer(owner)).status_code == 404
        assert client.get(image_path).status_code == 404

    session = SessionLocal()
    try:
        assert session.query(Product).count() == 0
    finally:
        session.close()


def test_health_and_metrics(app: Flask) -> None:
    with app.test_client() as client:
        health = client.get("/api/health")
        assert health.status_code == 200
        assert health.get_json()["database"] == "ok"

        metrics = client.get("/api/metrics")
        assert metrics.status_code == 200
        assert b"stockroom_requests_total" in metrics.data
