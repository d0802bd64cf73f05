from __future__ import annotations

import os
import tempfile
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from pathlib import Path

import pytest

_TMP = Path(tempfile.mkdtemp(prefix="stockroom-tests-"))

# Must be set before stockroom.shared.config is first loaded
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["LOG_FILE"] = str(_TMP / "app.log")
os.environ["JWT_SECRET"] = "test-secret-key-not-for-production"
os.environ["UPLOADS_DIR"] = str(_TMP / "uploads")
os.environ["FRONTEND_URL"] = "http://frontend.test"
os.environ["EMAIL_USER"] = "noreply@stockroom.test"

from stockroom.application.services.reset_tokens import ResetTokenService  # noqa: E402
from stockroom.application.services.session_tokens import JwtSessionTokenService  # noqa: E402
from stockroom.domain.products.entities import Product  # noqa: E402
from stockroom.domain.products.repositories import StoredImage  # noqa: E402
from stockroom.domain.users.entities import ResetToken, User  # noqa: E402
from stockroom.shared.errors import DeliveryError, NotFoundError  # noqa: E402


class FakeClock:
    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now = self.now + timedelta(**delta)


class InMemoryUserRepository:
    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    def add(self, user: User) -> User:
        new_user = replace(user, id=self._seq)
        self._seq += 1
        self.users[new_user.id] = new_user
        return new_user

    def save(self, user: User) -> User:
        if user.id not in self.users:
            raise NotFoundError("User not found")
        self.users[user.id] = user
        return user


class InMemoryResetTokenRepository:
    def __init__(self) -> None:
        self.records: dict[int, ResetToken] = {}

    def replace_for_user(self, token: ResetToken) -> None:
        self.records[token.user_id] = token

    def pop_live(self, token_hash: str, now: datetime) -> ResetToken | None:
        for user_id, record in list(self.records.items()):
            if record.token_hash == token_hash and record.is_live(now):
                return self.records.pop(user_id)
        return None


class DeterministicHasher:
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class RecordingEmailSender:
    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[dict[str, str]] = []
        self.fail = fail

    def send(
        self, sent_from: str, send_to: str, reply_to: str, subject: str, html_body: str
    ) -> None:
        if self.fail:
            raise DeliveryError()
        self.sent.append(
            {
                "from": sent_from,
                "to": send_to,
                "reply_to": reply_to,
                "subject": subject,
                "html": html_body,
            }
        )


class InMemoryProductRepository:
    def __init__(self) -> None:
        self.products: dict[int, Product] = {}
        self._seq = 1

    def add(self, product: Product) -> Product:
        new_product = replace(product, id=self._seq)
        self._seq += 1
        self.products[new_product.id] = new_product
        return new_product

    def find_by_id(self, product_id: int) -> Product | None:
        return self.products.get(product_id)

    def list_for_owner(self, owner_id: int) -> list[Product]:
        items = [p for p in self.products.values() if p.owner_id == owner_id]
        return sorted(items, key=lambda p: p.id, reverse=True)

    def save(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    def delete(self, product_id: int) -> None:
        self.products.pop(product_id, None)


class FakeImageStore:
    def __init__(self, *, fail_upload: bool = False, fail_delete: bool = False) -> None:
        self.files: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_upload = fail_upload
        self.fail_delete = fail_delete

    def upload(self, filename: str, data: bytes, content_type: str) -> StoredImage:
        if self.fail_upload:
            raise OSError("bucket unavailable")
        public_id = f"img-{len(self.files) + 1}"
        self.files[public_id] = data
        return StoredImage(public_id=public_id, url=f"https://img.test/{public_id}")

    def delete(self, public_id: str) -> None:
        if self.fail_delete:
            raise OSError("bucket unavailable")
        self.deleted.append(public_id)
        self.files.pop(public_id, None)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def reset_repo() -> InMemoryResetTokenRepository:
    return InMemoryResetTokenRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def mailer() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture()
def sessions(clock: FakeClock) -> JwtSessionTokenService:
    return JwtSessionTokenService("unit-test-secret", 24 * 60 * 60, clock=clock)


@pytest.fixture()
def reset_tokens(
    reset_repo: InMemoryResetTokenRepository, clock: FakeClock
) -> ResetTokenService:
    return ResetTokenService(tokens=reset_repo, ttl_seconds=30 * 60, clock=clock)


@pytest.fixture()
def products() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture()
def images() -> FakeImageStore:
    return FakeImageStore()


@pytest.fixture()
def make_product(products: InMemoryProductRepository):
    def _make(owner_id: int, **overrides) -> Product:
        fields = {
            "id": 0,
            "owner_id": owner_id,
            "name": "Widget",
            "category": "Tools",
            "quantity": 3,
            "price": Decimal("9.99"),
        }
        fields.update(overrides)
        return products.add(Product(**fields))

    return _make
