# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from sqlalchemy.exc import IntegrityError

from stockroom.domain.users.entities import ResetToken as DomainResetToken
from stockroom.domain.users.entities import User as DomainUser
from stockroom.domain.users.exceptions import EmailAlreadyRegisteredError, UserNotFoundError
from stockroom.domain.users.repositories import ResetTokenRepository, UserRepository
from stockroom.infrastructure.db.models import ResetToken, User
from stockroom.infrastructure.db.session import session_scope
from stockroom.utils.clock import as_utc


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
        photo=row.photo,
        phone=row.phone,
        bio=row.bio,
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        with session_scope() as session:
            row = User(
                name=user.name,
                email=user.email,
                password_hash=user.password_hash,
                photo=user.photo,
                phone=user.phone,
                bio=user.bio,
                created_at=user.created_at,
            )
            session.add(row)
            try:
                session.flush()
            except IntegrityError as exc:
                # lost a race with a concurrent registration
                raise EmailAlreadyRegisteredError() from exc
            session.refresh(row)
            return _to_domain(row)

    def save(self, user: DomainUser) -> DomainUser:
        with session_scope() as session:
            row = session.get(User, user.id)
            if row is None:
                raise UserNotFoundError()
            row.name = user.name
            row.password_hash = user.password_hash
            row.photo = user.photo
            row.phone = user.phone
            row.bio = user.bio
            session.flush()
            return _to_domain(row)


class SqlAlchemyResetTokenRepository(ResetTokenRepository):
    def replace_for_user(self, token: DomainResetToken) -> None:
        with session_scope() as session:
            session.query(ResetToken).filter(ResetToken.user_id == token.user_id).delete()
            session.add(
                ResetToken(
                    user_id=token.user_id,
                    token_hash=token.token_hash,
                    created_at=token.created_at,
                    expires_at=token.expires_at,
                )
            )

    def pop_live(self, token_hash: str, now: datetime) -> DomainResetToken | None:
        with session_scope() as session:
            row = (
                session.query(ResetToken)
                .filter(ResetToken.token_hash == token_hash, ResetToken.expires_at > now)
                .with_for_update()
                .first()
            )
            if row is None:
                return None
            record = DomainResetToken(
                user_id=row.user_id,
                token_hash=row.token_hash,
                created_at=as_utc(row.created_at),
                expires_at=as_utc(row.expires_at),
            )
            session.delete(row)
            return record
