# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from stockroom.application.services.password_hashing import WerkzeugPasswordHasher
from stockroom.application.services.reset_tokens import ResetTokenService
from stockroom.application.services.session_tokens import JwtSessionTokenService
from stockroom.application.use_cases.products.create_product import CreateProductUseCase
from stockroom.application.use_cases.products.delete_product import DeleteProductUseCase
from stockroom.application.use_cases.products.get_product import GetProductUseCase
from stockroom.application.use_cases.products.list_products import ListProductsUseCase
from stockroom.application.use_cases.products.update_product import UpdateProductUseCase
from stockroom.application.use_cases.users.change_password import ChangePasswordUseCase
from stockroom.application.use_cases.users.forgot_password import ForgotPasswordUseCase
from stockroom.application.use_cases.users.get_profile import GetProfileUseCase
from stockroom.application.use_cases.users.login_status import LoginStatusUseCase
from stockroom.application.use_cases.users.login_user import LoginUserUseCase
from stockroom.application.use_cases.users.logout_user import LogoutUserUseCase
from stockroom.application.use_cases.users.register_user import RegisterUserUseCase
from stockroom.application.use_cases.users.reset_password import ResetPasswordUseCase
from stockroom.application.use_cases.users.update_profile import UpdateProfileUseCase
from stockroom.domain.products.repositories import ImageStore
from stockroom.domain.users.repositories import EmailSender
from stockroom.infrastructure.mailer import SmtpEmailSender
from stockroom.infrastructure.repositories.products.sqlalchemy_product_repository import (
    SqlAlchemyProductRepository,
)
from stockroom.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyResetTokenRepository,
    SqlAlchemyUserRepository,
)
from stockroom.infrastructure.storage import LocalImageStorage
from stockroom.interfaces.http.controllers.products_controller import ProductsController
from stockroom.interfaces.http.controllers.users_controller import UsersController
from stockroom.shared.config import AppConfig, load_config


class Container:
    """Lazily wires the object graph.

    Collaborators can be swapped by plain assignment before first use,
    e.g. ``container.email_sender = RecordingSender()``.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    # Collaborators

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def reset_token_repository(self) -> SqlAlchemyResetTokenRepository:
        return SqlAlchemyResetTokenRepository()

    @cached_property
    def product_repository(self) -> SqlAlchemyProductRepository:
        return SqlAlchemyProductRepository()

    @cached_property
    def email_sender(self) -> EmailSender:
        return SmtpEmailSender(self.config.email)

    @cached_property
    def image_store(self) -> ImageStore:
        return LocalImageStorage(self.config.storage.uploads_dir, self.config.storage.uploads_url)

    # Services

    @cached_property
    def session_tokens(self) -> JwtSessionTokenService:
        return JwtSessionTokenService(
            self.config.auth.jwt_secret, self.config.auth.session_ttl
        )

    @cached_property
    def reset_tokens(self) -> ResetTokenService:
        return ResetTokenService(
            tokens=self.reset_token_repository,
            ttl_seconds=self.config.auth.reset_token_ttl,
        )

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            sessions=self.session_tokens,
            password_hasher=self.password_hasher,
            password_min_length=self.config.auth.password_min_length,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_tokens,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_tokens)

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    @cached_property
    def login_status_use_case(self) -> LoginStatusUseCase:
        return LoginStatusUseCase(sessions=self.session_tokens)

    @cached_property
    def update_profile_use_case(self) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(users=self.user_repository)

    @cached_property
    def change_password_use_case(self) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            password_min_length=self.config.auth.password_min_length,
        )

    @cached_property
    def forgot_password_use_case(self) -> ForgotPasswordUseCase:
        return ForgotPasswordUseCase(
            users=self.user_repository,
            reset_tokens=self.reset_tokens,
            email_sender=self.email_sender,
            frontend_url=self.config.frontend_url,
            sender_address=self.config.email.user,
        )

    @cached_property
    def reset_password_use_case(self) -> ResetPasswordUseCase:
        return ResetPasswordUseCase(
            users=self.user_repository,
            reset_tokens=self.reset_tokens,
            password_hasher=self.password_hasher,
            password_min_length=self.config.auth.password_min_length,
        )

    # Product use cases

    @cached_property
    def create_product_use_case(self) -> CreateProductUseCase:
        return CreateProductUseCase(products=self.product_repository, images=self.image_store)

    @cached_property
    def list_products_use_case(self) -> ListProductsUseCase:
        return ListProductsUseCase(products=self.product_repository)

    @cached_property
    def get_product_use_case(self) -> GetProductUseCase:
        return GetProductUseCase(products=self.product_repository)

    @cached_property
    def update_product_use_case(self) -> UpdateProductUseCase:
        return UpdateProductUseCase(products=self.product_repository, images=self.image_store)

    @cached_property
    def delete_product_use_case(self) -> DeleteProductUseCase:
        return DeleteProductUseCase(products=self.product_repository, images=self.image_store)

    # Controllers

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            session_tokens=self.session_tokens,
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            get_profile_use_case=self.get_profile_use_case,
            login_status_use_case=self.login_status_use_case,
            update_profile_use_case=self.update_profile_use_case,
            change_password_use_case=self.change_password_use_case,
            forgot_password_use_case=self.forgot_password_use_case,
            reset_password_use_case=self.reset_password_use_case,
        )

    @cached_property
    def products_controller(self) -> ProductsController:
        return ProductsController(
            session_tokens=self.session_tokens,
            create_use_case=self.create_product_use_case,
            list_use_case=self.list_products_use_case,
            get_use_case=self.get_product_use_case,
            update_use_case=self.update_product_use_case,
            delete_use_case=self.delete_product_use_case,
        )


__all__ = ["Container"]
