# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime
from typing import TypeVar

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, ValidationError

from stockroom.application.use_cases.users.change_password import ChangePasswordUseCase
from stockroom.application.use_cases.users.forgot_password import ForgotPasswordUseCase
from stockroom.application.use_cases.users.get_profile import GetProfileUseCase
from stockroom.application.use_cases.users.login_status import LoginStatusUseCase
from stockroom.application.use_cases.users.login_user import LoginUserUseCase
from stockroom.application.use_cases.users.logout_user import LogoutUserUseCase
from stockroom.application.use_cases.users.register_user import RegisterUserUseCase
from stockroom.application.use_cases.users.reset_password import ResetPasswordUseCase
from stockroom.application.use_cases.users.update_profile import UpdateProfileUseCase
from stockroom.domain.users.entities import SessionCredential, User
from stockroom.domain.users.repositories import SessionTokenService
from stockroom.infrastructure.auth import (
    SESSION_COOKIE,
    auth_required,
    authed_request,
    request_token,
)
from stockroom.interfaces.http.dto.users import (
    AuthSuccessDTO,
    ChangePasswordRequestDTO,
    ForgotPasswordRequestDTO,
    LoginRequestDTO,
    MessageDTO,
    RegisterRequestDTO,
    ResetPasswordRequestDTO,
    UpdateProfileRequestDTO,
    UserProfileDTO,
)
from stockroom.shared.config import load_config
from stockroom.shared.errors.validation import raise_validation_error
from stockroom.shared.logging import logger


T = TypeVar("T", bound=BaseModel)


def _parse(dto_type: type[T]) -> T:
    try:
        return dto_type.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


def _set_session_cookie(response: Response, credential: SessionCredential) -> None:
    config = load_config()
    response.set_cookie(
        SESSION_COOKIE,
        credential.token,
        path="/",
        httponly=True,
        expires=credential.expires_at,
        samesite=config.security.cookie_samesite,
        secure=config.security.cookie_secure,
    )


def _expire_session_cookie(response: Response) -> None:
    config = load_config()
    response.set_cookie(
        SESSION_COOKIE,
        "",
        path="/",
        httponly=True,
        expires=datetime(1970, 1, 1, tzinfo=UTC),
        samesite=config.security.cookie_samesite,
        secure=config.security.cookie_secure,
    )


def _auth_response(user: User, credential: SessionCredential, status: int) -> tuple[Response, int]:
    payload = AuthSuccessDTO.from_credential(user, credential)
    response = jsonify(payload.model_dump(by_alias=True))
    _set_session_cookie(response, credential)
    return response, status


def _profile_response(user: User) -> tuple[Response, int]:
    return jsonify(UserProfileDTO.from_user(user).model_dump(by_alias=True)), 200


def _message(text: str) -> Response:
    return jsonify(MessageDTO(message=text).model_dump())


class UsersController:
    def __init__(
        self,
        *,
        session_tokens: SessionTokenService,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        get_profile_use_case: GetProfileUseCase,
        login_status_use_case: LoginStatusUseCase,
        update_profile_use_case: UpdateProfileUseCase,
        change_password_use_case: ChangePasswordUseCase,
        forgot_password_use_case: ForgotPasswordUseCase,
        reset_password_use_case: ResetPasswordUseCase,
    ) -> None:
        self.session_tokens = session_tokens
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._get_profile_use_case = get_profile_use_case
        self._login_status_use_case = login_status_use_case
        self._update_profile_use_case = update_profile_use_case
        self._change_password_use_case = change_password_use_case
        self._forgot_password_use_case = forgot_password_use_case
        self._reset_password_use_case = reset_password_use_case

    def register(self) -> tuple[Response, int]:
        dto = _parse(RegisterRequestDTO)
        user, credential = self._register_use_case.execute(dto.name, dto.email, dto.password)
        logger.info(f"users.register: responded (user_id={user.id})")
        return _auth_response(user, credential, 201)

    def login(self) -> tuple[Response, int]:
        dto = _parse(LoginRequestDTO)
        user, credential = self._login_use_case.execute(dto.email, dto.password)
        return _auth_response(user, credential, 200)

    def logout(self) -> tuple[Response, int]:
        self._logout_use_case.execute(request_token())
        response = _message("Successfully Logged Out")
        _expire_session_cookie(response)
        return response, 200

    @auth_required
    def get_user(self) -> tuple[Response, int]:
        user = self._get_profile_use_case.execute(authed_request().user_id)
        return _profile_response(user)

    def login_status(self) -> tuple[Response, int]:
        return jsonify(self._login_status_use_case.execute(request_token())), 200

    @auth_required
    def update_user(self) -> tuple[Response, int]:
        dto = _parse(UpdateProfileRequestDTO)
        user = self._update_profile_use_case.execute(
            authed_request().user_id,
            name=dto.name,
            phone=dto.phone,
            bio=dto.bio,
            photo=dto.photo,
        )
        return _profile_response(user)

    @auth_required
    def change_password(self) -> tuple[Response, int]:
        dto = _parse(ChangePasswordRequestDTO)
        self._change_password_use_case.execute(
            authed_request().user_id, dto.old_password, dto.password
        )
        return _message("Password change successful"), 200

    def forgot_password(self) -> tuple[Response, int]:
        dto = _parse(ForgotPasswordRequestDTO)
        self._forgot_password_use_case.execute(dto.email)
        return jsonify({"success": True, "message": "Reset Email Sent"}), 200

    def reset_password(self, reset_token: str) -> tuple[Response, int]:
        dto = _parse(ResetPasswordRequestDTO)
        self._reset_password_use_case.execute(reset_token, dto.password)
        return _message("Password Reset Successful, Please Login"), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/users")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["GET"])
        bp.add_url_rule("/getuser", view_func=self.get_user, methods=["GET"])
        bp.add_url_rule("/loggedin", view_func=self.login_status, methods=["GET"])
        bp.add_url_rule("/updateuser", view_func=self.update_user, methods=["PATCH"])
        bp.add_url_rule("/changepassword", view_func=self.change_password, methods=["PATCH"])
        bp.add_url_rule("/forgotpassword", view_func=self.forgot_password, methods=["POST"])
        bp.add_url_rule(
            "/resetpassword/<string:reset_token>",
            view_func=self.reset_password,
            methods=["PUT"],
        )
        return bp
