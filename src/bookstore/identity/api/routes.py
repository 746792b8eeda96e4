"""FastAPI endpoints for authentication and user administration."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from bookstore.api.dependencies import current_user, token_service
from bookstore.api.schemas import MessageResponse
from bookstore.identity.administration import RemoveUser, UpdateUser
from bookstore.identity.api.schemas import (
    AuthResponse,
    CreateUserRequest,
    LoginRequest,
    RegisterRequest,
    UpdateUserRequest,
    UserRecord,
    user_record,
)
from bookstore.identity.credentials import authenticate, hash_password
from bookstore.identity.registration import CreateUser, RegisterUser
from bookstore.identity.tokens import Identity, TokenService
from bookstore.identity.user import User

auth_router = APIRouter(prefix="/auth", tags=["auth"])
admin_users_router = APIRouter(prefix="/admin/users", tags=["admin"], dependencies=[Depends(current_user)])


@auth_router.post("/register", status_code=201, response_model=AuthResponse)
def register(body: RegisterRequest, tokens: TokenService = Depends(token_service)) -> AuthResponse:
    command = RegisterUser(username=body.username, email=body.email, password_hash=hash_password(body.password))
    user_id = current_domain.process(command, asynchronous=False)

    user = current_domain.repository_for(User).get(user_id)
    return AuthResponse(token=tokens.issue(Identity.of(user)), user=user_record(user))


@auth_router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, tokens: TokenService = Depends(token_service)) -> AuthResponse:
    identity = authenticate(body.email, body.password)
    user = current_domain.repository_for(User).find_by_email(identity.subject)
    return AuthResponse(token=tokens.issue(identity), user=user_record(user))


@auth_router.get("/me", response_model=UserRecord)
def me(user: User = Depends(current_user)) -> UserRecord:
    return user_record(user)


@auth_router.post("/logout", response_model=MessageResponse)
def logout() -> MessageResponse:
    # Tokens are stateless; the client simply forgets its token
    return MessageResponse(message="Logged out")


@admin_users_router.get("", response_model=list[UserRecord])
def list_users() -> list[UserRecord]:
    return [user_record(user) for user in current_domain.repository_for(User).all_users()]


@admin_users_router.post("", status_code=201, response_model=UserRecord)
def create_user(body: CreateUserRequest) -> UserRecord:
    command = CreateUser(
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return user_record(current_domain.repository_for(User).get(user_id))


@admin_users_router.put("/{user_id}", response_model=UserRecord)
def update_user(user_id: str, body: UpdateUserRequest) -> UserRecord:
    command = UpdateUser(user_id=user_id, username=body.username, email=body.email, role=body.role)
    current_domain.process(command, asynchronous=False)
    return user_record(current_domain.repository_for(User).get(user_id))


@admin_users_router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str) -> MessageResponse:
    current_domain.process(RemoveUser(user_id=user_id), asynchronous=False)
    return MessageResponse(message="User deleted")
