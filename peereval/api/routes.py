"""HTTP route definitions for the account API."""

from __future__ import annotations

import logging
from datetime import datetime

import redis
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import get_settings
from ..domain.account import AccountAttributes
from ..domain.profile import StudentProfileAttributes
from ..domain.service import AccountService
from ..security.rate_limiter import CREATE_ACCOUNT, ISSUE_TOKEN, RateLimit, SlidingWindowRateLimiter
from ..security.redis_rate_limiter import RedisFixedWindowRateLimiter
from ..util.errors import (
    EntityAlreadyExistsError,
    EntityDoesNotExistError,
    InvalidParametersError,
)
from ..util.sanitization import sanitize_google_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")


class ProfileResponse(BaseModel):
    """Serialised representation of a student profile."""

    google_id: str
    short_name: str
    email: str
    institute: str
    nationality: str
    gender: str
    more_info: str
    picture_key: str
    modified_date: datetime

    @classmethod
    def from_domain(cls, profile: StudentProfileAttributes) -> "ProfileResponse":
        return cls(
            google_id=profile.google_id,
            short_name=profile.short_name,
            email=profile.email,
            institute=profile.institute,
            nationality=profile.nationality,
            gender=profile.gender,
            more_info=profile.more_info,
            picture_key=profile.picture_key,
            modified_date=profile.modified_date,
        )


class AccountResponse(BaseModel):
    """Serialised representation of an account and its profile."""

    google_id: str
    name: str
    email: str
    institute: str
    is_instructor: bool
    created_at: datetime
    student_profile: ProfileResponse | None = None

    @classmethod
    def from_domain(cls, account: AccountAttributes) -> "AccountResponse":
        """Build a response model from account attributes."""
        profile = account.student_profile
        return cls(
            google_id=account.google_id,
            name=account.name,
            email=account.email,
            institute=account.institute,
            is_instructor=account.is_instructor,
            created_at=account.created_at,
            student_profile=None if profile is None else ProfileResponse.from_domain(profile),
        )


class AccountListResponse(BaseModel):
    items: list[AccountResponse]


class ProfileRequest(BaseModel):
    """Editable profile fields; omitted fields are left empty."""

    short_name: str = ""
    email: str = ""
    institute: str = ""
    nationality: str = ""
    gender: str = "other"
    more_info: str = ""
    picture_key: str = ""


class CreateAccountRequest(BaseModel):
    """Payload accepted when registering an account.

    Values are validated by the domain layer so that every malformed field is
    reported at once.
    """

    google_id: str
    name: str
    email: str
    institute: str
    is_instructor: bool = True
    student_profile: ProfileRequest | None = None


class UpdateAccountRequest(BaseModel):
    name: str
    email: str
    institute: str
    is_instructor: bool


class TokenRequest(BaseModel):
    """JSON body used to request a session token for an account."""

    google_id: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    google_id: str
    is_instructor: bool


settings = get_settings()


RATE_LIMITS = (
    RateLimit(CREATE_ACCOUNT, settings.rate_limit_create_requests, settings.rate_limit_create_window_seconds),
    RateLimit(ISSUE_TOKEN, settings.rate_limit_token_requests, settings.rate_limit_token_window_seconds),
)


def _build_rate_limiter() -> SlidingWindowRateLimiter | RedisFixedWindowRateLimiter:
    """Instantiate the configured rate limiter backend, preferring Redis when available."""
    if settings.rate_limit_backend == "redis" and settings.redis_url:
        try:
            client = redis.from_url(settings.redis_url)
            client.ping()
            logger.info("rate limiter configured for redis backend at %s", settings.redis_url)
            return RedisFixedWindowRateLimiter(client, RATE_LIMITS)
        except redis.RedisError as exc:
            logger.warning("redis rate limiter unavailable, falling back to in-memory: %s", exc)

    logger.info("rate limiter using in-memory backend")
    return SlidingWindowRateLimiter(RATE_LIMITS)


rate_limiter = _build_rate_limiter()


def get_service(request: Request) -> AccountService:
    """Resolve the `AccountService` stored on the FastAPI application state."""
    service: AccountService = request.app.state.account_service
    return service


def resolve_google_id(google_id: str) -> str:
    """Normalise the Google ID from the path the same way stored IDs were normalised."""
    return sanitize_google_id(google_id)


def _to_profile_attributes(google_id: str, payload: ProfileRequest) -> StudentProfileAttributes:
    return StudentProfileAttributes.create(
        google_id=google_id,
        short_name=payload.short_name,
        email=payload.email,
        institute=payload.institute,
        nationality=payload.nationality,
        gender=payload.gender,
        more_info=payload.more_info,
        picture_key=payload.picture_key,
    )


@router.post("/accounts", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    request: Request,
    payload: CreateAccountRequest,
    service: AccountService = Depends(get_service),
):
    """Register an account; malformed fields are reported together."""
    client_host = request.client.host if request.client else "unknown"
    if not rate_limiter.allow(CREATE_ACCOUNT, client_host):
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail="rate limited")

    builder = AccountAttributes.builder(
        payload.google_id, payload.name, payload.email, payload.institute
    ).with_is_instructor(payload.is_instructor)
    if payload.student_profile is not None:
        builder.with_student_profile_attributes(
            _to_profile_attributes(payload.google_id, payload.student_profile)
        )
    account = builder.build()
    # the profile is keyed by the sanitized Google ID
    account.student_profile.google_id = account.google_id

    try:
        created = service.create_account(account)
    except InvalidParametersError as exc:
        return _invalid_parameters_response(exc)
    except EntityAlreadyExistsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return AccountResponse.from_domain(created)


@router.get("/accounts", response_model=AccountListResponse)
def list_accounts(
    instructors_only: bool = Query(default=True),
    service: AccountService = Depends(get_service),
) -> AccountListResponse:
    """List instructor accounts."""
    if not instructors_only:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="only instructor listing is supported"
        )
    return AccountListResponse(
        items=[AccountResponse.from_domain(account) for account in service.get_instructor_accounts()]
    )


@router.get("/accounts/{google_id}", response_model=AccountResponse)
def get_account(
    google_id: str = Depends(resolve_google_id), service: AccountService = Depends(get_service)
) -> AccountResponse:
    account = service.get_account(google_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="account not found")
    return AccountResponse.from_domain(account)


@router.put("/accounts/{google_id}", response_model=AccountResponse)
def update_account(
    payload: UpdateAccountRequest,
    google_id: str = Depends(resolve_google_id),
    service: AccountService = Depends(get_service),
):
    account = (
        AccountAttributes.builder(google_id, payload.name, payload.email, payload.institute)
        .with_is_instructor(payload.is_instructor)
        .with_student_profile_attributes(None)
        .build()
    )
    try:
        updated = service.update_account(account)
    except InvalidParametersError as exc:
        return _invalid_parameters_response(exc)
    except EntityDoesNotExistError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return AccountResponse.from_domain(updated)


@router.delete("/accounts/{google_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    google_id: str = Depends(resolve_google_id), service: AccountService = Depends(get_service)
) -> Response:
    service.delete_account(google_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/accounts/{google_id}/instructor", response_model=AccountResponse)
def make_instructor(
    google_id: str = Depends(resolve_google_id), service: AccountService = Depends(get_service)
) -> AccountResponse:
    try:
        account = service.make_account_instructor(google_id)
    except EntityDoesNotExistError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return AccountResponse.from_domain(account)


@router.delete("/accounts/{google_id}/instructor", response_model=AccountResponse)
def downgrade_instructor(
    google_id: str = Depends(resolve_google_id), service: AccountService = Depends(get_service)
) -> AccountResponse:
    try:
        account = service.downgrade_instructor_to_student(google_id)
    except EntityDoesNotExistError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return AccountResponse.from_domain(account)


@router.get("/accounts/{google_id}/profile", response_model=ProfileResponse)
def get_profile(
    google_id: str = Depends(resolve_google_id), service: AccountService = Depends(get_service)
) -> ProfileResponse:
    profile = service.get_student_profile(google_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="profile not found")
    return ProfileResponse.from_domain(profile)


@router.put("/accounts/{google_id}/profile", response_model=ProfileResponse)
def update_profile(
    payload: ProfileRequest,
    google_id: str = Depends(resolve_google_id),
    service: AccountService = Depends(get_service),
):
    try:
        profile = service.update_student_profile(_to_profile_attributes(google_id, payload))
    except InvalidParametersError as exc:
        return _invalid_parameters_response(exc)
    except EntityDoesNotExistError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return ProfileResponse.from_domain(profile)


@router.post("/token", response_model=TokenResponse)
def issue_token(payload: TokenRequest, service: AccountService = Depends(get_service)) -> TokenResponse:
    """Issue a signed session token for a registered account."""
    google_id = sanitize_google_id(payload.google_id)
    if not rate_limiter.allow(ISSUE_TOKEN, google_id):
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail="rate limited")
    try:
        token = service.issue_token(google_id)
    except EntityDoesNotExistError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return TokenResponse(
        access_token=token.access_token,
        expires_in=token.expires_in,
        google_id=token.google_id,
        is_instructor=token.is_instructor,
    )


def _invalid_parameters_response(exc: InvalidParametersError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "invalid parameters", "errors": exc.errors},
    )
