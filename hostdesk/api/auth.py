"""Authentication API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, status
import structlog

from hostdesk.api.deps import get_session
from hostdesk.auth.session import StaffSession
from hostdesk.errors import ApiError
from hostdesk.schemas.auth import AuthUser, LoginRequest, SessionResponse

router = APIRouter()
logger = structlog.get_logger()


async def get_current_staff(session: StaffSession = Depends(get_session)) -> AuthUser:
    """Get the logged-in staff member"""
    if not session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not session.user.is_staff:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Staff access required",
        )
    return session.user


@router.post("/login", response_model=SessionResponse)
async def login(
    request: LoginRequest,
    session: StaffSession = Depends(get_session),
):
    """Log in against the restaurant API and persist the session"""
    try:
        user = await session.login(request.email, request.password)
    except ApiError as e:
        if e.status_code in (400, 401, 403):
            logger.info("Login rejected", email=request.email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )
        raise

    return SessionResponse(authenticated=True, user=user)


@router.post("/logout")
async def logout(session: StaffSession = Depends(get_session)):
    """Forget the stored session"""
    session.logout()
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=SessionResponse)
async def get_current_session(session: StaffSession = Depends(get_session)):
    """Current session, if any"""
    return SessionResponse(authenticated=session.is_authenticated, user=session.user)
