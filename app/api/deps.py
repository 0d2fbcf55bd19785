from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from app.core.config import settings
from app.core.security import verify_token
from app.db.session import SessionLocal
from app.schemas.user import CurrentUser
from app.services.rescore import RescoreCoordinator

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=settings.TOKEN_URL)


def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    payload = verify_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    return CurrentUser(id=str(user_id))


def get_rescore_coordinator() -> RescoreCoordinator:
    return RescoreCoordinator(
        SessionLocal,
        max_workers=settings.RESCORE_MAX_WORKERS,
        max_retries=settings.RESCORE_MAX_RETRIES,
    )
