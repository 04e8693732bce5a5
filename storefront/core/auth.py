# storefront/core/auth.py

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.models.users import AdminUser
from storefront.core.jwt import decode_admin_token
from storefront.core.oauth2 import oauth2_scheme


def get_current_admin(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> AdminUser:
    admin_id = decode_admin_token(token)

    if admin_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    admin = db.query(AdminUser).filter(AdminUser.id == admin_id).first()

    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return admin
