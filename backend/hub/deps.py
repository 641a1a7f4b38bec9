# backend/hub/deps.py
"""
Request dependencies shared by the routers.

Authentication happens upstream: the proxy in front of the hub verifies the
session and forwards the user id in ``X-User-Id``. Every workspace query is
filtered on that id, which is the only access rule the data has.
"""
from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from hub.db import get_db
from hub.models import Profile
from hub.services.gateway import GatewayClient

log = logging.getLogger(__name__)


def get_gateway(request: Request) -> GatewayClient:
    return request.app.state.gateway


def current_user_id(
    x_user_id: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> UUID:
    if not x_user_id:
        raise HTTPException(401, detail="missing X-User-Id")
    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise HTTPException(401, detail="invalid X-User-Id")

    # First request from a user creates their profile row.
    if db.get(Profile, user_id) is None:
        db.add(Profile(id=user_id, email=x_user_email, full_name=x_user_name))
        db.commit()
        log.info("Created profile for user %s", user_id)
    return user_id
