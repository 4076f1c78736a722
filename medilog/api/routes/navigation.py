"""Route guard and dashboard chrome for the frontend router."""
from fastapi import APIRouter, Depends, Query

from medilog.api.deps import get_gateway, require_session
from medilog.models.schemas import Shell
from medilog.models.user import User
from medilog.services.auth_service import AuthGateway
from medilog.services.navigation import render_shell

router = APIRouter(tags=["navigation"])


@router.get("/navigate")
async def navigate(path: str = Query(...), gateway: AuthGateway = Depends(get_gateway)):
    """
    Called on every path change. `redirect` is null when the client may
    stay on `path`.
    """
    return {"path": path, "redirect": gateway.guard(path)}


@router.get("/shell", response_model=Shell)
async def shell(path: str = Query("/"), user: User = Depends(require_session)):
    return render_shell(user, path)
