from fastapi import APIRouter, Depends

from app.models.user import User
from app.schemas.user import UserSchema
from app.utils import deps

router = APIRouter()

@router.get("/user", response_model=UserSchema)
async def get_authenticated_user(current_user: User = Depends(deps.get_current_user)):
    return current_user
