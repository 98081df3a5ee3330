from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from app.data.database import get_db
from app.services.user_service import UserService
from app.domain.schemas import UserIn, UserRead

router = APIRouter(prefix="/api/users", tags=["users"])

@router.get("", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_users()

@router.post("", response_model=UserRead, status_code=201)
def create_user(payload: UserIn, db: Session = Depends(get_db)):
    return UserService(db).create_user(payload)

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return UserService(db).get_user(user_id)

@router.put("/{user_id}", response_model=UserRead)
def update_user(user_id: str, payload: UserIn, db: Session = Depends(get_db)):
    return UserService(db).update_user(user_id, payload)

@router.delete("/{user_id}")
def delete_user(user_id: str, db: Session = Depends(get_db)):
    UserService(db).delete_user(user_id)
    return Response(status_code=200)
